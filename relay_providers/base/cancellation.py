"""Cooperative cancellation primitives (public API facade).

Purpose
-------
Expose the cancellation constructs via the canonical
``relay_providers.base.cancellation`` import path while the concrete
implementations live under ``cancellation_parts``.

Notes
-----
- ``CancellationToken`` carries an explicit cancel flag and an optional
  wall-clock deadline. Backends poll it at every stream read iteration.
- ``CancelledError`` is raised by operations that observe a cancellation request;
  ``DeadlineExceededError`` is the deadline-expiry specialisation.
"""

from .cancellation_parts.cancelled_error import CancelledError
from .cancellation_parts.deadline_exceeded_error import DeadlineExceededError
from .cancellation_parts.cancellation_token import CancellationToken

__all__ = ["CancellationToken", "CancelledError", "DeadlineExceededError"]
