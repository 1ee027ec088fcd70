"""Deadline expiry error type.

A ``CancelledError`` specialisation raised when a token's wall-clock deadline
passes, so callers can tell a timeout apart from an explicit cancel.
"""

from __future__ import annotations

from .cancelled_error import CancelledError


class DeadlineExceededError(CancelledError):
    """Raised when the deadline attached to a cancellation token has elapsed."""


__all__ = ["DeadlineExceededError"]
