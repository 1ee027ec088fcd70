"""Cancellation error type.

Defines the public ``CancelledError`` used to signal cooperative cancellation
of a completion call. Kept isolated to satisfy one-class-per-file policy.
"""

from __future__ import annotations

from typing import Any, Optional


class CancelledError(RuntimeError):
    """Raised when an operation is cancelled cooperatively.

    This specialized error distinguishes cancellation from transport and decode
    failures. When raised from a streaming call, ``partial`` carries the text
    and usage accumulated before cancellation was observed.
    """

    def __init__(self, message: str = "operation cancelled", *, partial: Optional[Any] = None) -> None:
        super().__init__(message)
        self.partial = partial


__all__ = ["CancelledError"]
