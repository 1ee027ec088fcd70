"""Cooperative cancellation token implementation.

Exposes the ``CancellationToken`` class used by the completion backends to
terminate a blocking or streaming call early via cooperative polling. A token
may carry a wall-clock deadline; once it passes the token reports itself as
cancelled and the remaining time feeds per-call HTTP timeouts.
"""

from __future__ import annotations

import time
from threading import Lock
from typing import Any, List, Optional

from .state import State
from .cancelled_error import CancelledError
from .deadline_exceeded_error import DeadlineExceededError

DEADLINE_REASON = "deadline exceeded"


class CancellationToken:
    """A cooperative cancellation token with optional deadline and cascading.

    Thread-safe for basic ``cancel`` + ``raise_if_cancelled`` usage. Child tokens
    inherit cancellation when the parent is cancelled and never outlive the
    parent's deadline.
    """

    def __init__(
        self,
        *,
        parent: "CancellationToken | None" = None,
        deadline: Optional[float] = None,
    ) -> None:
        self._state = State(deadline=deadline)
        self._lock = Lock()
        self._children: List[CancellationToken] = []
        if parent is not None:
            parent.link_child(self)

    @classmethod
    def with_timeout(cls, seconds: Optional[float]) -> "CancellationToken":
        """Create a token whose deadline is ``seconds`` from now.

        ``None`` or a non-positive value yields a token without a deadline.
        """
        if seconds is None or seconds <= 0:
            return cls()
        return cls(deadline=time.monotonic() + float(seconds))

    @property
    def deadline(self) -> Optional[float]:
        """Monotonic timestamp after which the token counts as cancelled."""
        return self._state.deadline

    @property
    def deadline_exceeded(self) -> bool:
        """Whether the deadline (if any) has elapsed."""
        deadline = self._state.deadline
        return deadline is not None and time.monotonic() >= deadline

    @property
    def cancelled(self) -> bool:  # noqa: D401 - short form
        """Whether cancellation has been requested or the deadline elapsed."""
        return self._state.cancelled or self.deadline_exceeded

    @property
    def reason(self) -> str | None:  # noqa: D401 - short form
        """Reason string supplied at cancel time (if any)."""
        if self._state.cancelled:
            return self._state.reason
        if self.deadline_exceeded:
            return DEADLINE_REASON
        return None

    def remaining(self) -> Optional[float]:
        """Seconds left before the deadline (``None`` when unbounded, never negative)."""
        deadline = self._state.deadline
        if deadline is None:
            return None
        return max(0.0, deadline - time.monotonic())

    def cancel(self, reason: str | None = None) -> None:
        """Request cooperative cancellation and cascade to children."""
        with self._lock:
            if self._state.cancelled:
                return
            self._state.cancelled = True
            self._state.reason = reason
            children = list(self._children)
        for child in children:
            child.cancel(reason)

    def link_child(self, token: "CancellationToken") -> "CancellationToken":
        """Link a child token so parent cancellation cascades (returns child)."""
        with self._lock:
            self._children.append(token)
            should_cancel = self._state.cancelled
            reason = self._state.reason
            deadline = self._state.deadline
        if deadline is not None and (token.deadline is None or token.deadline > deadline):
            token._state.deadline = deadline
        if should_cancel:
            token.cancel(reason)
        return token

    def to_error(self, partial: Any = None) -> CancelledError:
        """Build the error describing this token's cancellation.

        An explicit ``cancel`` wins over deadline expiry. ``partial`` is attached
        to the error for streaming callers.
        """
        if self._state.cancelled:
            return CancelledError(self._state.reason or "operation cancelled", partial=partial)
        return DeadlineExceededError(DEADLINE_REASON, partial=partial)

    def raise_if_cancelled(self) -> None:
        """Raise ``CancelledError`` (or ``DeadlineExceededError``) if cancelled."""
        if self.cancelled:
            raise self.to_error()

    def child(self) -> "CancellationToken":
        """Create and link a child token (shortcut)."""
        return CancellationToken(parent=self)

    def __repr__(self) -> str:  # pragma: no cover - introspection aid
        return (
            f"CancellationToken(cancelled={self.cancelled}, "
            f"reason={self.reason!r}, remaining={self.remaining()!r})"
        )


__all__ = ["CancellationToken", "DEADLINE_REASON"]
