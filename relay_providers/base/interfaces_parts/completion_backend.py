"""CompletionBackend Protocol (single-class module).

Defines the capability set every completion backend implements.
"""

from __future__ import annotations

from typing import Callable, Optional, Protocol, runtime_checkable

from ..cancellation import CancellationToken
from ..models import CompletionRequest, CompletionResult


@runtime_checkable
class CompletionBackend(Protocol):
    """Minimal interface for completion backends.

    Implementations build their wire request from :class:`CompletionRequest`,
    decode the response into :class:`CompletionResult`, and raise typed errors
    (``ProviderError``, ``CancelledError``) rather than returning error values.
    """

    @property
    def name(self) -> str:
        """Provider identifier reported in results, e.g. ``"openai"``."""
        ...

    def complete(
        self, request: CompletionRequest, *, token: Optional[CancellationToken] = None
    ) -> CompletionResult:
        """Run one blocking completion and return the full text and usage."""
        ...

    def stream(
        self,
        request: CompletionRequest,
        on_delta: Optional[Callable[[str], None]] = None,
        *,
        token: Optional[CancellationToken] = None,
    ) -> CompletionResult:
        """Stream a completion, calling ``on_delta`` per fragment in arrival order.

        Returns the concatenated text and final usage. Failures carry the
        partial result on the raised error's ``partial`` attribute.
        """
        ...

    def close(self) -> None:
        """Release transport resources owned by the backend."""
        ...


__all__ = ["CompletionBackend"]
