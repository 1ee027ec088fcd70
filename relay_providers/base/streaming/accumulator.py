"""Delta accumulation for streaming completions.

Collects deltas in arrival order, forwards each one to the caller's sink
synchronously, and keeps the latest usage record so a partial result can be
attached to errors at any point.
"""

from __future__ import annotations

from typing import Callable, List, Optional

from ..models import CompletionResult, Usage

DeltaSink = Callable[[str], None]


class DeltaAccumulator:
    """Ordered delta buffer with sink forwarding."""

    def __init__(self, on_delta: Optional[DeltaSink] = None, *, provider: str = "", model: str = "") -> None:
        self._on_delta = on_delta
        self._parts: List[str] = []
        self._provider = provider
        self._model = model
        self.usage = Usage()

    @property
    def emitted(self) -> int:
        """Number of non-empty deltas delivered so far."""
        return len(self._parts)

    @property
    def text(self) -> str:
        return "".join(self._parts)

    def emit(self, delta: Optional[str]) -> None:
        """Record ``delta`` and hand it to the sink (empty deltas are dropped)."""
        if not delta:
            return
        self._parts.append(delta)
        if self._on_delta is not None:
            self._on_delta(delta)

    def result(self) -> CompletionResult:
        """Snapshot the accumulated text and usage."""
        return CompletionResult(text=self.text, usage=self.usage, provider=self._provider, model=self._model)


__all__ = ["DeltaAccumulator", "DeltaSink"]
