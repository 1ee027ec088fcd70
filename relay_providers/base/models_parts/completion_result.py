"""
CompletionResult DTO returned by completion backends.

Both the blocking and the streaming path return this shape; for streaming,
``text`` is the concatenation of every delta delivered to the sink.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict

from .usage import Usage


@dataclass(frozen=True)
class CompletionResult:
    """Final text plus usage for a single completion call.

    Attributes:
        text: Full completion text.
        usage: Token usage as reported by the backend (zero when unavailable).
        provider: Backend name (``"openai"``/``"ollama"``).
        model: Model identifier the request was sent with.

    Methods:
        to_dict: JSON shape used by the CLI's ``--json`` output.
    """

    text: str
    usage: Usage = field(default_factory=Usage)
    provider: str = ""
    model: str = ""

    def to_dict(self) -> Dict[str, Any]:
        """Return ``{provider, model, usage, text}`` for structured output."""
        return {
            "provider": self.provider,
            "model": self.model,
            "usage": self.usage.to_dict(),
            "text": self.text,
        }


__all__ = ["CompletionResult"]
