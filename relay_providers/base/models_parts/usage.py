"""
Token usage record.

Counts are whatever the backend reported; nothing is estimated locally, so a
backend that cannot report usage yields the zero record.
"""
from __future__ import annotations

from dataclasses import dataclass, asdict
from typing import Dict


@dataclass(frozen=True)
class Usage:
    """Prompt/completion/total token counts (zero when unknown)."""

    prompt_tokens: int = 0
    completion_tokens: int = 0
    total_tokens: int = 0

    def to_dict(self) -> Dict[str, int]:
        """Return the JSON shape used in CLI output and log events."""
        return asdict(self)


__all__ = ["Usage"]
