"""
Known provider identifiers.

Only ``openai`` and ``ollama`` have concrete completion backends; the
remaining members exist so resolution can name them (credential discovery,
prefix hints) before a backend is available.
"""
from __future__ import annotations

from enum import Enum


class ProviderName(str, Enum):
    """Enumerated provider identifiers (lowercase, stable)."""

    OPENAI = "openai"
    OLLAMA = "ollama"
    ANTHROPIC = "anthropic"
    GOOGLE = "google"
    AZUREOPENAI = "azureopenai"
    OPENROUTER = "openrouter"
    GROQ = "groq"
    MISTRAL = "mistral"
    TOGETHER = "together"
    COHERE = "cohere"

    @classmethod
    def parse(cls, value: str) -> "ProviderName":
        """Return the member for ``value`` (case-insensitive, surrounding space ignored).

        Raises ``ValueError`` for unknown names.
        """
        return cls(value.strip().lower())


__all__ = ["ProviderName"]
