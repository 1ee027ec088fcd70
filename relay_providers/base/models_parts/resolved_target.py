"""
ResolvedTarget DTO produced by the provider resolver.

Immutable once constructed; the credential is excluded from ``repr`` so the
target can be logged or printed in diagnostics without leaking secrets.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, Optional

from .provider_name import ProviderName


@dataclass(frozen=True)
class ResolvedTarget:
    """Where a completion goes and with which credential.

    Attributes:
        provider: Resolved :class:`ProviderName`.
        model: Non-empty model identifier.
        credential: API key (or placeholder for keyless backends such as Ollama).
        base_url: Optional base URL override; ``None`` selects the backend default.
        credential_source: Name of the environment variable the credential was
            read from (diagnostics only).
    """

    provider: ProviderName
    model: str
    credential: str = field(repr=False)
    base_url: Optional[str] = None
    credential_source: str = ""

    def describe(self) -> Dict[str, Any]:
        """Return a secret-free mapping for logs and verbose output."""
        return {
            "provider": self.provider.value,
            "model": self.model,
            "base_url": self.base_url,
            "credential_source": self.credential_source,
        }


__all__ = ["ResolvedTarget"]
