"""relay_providers.config.env
=========================

Environment catalog: the static tables the resolver consults.

Purpose
-------
- Single source of truth for mapping provider identifiers to their credential
  environment variable names, and model-name prefixes to inferred providers.
- Name the unified variable family (``RELAY_*``) that short-circuits discovery.
- Offer small, pure lookup helpers over an explicit environment mapping.

Design Notes
------------
- ``ENV_MAP`` preserves declaration order; ``MODEL_HINTS`` is an ordered tuple
  and lookups return the first matching prefix, not the longest. With the
  current table ``gpt-4o`` matches ``gpt-`` before ``gpt-4``; both resolve to
  openai, so the order only matters if a future hint maps an overlapping
  prefix to a different provider.
- Ollama needs no credential and is deliberately absent from ``ENV_MAP``; it is
  selected through ``RELAY_PROVIDER``.
- Helpers read from the ``env`` mapping they are given and never write to it.
- ``uses_responses_api``/``omits_sampling`` are the openai model-routing
  predicates; the backend factory and the openai payload builders share them.

Failure Modes
-------------
- Lookups return ``None`` when nothing matches; callers decide whether that is
  an error.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Dict, List, Mapping, Optional, Tuple

from ..base.models import ProviderName
from .defaults import OPENAI_NO_SAMPLING_MODEL_PREFIXES, OPENAI_RESPONSES_MODEL_PREFIXES

# Unified variable family (highest precedence)
UNIFIED_API_KEY_ENV = "RELAY_API_KEY"
UNIFIED_MODEL_ENV = "RELAY_MODEL"
UNIFIED_PROVIDER_ENV = "RELAY_PROVIDER"
UNIFIED_BASE_URL_ENV = "RELAY_BASE_URL"
UNIFIED_MAX_TOKENS_ENV = "RELAY_MAX_TOKENS"
UNIFIED_TEMPERATURE_ENV = "RELAY_TEMPERATURE"
UNIFIED_TOP_P_ENV = "RELAY_TOP_P"

# Model-argument indirection sigil: "$NAME" reads the model id from env NAME
MODEL_ENV_SIGIL = "$"

# Canonical provider → credential env var mapping (declaration order matters
# only for display; discovery tie-breaks are alphabetical)
ENV_MAP: Dict[ProviderName, str] = {
    ProviderName.OPENAI: "OPENAI_API_KEY",
    ProviderName.ANTHROPIC: "ANTHROPIC_API_KEY",
    ProviderName.GOOGLE: "GOOGLE_API_KEY",
    ProviderName.AZUREOPENAI: "AZURE_OPENAI_API_KEY",
    ProviderName.OPENROUTER: "OPENROUTER_API_KEY",
    ProviderName.GROQ: "GROQ_API_KEY",
    ProviderName.MISTRAL: "MISTRAL_API_KEY",
    ProviderName.TOGETHER: "TOGETHER_API_KEY",
    ProviderName.COHERE: "COHERE_API_KEY",
}

# Ordered (prefix, provider) hints; first match wins
MODEL_HINTS: Tuple[Tuple[str, ProviderName], ...] = (
    ("gpt-", ProviderName.OPENAI),
    ("o4", ProviderName.OPENAI),
    ("gpt4", ProviderName.OPENAI),
    ("gpt-4", ProviderName.OPENAI),
    ("claude", ProviderName.ANTHROPIC),
    ("gemini", ProviderName.GOOGLE),
    ("mistral", ProviderName.MISTRAL),
    ("mixtral", ProviderName.MISTRAL),
    ("llama", ProviderName.GROQ),
)

# Provider → ordered tuple of base-URL env var names (first non-empty wins).
# Providers not listed use the ``<PROVIDER>_BASE_URL`` convention.
BASE_URL_ALIASES: Dict[ProviderName, Tuple[str, ...]] = {
    ProviderName.OLLAMA: ("OLLAMA_BASE_URL", "OLLAMA_HOST"),
    ProviderName.AZUREOPENAI: ("AZURE_OPENAI_BASE_URL", "AZURE_OPENAI_ENDPOINT"),
}


@dataclass(frozen=True)
class EnvironmentCatalog:
    """Read-only credential and hint tables used by the resolver.

    Tests (or embedders) may build their own catalog; the module-level
    ``DEFAULT_CATALOG`` wraps the tables above.
    """

    credentials: Mapping[ProviderName, str] = field(default_factory=lambda: MappingProxyType(dict(ENV_MAP)))
    hints: Tuple[Tuple[str, ProviderName], ...] = MODEL_HINTS

    def credential_env(self, provider: ProviderName) -> Optional[str]:
        """Return the credential variable for ``provider`` (``None`` if keyless)."""
        return self.credentials.get(provider)

    def credential_env_names(self) -> List[str]:
        """Return every credential variable name, sorted, for error messages."""
        return sorted(self.credentials.values())


DEFAULT_CATALOG = EnvironmentCatalog()


def infer_provider_from_model(
    model: str, catalog: EnvironmentCatalog = DEFAULT_CATALOG
) -> Optional[ProviderName]:
    """Infer a provider from a model id via prefix hints.

    Matching is case-insensitive and follows declaration order; the first
    matching prefix wins.

    Parameters
    ----------
    model: str
        Model identifier (may be empty).
    catalog: EnvironmentCatalog
        Catalog supplying the ordered hints.

    Returns
    -------
    Optional[ProviderName]
        The hinted provider, or ``None`` when no prefix matches.
    """
    lowered = (model or "").strip().lower()
    if not lowered:
        return None
    for prefix, provider in catalog.hints:
        if lowered.startswith(prefix):
            return provider
    return None


def _has_prefix(model: str, prefixes: Tuple[str, ...]) -> bool:
    lowered = (model or "").strip().lower()
    return any(lowered.startswith(p) for p in prefixes)


def uses_responses_api(model: str) -> bool:
    """Return True when an openai ``model`` must be sent to the responses endpoint."""
    return _has_prefix(model, OPENAI_RESPONSES_MODEL_PREFIXES)


def omits_sampling(model: str) -> bool:
    """Return True when an openai ``model`` rejects ``temperature``/``top_p``."""
    return _has_prefix(model, OPENAI_NO_SAMPLING_MODEL_PREFIXES)


def get_base_url_candidates(provider: ProviderName) -> Tuple[str, ...]:
    """Return provider-specific base-URL variable names in priority order."""
    if provider in BASE_URL_ALIASES:
        return BASE_URL_ALIASES[provider]
    return (f"{provider.value.upper()}_BASE_URL",)


def base_url_from_env(provider: ProviderName, env: Mapping[str, str]) -> Optional[str]:
    """Return the first non-empty provider-specific base URL from ``env``."""
    for name in get_base_url_candidates(provider):
        if val := (env.get(name) or "").strip():
            return val
    return None


def env_value(env: Mapping[str, str], name: str) -> str:
    """Return ``env[name]`` stripped, or ``""`` when unset."""
    return (env.get(name) or "").strip()


__all__ = [
    "UNIFIED_API_KEY_ENV",
    "UNIFIED_MODEL_ENV",
    "UNIFIED_PROVIDER_ENV",
    "UNIFIED_BASE_URL_ENV",
    "UNIFIED_MAX_TOKENS_ENV",
    "UNIFIED_TEMPERATURE_ENV",
    "UNIFIED_TOP_P_ENV",
    "MODEL_ENV_SIGIL",
    "ENV_MAP",
    "MODEL_HINTS",
    "BASE_URL_ALIASES",
    "EnvironmentCatalog",
    "DEFAULT_CATALOG",
    "infer_provider_from_model",
    "uses_responses_api",
    "omits_sampling",
    "get_base_url_candidates",
    "base_url_from_env",
    "env_value",
]
