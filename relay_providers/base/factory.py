"""Backend factory.

Purpose
-------
Turn a :class:`ResolvedTarget` into a concrete completion backend. Backend
modules are imported lazily with ``importlib`` so the base layer does not
import provider packages at module import time.

Selection
---------
- ``openai``: the responses-API backend when the model routes there
  (``o1*``, ``gpt-4.1*``, ``gpt-5*``), otherwise the chat-completions backend.
- ``ollama``: the native ``/api/generate`` backend. The target's credential
  is not forwarded; Ollama is keyless.
- Every other catalog provider is recognized by the resolver but has no
  backend yet; asking for one raises ``ProviderError(UNSUPPORTED)``.

Failure modes
-------------
The factory performs no network I/O and no retries. It either returns a
backend or raises :class:`ProviderError`.
"""

from __future__ import annotations

from importlib import import_module
from typing import Any, Dict, Optional, Tuple

import httpx

from ..config.env import uses_responses_api
from .errors import ErrorCode, ProviderError
from .interfaces import CompletionBackend
from .models import ProviderName, ResolvedTarget

_BACKENDS: Dict[str, Dict[str, str]] = {
    "openai.chat": {"module": "relay_providers.openai.client", "class": "OpenAIChatBackend"},
    "openai.responses": {"module": "relay_providers.openai.responses", "class": "OpenAIResponsesBackend"},
    "ollama": {"module": "relay_providers.ollama.client", "class": "OllamaBackend"},
}


def supported_providers() -> Tuple[str, ...]:
    """Return the provider names that have a backend implementation."""
    return (ProviderName.OPENAI.value, ProviderName.OLLAMA.value)


def _load(key: str) -> Any:
    spec = _BACKENDS[key]
    return getattr(import_module(spec["module"]), spec["class"])


def _backend_key(target: ResolvedTarget) -> Optional[str]:
    if target.provider is ProviderName.OPENAI:
        return "openai.responses" if uses_responses_api(target.model) else "openai.chat"
    if target.provider is ProviderName.OLLAMA:
        return "ollama"
    return None


def create_backend(target: ResolvedTarget, *, client: Optional[httpx.Client] = None) -> CompletionBackend:
    """Create the backend serving ``target``.

    Parameters
    ----------
    target:
        Output of the resolver.
    client:
        Optional pre-built ``httpx.Client`` (tests inject one backed by
        ``httpx.MockTransport``). The backend does not close injected clients.

    Raises
    ------
    ProviderError
        ``UNSUPPORTED`` when the provider has no backend implementation.
    """
    key = _backend_key(target)
    if key is None:
        supported = ", ".join(supported_providers())
        raise ProviderError(
            code=ErrorCode.UNSUPPORTED,
            message=f"provider '{target.provider.value}' not implemented yet; supported: {supported}",
            provider=target.provider.value,
            model=target.model,
        )
    klass = _load(key)
    if key == "ollama":
        return klass(target.base_url, client=client)
    return klass(target.credential, target.base_url, client=client)


__all__ = ["create_backend", "supported_providers"]
