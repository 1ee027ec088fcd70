"""Backend factory tests."""

from __future__ import annotations

import httpx
import pytest

from relay_providers.base.errors import ErrorCode, ProviderError
from relay_providers.base.factory import create_backend, supported_providers
from relay_providers.base.interfaces import CompletionBackend
from relay_providers.base.models import ProviderName, ResolvedTarget
from relay_providers.ollama import OllamaBackend
from relay_providers.openai import OpenAIChatBackend, OpenAIResponsesBackend


@pytest.fixture()
def client():
    c = httpx.Client(transport=httpx.MockTransport(lambda request: httpx.Response(200, json={})))
    yield c
    c.close()


def test_openai_chat_model_selects_chat_backend(client):
    backend = create_backend(ResolvedTarget(ProviderName.OPENAI, "gpt-4o", "sk"), client=client)
    assert isinstance(backend, OpenAIChatBackend)  # nosec B101
    assert isinstance(backend, CompletionBackend)  # nosec B101
    assert backend.name == "openai"  # nosec B101
    assert backend.base_url == "https://api.openai.com/v1"  # nosec B101


@pytest.mark.parametrize("model", ["gpt-5", "o1-mini", "gpt-4.1"])
def test_openai_responses_models_select_responses_backend(client, model):
    backend = create_backend(ResolvedTarget(ProviderName.OPENAI, model, "sk"), client=client)
    assert isinstance(backend, OpenAIResponsesBackend)  # nosec B101


def test_base_url_passthrough(client):
    target = ResolvedTarget(ProviderName.OPENAI, "gpt-4o", "sk", base_url="http://proxy.local/v1/")
    assert create_backend(target, client=client).base_url == "http://proxy.local/v1"  # nosec B101


def test_ollama_backend(client):
    backend = create_backend(ResolvedTarget(ProviderName.OLLAMA, "llama3.1:8b", "dummy"), client=client)
    assert isinstance(backend, OllamaBackend)  # nosec B101
    assert backend.base_url == "http://localhost:11434"  # nosec B101


def test_unimplemented_provider_is_unsupported():
    with pytest.raises(ProviderError) as excinfo:
        create_backend(ResolvedTarget(ProviderName.MISTRAL, "mixtral-8x7b", "m"))
    err = excinfo.value
    assert err.code is ErrorCode.UNSUPPORTED  # nosec B101
    assert err.message.startswith("provider 'mistral' not implemented yet")  # nosec B101


def test_supported_providers():
    assert supported_providers() == ("openai", "ollama")  # nosec B101


def test_owned_client_closed_by_backend():
    backend = create_backend(ResolvedTarget(ProviderName.OLLAMA, "m", "dummy"))
    backend.close()
    assert backend._client.is_closed  # nosec B101
