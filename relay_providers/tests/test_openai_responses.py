"""OpenAI responses-API backend tests: routing, payload shape and stream events."""

from __future__ import annotations

import pytest

from relay_providers.base.errors import ErrorCode, ProviderError
from relay_providers.base.models import CompletionRequest, Usage
from relay_providers.openai import OpenAIResponsesBackend, uses_responses_api
from relay_providers.openai.helpers import omits_sampling
from relay_providers.tests.helpers import Recorder, chat_delta, json_recorder, mock_client, sse, stream_recorder, text_recorder


def _request(model="gpt-4.1-mini", **overrides):
    params = dict(model=model, prompt="summarize", data="a b c", max_tokens=100, temperature=0.5, top_p=0.9)
    params.update(overrides)
    return CompletionRequest(**params)


def _backend(recorder: Recorder) -> OpenAIResponsesBackend:
    return OpenAIResponsesBackend("sk-test", "https://api.example.test/v1", client=mock_client(recorder))


@pytest.mark.parametrize(
    "model,expected",
    [
        ("o1-preview", True),
        ("O1-mini", True),
        ("gpt-4.1", True),
        ("gpt-4.1-nano", True),
        ("gpt-5", True),
        ("gpt-5-mini", True),
        ("gpt-4o", False),
        ("gpt-4", False),
        ("o4-mini", False),
    ],
)
def test_uses_responses_api(model, expected):
    assert uses_responses_api(model) is expected  # nosec B101


def test_payload_shape():
    recorder = json_recorder({"output": []})
    _backend(recorder).complete(_request())
    assert str(recorder.last.url) == "https://api.example.test/v1/responses"  # nosec B101
    assert recorder.last_json == {  # nosec B101
        "model": "gpt-4.1-mini",
        "input": "summarize in the following data: a b c",
        "max_output_tokens": 100,
        "temperature": 0.5,
        "top_p": 0.9,
    }


def test_gpt5_omits_sampling_parameters():
    assert omits_sampling("GPT-5-mini") is True  # nosec B101
    recorder = json_recorder({"output": []})
    _backend(recorder).complete(_request(model="gpt-5"))
    payload = recorder.last_json
    assert "temperature" not in payload and "top_p" not in payload  # nosec B101
    assert payload["max_output_tokens"] == 100  # nosec B101


def test_complete_concatenates_output_fragments_and_maps_usage():
    body = {
        "output": [
            {"type": "reasoning", "content": []},
            {
                "type": "message",
                "content": [
                    {"type": "output_text", "text": "Hello"},
                    {"type": "refusal", "text": "ignored"},
                    {"type": "output_text", "text": ", world"},
                ],
            },
        ],
        "usage": {"input_tokens": 7, "output_tokens": 4, "total_tokens": 11},
    }
    result = _backend(json_recorder(body)).complete(_request())
    assert result.text == "Hello, world"  # nosec B101
    assert result.usage == Usage(7, 4, 11)  # nosec B101


def test_complete_without_output_is_empty_text():
    result = _backend(json_recorder({"id": "resp_1"})).complete(_request())
    assert result.text == "" and result.usage == Usage()  # nosec B101


def test_stream_typed_events_and_final_usage():
    body = sse(
        {"type": "response.created", "response": {"id": "r"}},
        {"type": "response.output_text.delta", "delta": "Hel"},
        {"type": "response.output_text.delta", "delta": "lo"},
        {"type": "response.output_text.done", "text": "Hello"},
        {"type": "response.completed", "response": {"usage": {"input_tokens": 5, "output_tokens": 2}}},
        "[DONE]",
    )
    recorder = stream_recorder([body])
    deltas = []
    result = _backend(recorder).stream(_request(), deltas.append)
    assert recorder.last_json["stream"] is True  # nosec B101
    assert deltas == ["Hel", "lo"]  # nosec B101
    assert result.text == "Hello"  # nosec B101
    assert result.usage == Usage(5, 2, 7)  # nosec B101


def test_stream_output_chunks_then_chat_delta_fallback():
    body = sse(
        {"output": [{"content": [{"type": "text", "text": "A"}]}]},
        chat_delta("B"),
        {"unrelated": True},
    )
    result = _backend(stream_recorder([body])).stream(_request())
    assert result.text == "AB"  # nosec B101


def test_stream_error_event_raises_with_partial():
    body = sse(
        {"type": "response.output_text.delta", "delta": "par"},
        {"type": "error", "message": "model overloaded"},
        {"type": "response.output_text.delta", "delta": "never"},
    )
    with pytest.raises(ProviderError) as excinfo:
        _backend(stream_recorder([body])).stream(_request())
    err = excinfo.value
    assert err.message == "openai responses error: model overloaded"  # nosec B101
    assert err.code is ErrorCode.SERVER_ERROR  # nosec B101
    assert err.partial.text == "par"  # nosec B101
    assert err.model == "gpt-4.1-mini"  # nosec B101


def test_stream_failed_event_reads_nested_error():
    body = sse({"type": "response.failed", "response": {"error": {"message": "quota"}}})
    with pytest.raises(ProviderError) as excinfo:
        _backend(stream_recorder([body])).stream(_request())
    assert excinfo.value.message == "openai responses error: quota"  # nosec B101


def test_http_error_uses_responses_label():
    recorder = text_recorder("bad input", 400)
    with pytest.raises(ProviderError) as excinfo:
        _backend(recorder).complete(_request())
    assert excinfo.value.message == "openai responses error: 400 - bad input"  # nosec B101
    assert excinfo.value.code is ErrorCode.VALIDATION  # nosec B101
