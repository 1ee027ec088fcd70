"""OpenAI helpers module.

Purpose:
- Side-effect-free utilities shared by the chat-completions and responses
  backends: header and payload construction, and decoding of non-streaming
  bodies and streamed chunks. The model routing predicates live in
  ``config.env`` and are re-exported here.

Wire shapes:
- Chat request: ``model``, ``messages=[{"role": "user", "content": ...}]``,
  ``max_tokens``, ``temperature``, ``top_p``, ``stream``.
- Responses request: ``model``, ``input``, ``max_output_tokens``,
  ``temperature``, ``top_p``, ``stream``.
- Chat body: ``choices[0].message.content`` plus ``usage``.
- Responses body: ``output[].content[]`` items carrying ``type``/``text``.
- Streamed chunks: chat deltas (``choices[].delta.content``), responses
  chunks (``output[].content[]``) or typed responses events
  (``response.output_text.delta``, ``response.completed``).

Failure semantics:
- Decoders return ``None`` when a shape does not apply; backends decide
  whether that is an error (non-streaming) or a skip (streaming).
"""

from __future__ import annotations

from typing import Any, Dict, List, Mapping, Optional, Tuple

from ..base.models import CompletionRequest, Usage
from ..base.tokens import extract_openai_usage
from ..base.utils.prompt import prose_join
from ..config.env import omits_sampling, uses_responses_api

_TEXT_PART_TYPES = ("text", "output_text")
EVENT_TEXT_DELTA = "response.output_text.delta"
EVENT_COMPLETED = "response.completed"
EVENT_FAILED = "response.failed"
EVENT_ERROR = "error"


def build_headers(api_key: str) -> Dict[str, str]:
    """Return bearer-auth JSON headers."""
    return {"Authorization": f"Bearer {api_key}", "Content-Type": "application/json"}


def _apply_sampling(payload: Dict[str, Any], request: CompletionRequest) -> None:
    if request.temperature is not None:
        payload["temperature"] = request.temperature
    if request.top_p is not None:
        payload["top_p"] = request.top_p


def build_chat_payload(request: CompletionRequest, *, stream: bool) -> Dict[str, Any]:
    """Construct the JSON body for ``/chat/completions``."""
    payload: Dict[str, Any] = {
        "model": request.model,
        "messages": [{"role": "user", "content": prose_join(request.prompt, request.data)}],
    }
    if request.max_tokens > 0:
        payload["max_tokens"] = request.max_tokens
    _apply_sampling(payload, request)
    if stream:
        payload["stream"] = True
    return payload


def build_responses_payload(request: CompletionRequest, *, stream: bool) -> Dict[str, Any]:
    """Construct the JSON body for ``/responses``.

    Sampling parameters are left out entirely for models that reject them.
    """
    payload: Dict[str, Any] = {
        "model": request.model,
        "input": prose_join(request.prompt, request.data),
    }
    if request.max_tokens > 0:
        payload["max_output_tokens"] = request.max_tokens
    if not omits_sampling(request.model):
        _apply_sampling(payload, request)
    if stream:
        payload["stream"] = True
    return payload


def chat_completion_text(data: Any) -> Optional[str]:
    """Return the first choice's message content, or ``None`` without choices."""
    if not isinstance(data, Mapping):
        return None
    choices = data.get("choices")
    if not isinstance(choices, list) or not choices:
        return None
    first = choices[0] if isinstance(choices[0], Mapping) else {}
    message = first.get("message") if isinstance(first.get("message"), Mapping) else {}
    content = message.get("content")
    return content if isinstance(content, str) else ""


def _output_fragments(output: Any) -> List[str]:
    fragments: List[str] = []
    if not isinstance(output, list):
        return fragments
    for item in output:
        if not isinstance(item, Mapping):
            continue
        content = item.get("content")
        if not isinstance(content, list):
            continue
        for part in content:
            if not isinstance(part, Mapping):
                continue
            text = part.get("text")
            if isinstance(text, str) and text and part.get("type", "text") in _TEXT_PART_TYPES:
                fragments.append(text)
    return fragments


def responses_text(data: Any) -> str:
    """Concatenate every text fragment in a responses body's ``output`` array."""
    if not isinstance(data, Mapping):
        return ""
    return "".join(_output_fragments(data.get("output")))


def parse_chat_body(data: Any) -> Tuple[Optional[str], Usage]:
    """Return ``(text or None, usage)`` for a chat-completions body."""
    return chat_completion_text(data), extract_openai_usage(data)


def parse_responses_body(data: Any) -> Tuple[str, Usage]:
    """Return ``(text, usage)`` for a responses body (zero usage when absent)."""
    return responses_text(data), extract_openai_usage(data)


def responses_chunk_text(obj: Mapping[str, Any]) -> Optional[str]:
    """Text of a responses-style chunk (``output`` array), ``None`` if not one."""
    if "output" not in obj:
        return None
    return "".join(_output_fragments(obj.get("output")))


def chat_delta_text(obj: Mapping[str, Any]) -> Optional[str]:
    """Text of a chat-delta chunk (all choices, in order), ``None`` if not one."""
    choices = obj.get("choices")
    if not isinstance(choices, list):
        return None
    parts: List[str] = []
    for choice in choices:
        if not isinstance(choice, Mapping):
            continue
        delta = choice.get("delta")
        if isinstance(delta, Mapping) and isinstance(delta.get("content"), str):
            parts.append(delta["content"])
    return "".join(parts)


def stream_event_type(obj: Mapping[str, Any]) -> Optional[str]:
    """Return the typed-event name of a responses stream event, if any."""
    event = obj.get("type")
    if isinstance(event, str) and (event.startswith("response.") or event == EVENT_ERROR):
        return event
    return None


def stream_event_error(obj: Mapping[str, Any]) -> str:
    """Extract a human-readable message from an ``error``/``response.failed`` event."""
    candidates = [obj, obj.get("error")]
    response = obj.get("response")
    if isinstance(response, Mapping):
        candidates.append(response.get("error"))
    for holder in candidates:
        if isinstance(holder, Mapping) and isinstance(holder.get("message"), str):
            return holder["message"]
    return "stream reported an error"


__all__ = [
    "uses_responses_api",
    "omits_sampling",
    "build_headers",
    "build_chat_payload",
    "build_responses_payload",
    "chat_completion_text",
    "responses_text",
    "parse_chat_body",
    "parse_responses_body",
    "responses_chunk_text",
    "chat_delta_text",
    "stream_event_type",
    "stream_event_error",
    "EVENT_TEXT_DELTA",
    "EVENT_COMPLETED",
    "EVENT_FAILED",
    "EVENT_ERROR",
]
