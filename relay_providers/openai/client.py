"""OpenAI chat-completions backend.

Sends a single user message built with the prose join rule to
``/chat/completions`` over raw ``httpx``.

Streaming reads ``data:`` framed SSE lines until ``[DONE]`` or end of input.
Each payload is tried as a responses-style chunk first and as a chat delta
second; anything else is skipped. Chat-completions streams do not report usage
on this path, so the streamed result always carries the zero usage record.
"""

from __future__ import annotations

from typing import Any, Dict, Optional, Tuple

import httpx

from ..base.errors import ErrorCode
from ..base.http_backend import HTTPCompletionBackend
from ..base.models import CompletionRequest, Usage
from ..base.streaming import DeltaAccumulator, LineReader, SSEDecoder
from ..config.defaults import OPENAI_CHAT_PATH, OPENAI_DEFAULT_BASE_URL
from .helpers import build_chat_payload, build_headers, chat_delta_text, parse_chat_body, responses_chunk_text

__all__ = ["OpenAIChatBackend"]


class OpenAIChatBackend(HTTPCompletionBackend):
    """Completion backend for OpenAI-compatible ``/chat/completions`` endpoints."""

    provider_name = "openai"
    variant = "chat"
    path = OPENAI_CHAT_PATH
    error_label = "openai error"

    def __init__(
        self,
        api_key: str,
        base_url: Optional[str] = None,
        *,
        client: Optional[httpx.Client] = None,
    ) -> None:
        super().__init__(base_url or OPENAI_DEFAULT_BASE_URL, headers=build_headers(api_key), client=client)

    def build_payload(self, request: CompletionRequest, *, stream: bool) -> Dict[str, Any]:
        return build_chat_payload(request, stream=stream)

    def parse_response(self, data: Any) -> Tuple[str, Usage]:
        text, usage = parse_chat_body(data)
        if text is None:
            raise self._error(ErrorCode.DECODE, "openai: no choices returned", None)
        return text, usage

    def consume_stream(self, reader: LineReader, acc: DeltaAccumulator) -> None:
        for obj in SSEDecoder(reader, logger=self._logger):
            text = responses_chunk_text(obj)
            if text is None:
                text = chat_delta_text(obj)
            acc.emit(text)
