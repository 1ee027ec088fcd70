"""OpenAI responses-API backend.

Used for models routed to ``/responses`` (see ``uses_responses_api``). The
prompt and data are flattened into a single ``input`` string with the prose
join rule. Models in the no-sampling family get no ``temperature``/``top_p``
at all, since the API rejects them.

Streaming decode order per payload:
    1. responses chunk (``output[].content[]`` text fragments)
    2. typed event: ``response.output_text.delta`` text,
       ``response.completed`` final usage, ``error``/``response.failed``
       raise, other events ignored
    3. a single chat-delta decode
"""

from __future__ import annotations

from typing import Any, Dict, Optional, Tuple

import httpx

from ..base.errors import ErrorCode
from ..base.http_backend import HTTPCompletionBackend
from ..base.models import CompletionRequest, Usage
from ..base.streaming import DeltaAccumulator, LineReader, SSEDecoder
from ..base.tokens import extract_openai_usage
from ..config.defaults import OPENAI_DEFAULT_BASE_URL, OPENAI_RESPONSES_PATH
from .helpers import (
    EVENT_COMPLETED,
    EVENT_ERROR,
    EVENT_FAILED,
    EVENT_TEXT_DELTA,
    build_headers,
    build_responses_payload,
    chat_delta_text,
    parse_responses_body,
    responses_chunk_text,
    stream_event_error,
    stream_event_type,
)

__all__ = ["OpenAIResponsesBackend"]


class OpenAIResponsesBackend(HTTPCompletionBackend):
    """Completion backend for the OpenAI ``/responses`` endpoint."""

    provider_name = "openai"
    variant = "responses"
    path = OPENAI_RESPONSES_PATH
    error_label = "openai responses error"

    def __init__(
        self,
        api_key: str,
        base_url: Optional[str] = None,
        *,
        client: Optional[httpx.Client] = None,
    ) -> None:
        super().__init__(base_url or OPENAI_DEFAULT_BASE_URL, headers=build_headers(api_key), client=client)

    def build_payload(self, request: CompletionRequest, *, stream: bool) -> Dict[str, Any]:
        return build_responses_payload(request, stream=stream)

    def parse_response(self, data: Any) -> Tuple[str, Usage]:
        return parse_responses_body(data)

    def consume_stream(self, reader: LineReader, acc: DeltaAccumulator) -> None:
        for obj in SSEDecoder(reader, logger=self._logger):
            text = responses_chunk_text(obj)
            if text is not None:
                acc.emit(text)
                continue
            event = stream_event_type(obj)
            if event is None:
                acc.emit(chat_delta_text(obj))
                continue
            if event == EVENT_TEXT_DELTA:
                delta = obj.get("delta")
                acc.emit(delta if isinstance(delta, str) else None)
            elif event == EVENT_COMPLETED:
                acc.usage = extract_openai_usage(obj.get("response"))
            elif event in (EVENT_ERROR, EVENT_FAILED):
                raise self._error(ErrorCode.SERVER_ERROR, f"openai responses error: {stream_event_error(obj)}", None)
