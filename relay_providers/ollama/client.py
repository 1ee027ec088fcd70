"""Ollama backend.

Purpose:
    Completions against a local Ollama daemon through the native
    ``/api/generate`` endpoint (default ``http://localhost:11434``).

External dependencies:
    - ``httpx`` only. No API key is sent; the resolver's credential is ignored
      because Ollama does not authenticate requests.

Streaming:
    NDJSON, one object per line. Each object's ``response`` text is emitted
    before ``done`` is checked, so the final object's text is never lost. An
    object with ``done: true`` carries the evaluation counters and ends the
    stream; without one the stream ends at end of input with zero usage.
    Lines that fail to parse are skipped.
"""

from __future__ import annotations

from typing import Any, Dict, Optional, Tuple

import httpx

from ..base.errors import ErrorCode
from ..base.http_backend import HTTPCompletionBackend
from ..base.models import CompletionRequest, Usage
from ..base.streaming import DeltaAccumulator, LineReader, NDJSONDecoder
from ..base.tokens import extract_ollama_usage
from ..config.defaults import OLLAMA_DEFAULT_BASE_URL, OLLAMA_GENERATE_PATH
from .helpers import build_generate_payload, chunk_text, parse_generate_body

__all__ = ["OllamaBackend"]

_JSON_HEADERS = {"Content-Type": "application/json"}


class OllamaBackend(HTTPCompletionBackend):
    """Completion backend for Ollama's ``/api/generate``."""

    provider_name = "ollama"
    variant = "generate"
    path = OLLAMA_GENERATE_PATH
    error_label = "ollama error"

    def __init__(self, base_url: Optional[str] = None, *, client: Optional[httpx.Client] = None) -> None:
        super().__init__(base_url or OLLAMA_DEFAULT_BASE_URL, headers=_JSON_HEADERS, client=client)

    def build_payload(self, request: CompletionRequest, *, stream: bool) -> Dict[str, Any]:
        return build_generate_payload(request, stream=stream)

    def parse_response(self, data: Any) -> Tuple[str, Usage]:
        try:
            return parse_generate_body(data)
        except ValueError as exc:
            raise self._error(ErrorCode.DECODE, str(exc), None, raw=exc) from exc

    def consume_stream(self, reader: LineReader, acc: DeltaAccumulator) -> None:
        for obj in NDJSONDecoder(reader, logger=self._logger):
            acc.emit(chunk_text(obj))
            if obj.get("done") is True:
                acc.usage = extract_ollama_usage(obj)
                return
