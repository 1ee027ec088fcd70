"""Ollama helpers.

Payload construction and body decoding for the native ``/api/generate``
endpoint. The prompt uses the labeled join rule; sampling settings travel in
the ``options`` object (``num_predict`` is Ollama's name for max tokens).
"""

from __future__ import annotations

from typing import Any, Dict, Mapping, Tuple

from ..base.models import CompletionRequest, Usage
from ..base.tokens import extract_ollama_usage
from ..base.utils.prompt import labeled_join


def build_options(request: CompletionRequest) -> Dict[str, Any]:
    """Return the ``options`` object for ``request`` (may be empty)."""
    options: Dict[str, Any] = {}
    if request.temperature is not None:
        options["temperature"] = request.temperature
    if request.top_p is not None:
        options["top_p"] = request.top_p
    if request.max_tokens > 0:
        options["num_predict"] = request.max_tokens
    return options


def build_generate_payload(request: CompletionRequest, *, stream: bool) -> Dict[str, Any]:
    """Construct the JSON body for ``/api/generate``.

    ``stream`` is always sent because Ollama streams by default.
    """
    return {
        "model": request.model,
        "prompt": labeled_join(request.prompt, request.data),
        "stream": stream,
        "options": build_options(request),
    }


def chunk_text(obj: Mapping[str, Any]) -> str:
    """Return the ``response`` text of a body or streamed object ("" if absent)."""
    text = obj.get("response")
    return text if isinstance(text, str) else ""


def parse_generate_body(data: Any) -> Tuple[str, Usage]:
    """Return ``(text, usage)`` for a non-streaming ``/api/generate`` body.

    Raises:
        ValueError: When the body is not a JSON object.
    """
    if not isinstance(data, Mapping):
        raise ValueError("ollama: response body is not a JSON object")
    return chunk_text(data), extract_ollama_usage(data)


__all__ = ["build_options", "build_generate_payload", "chunk_text", "parse_generate_body"]
