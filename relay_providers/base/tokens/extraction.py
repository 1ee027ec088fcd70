"""Token usage extraction helpers.

This module converts backend-specific usage fields found in decoded JSON
bodies into the package's :class:`Usage` record.

Supported shapes
----------------
OpenAI chat-completions:
    ``usage.prompt_tokens``, ``usage.completion_tokens``, ``usage.total_tokens``
OpenAI responses API:
    ``usage.input_tokens``, ``usage.output_tokens``, ``usage.total_tokens``
Ollama ``/api/generate``:
    ``prompt_eval_count`` (prompt side), ``eval_count`` (completion side);
    total is always their sum.

Failure Modes
-------------
* Missing blocks or fields → zero counts (backends that cannot report usage
  yield the zero record)
* Non-integer / negative values → treated as missing
* Missing total with both components present → derived as their sum

Helpers never raise; they are pure functions over decoded JSON.
"""

from __future__ import annotations

from typing import Any, Mapping, Optional

from ..models import Usage


def _coerce_int(value: Any) -> Optional[int]:
    """Coerce arbitrary value to a non-negative ``int`` or ``None``.

    Booleans are rejected even though ``bool`` subclasses ``int``.
    """
    if value is None or isinstance(value, bool):
        return None
    try:
        iv = int(value)
    except (TypeError, ValueError):
        return None
    return iv if iv >= 0 else None


def _finalize_usage(prompt: Optional[int], completion: Optional[int], total: Optional[int]) -> Usage:
    """Build a :class:`Usage`, deriving a missing ``total`` from its parts."""
    if total is None and prompt is not None and completion is not None:
        total = prompt + completion
    return Usage(prompt_tokens=prompt or 0, completion_tokens=completion or 0, total_tokens=total or 0)


def _first_int(block: Mapping[str, Any], *keys: str) -> Optional[int]:
    for key in keys:
        value = _coerce_int(block.get(key))
        if value is not None:
            return value
    return None


def extract_openai_usage(data: Any) -> Usage:
    """Map an OpenAI ``usage`` block (chat or responses naming) to :class:`Usage`.

    Args:
        data: Decoded response object (the whole body, not the usage block).

    Returns:
        Usage: Zero record when the body carries no usage block.
    """
    if not isinstance(data, Mapping):
        return Usage()
    block = data.get("usage")
    if not isinstance(block, Mapping):
        return Usage()
    return _finalize_usage(
        _first_int(block, "prompt_tokens", "input_tokens"),
        _first_int(block, "completion_tokens", "output_tokens"),
        _coerce_int(block.get("total_tokens")),
    )


def extract_ollama_usage(data: Any) -> Usage:
    """Map Ollama evaluation counters to :class:`Usage` (total = prompt + completion)."""
    if not isinstance(data, Mapping):
        return Usage()
    prompt = _coerce_int(data.get("prompt_eval_count")) or 0
    completion = _coerce_int(data.get("eval_count")) or 0
    return Usage(prompt_tokens=prompt, completion_tokens=completion, total_tokens=prompt + completion)


__all__ = ["extract_openai_usage", "extract_ollama_usage"]
