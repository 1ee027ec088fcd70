"""Server-Sent-Events payload decoder (OpenAI framing).

Only ``data:`` lines carry payloads; blank lines, comments and other fields
(``event:``, ``id:``) are ignored. A ``[DONE]`` payload terminates the stream.
Payloads that are not JSON objects are skipped: a line cut short by the
transport is expected, not exceptional.
"""

from __future__ import annotations

import json
import logging
from typing import Any, Dict, Iterator, Optional

from ..constants import SSE_DATA_PREFIX, SSE_DONE_SENTINEL
from ..log_support import LogContext
from ..logging import normalized_log_event
from .line_reader import LineReader

_DATA_FIELD = SSE_DATA_PREFIX.rstrip()


def sse_payload(line: str) -> Optional[str]:
    """Return the payload of a ``data:`` line, or ``None`` for any other line."""
    text = line.strip()
    if not text.startswith(_DATA_FIELD):
        return None
    payload = text[len(_DATA_FIELD):]
    if payload.startswith(" "):
        payload = payload[1:]
    return payload.strip()


def log_decode_skip(logger: Optional[logging.Logger], ctx: Optional[LogContext], line: str, reason: str) -> None:
    """Record a skipped stream line at DEBUG level."""
    if logger is None:
        return
    normalized_log_event(
        logger,
        "stream.decode_skip",
        ctx,
        phase="mid_stream",
        level=logging.DEBUG,
        reason=reason,
        line=line[:200],
    )


class SSEDecoder:
    """Iterate decoded JSON objects from an SSE line stream."""

    def __init__(
        self,
        reader: LineReader,
        *,
        logger: Optional[logging.Logger] = None,
        ctx: Optional[LogContext] = None,
    ) -> None:
        self._reader = reader
        self._logger = logger
        self._ctx = ctx

    def __iter__(self) -> Iterator[Dict[str, Any]]:
        for line in self._reader:
            payload = sse_payload(line)
            if not payload:
                continue
            if payload == SSE_DONE_SENTINEL:
                self._reader.terminate()
                return
            try:
                obj = json.loads(payload)
            except json.JSONDecodeError:
                log_decode_skip(self._logger, self._ctx, payload, "invalid_json")
                continue
            if not isinstance(obj, dict):
                log_decode_skip(self._logger, self._ctx, payload, "not_an_object")
                continue
            yield obj


__all__ = ["SSEDecoder", "sse_payload", "log_decode_skip"]
