"""Newline-delimited JSON decoder (Ollama framing).

Each line is parsed on its own. Lines that fail to parse are skipped without
aborting the stream. An object whose ``done`` field is ``true`` is yielded and
then ends the stream; without one the stream ends at end of input.
"""

from __future__ import annotations

import json
import logging
from typing import Any, Dict, Iterator, Optional

from ..log_support import LogContext
from .line_reader import LineReader
from .sse import log_decode_skip

TERMINAL_FIELD = "done"


class NDJSONDecoder:
    """Iterate decoded JSON objects from an NDJSON line stream."""

    def __init__(
        self,
        reader: LineReader,
        *,
        terminal_field: str = TERMINAL_FIELD,
        logger: Optional[logging.Logger] = None,
        ctx: Optional[LogContext] = None,
    ) -> None:
        self._reader = reader
        self._terminal_field = terminal_field
        self._logger = logger
        self._ctx = ctx

    def __iter__(self) -> Iterator[Dict[str, Any]]:
        for line in self._reader:
            text = line.strip()
            if not text:
                continue
            try:
                obj = json.loads(text)
            except json.JSONDecodeError:
                log_decode_skip(self._logger, self._ctx, text, "invalid_json")
                continue
            if not isinstance(obj, dict):
                log_decode_skip(self._logger, self._ctx, text, "not_an_object")
                continue
            yield obj
            if obj.get(self._terminal_field) is True:
                self._reader.terminate()
                return


__all__ = ["NDJSONDecoder", "TERMINAL_FIELD"]
