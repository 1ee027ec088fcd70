"""Line-delimited stream reader shared by the SSE and NDJSON decoders.

Purpose:
    Turn a chunked byte stream (``httpx.Response.iter_bytes()``) into complete
    text lines while tracking the decode state and polling a cancellation
    token at every iteration.

State machine:
    ``AWAITING_LINE`` → bytes are read into the buffer until a newline arrives.
    ``HAVE_LINE`` → a complete line is being handed to the consumer.
    ``TERMINATED`` → a terminal marker was seen (the consumer calls
    :meth:`LineReader.terminate`) or the input ended cleanly. A trailing line
    without a newline is still delivered at end of input.
    ``FAILED`` → the transport raised; the exception propagates unchanged
    unless the token was cancelled, in which case the cancellation error is
    raised instead.

Chunk boundaries carry no meaning: a line may arrive split across any number
of chunks, and one chunk may hold many lines.
"""

from __future__ import annotations

from enum import Enum
from typing import Iterable, Iterator, Optional

from ..cancellation import CancellationToken


class StreamState(str, Enum):
    """Decode states of a :class:`LineReader`."""

    AWAITING_LINE = "awaiting_line"
    HAVE_LINE = "have_line"
    TERMINATED = "terminated"
    FAILED = "failed"


class LineReader:
    """Iterate complete lines from a chunked byte stream.

    Iteration checks the token before every buffer pop and every transport
    read, so cancellation is observed between any two lines.
    """

    def __init__(self, chunks: Iterable[bytes], *, token: Optional[CancellationToken] = None) -> None:
        self._chunks = iter(chunks)
        self._token = token
        self._buffer = bytearray()
        self.state = StreamState.AWAITING_LINE

    def terminate(self) -> None:
        """Mark the stream finished; iteration stops before the next read."""
        self.state = StreamState.TERMINATED

    def _check_cancelled(self) -> None:
        if self._token is not None and self._token.cancelled:
            raise self._token.to_error()

    def _pop_line(self) -> Optional[str]:
        idx = self._buffer.find(b"\n")
        if idx < 0:
            return None
        raw = bytes(self._buffer[:idx])
        del self._buffer[: idx + 1]
        return raw.decode("utf-8", errors="replace").rstrip("\r")

    def _flush(self) -> Optional[str]:
        if not self._buffer:
            return None
        raw = bytes(self._buffer)
        self._buffer.clear()
        return raw.decode("utf-8", errors="replace").rstrip("\r")

    def _read(self) -> bool:
        """Read one chunk into the buffer; return ``False`` at end of input."""
        try:
            chunk = next(self._chunks)
        except StopIteration:
            return False
        except Exception as exc:
            if self._token is not None and self._token.cancelled:
                raise self._token.to_error() from exc
            self.state = StreamState.FAILED
            raise
        self._buffer.extend(chunk)
        return True

    def _deliver(self, line: str) -> Iterator[str]:
        self.state = StreamState.HAVE_LINE
        yield line
        if self.state is StreamState.HAVE_LINE:
            self.state = StreamState.AWAITING_LINE

    def __iter__(self) -> Iterator[str]:
        while self.state is not StreamState.TERMINATED:
            self._check_cancelled()
            line = self._pop_line()
            if line is not None:
                yield from self._deliver(line)
                continue
            if self._read():
                continue
            tail = self._flush()
            if tail is not None:
                yield from self._deliver(tail)
            self.state = StreamState.TERMINATED


__all__ = ["StreamState", "LineReader"]
