"""Streaming package: line framing, SSE/NDJSON decoders and delta accumulation."""

from .accumulator import DeltaAccumulator, DeltaSink
from .line_reader import LineReader, StreamState
from .ndjson import NDJSONDecoder
from .sse import SSEDecoder, sse_payload

__all__ = [
    "DeltaAccumulator",
    "DeltaSink",
    "LineReader",
    "StreamState",
    "NDJSONDecoder",
    "SSEDecoder",
    "sse_payload",
]
