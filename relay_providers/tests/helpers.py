"""Shared helpers for HTTP-level tests.

``Recorder`` is an ``httpx.MockTransport`` handler that remembers every
request and answers with a canned response; the body helpers build streamed
response bodies that split lines across arbitrary chunk boundaries or fail
part-way through.
"""

from __future__ import annotations

import json
from typing import Any, Callable, Dict, Iterable, Iterator, List, Optional

import httpx


class Recorder:
    """MockTransport handler that records requests."""

    def __init__(self, respond: Callable[[httpx.Request], httpx.Response]) -> None:
        self._respond = respond
        self.requests: List[httpx.Request] = []

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        return self._respond(request)

    @property
    def last(self) -> httpx.Request:
        return self.requests[-1]

    @property
    def last_json(self) -> Dict[str, Any]:
        return json.loads(self.requests[-1].content)


def mock_client(recorder: Recorder) -> httpx.Client:
    """Return a client whose transport is ``recorder``."""
    return httpx.Client(transport=httpx.MockTransport(recorder))


def json_recorder(body: Any, status: int = 200) -> Recorder:
    """Recorder answering every request with ``body`` as JSON."""
    return Recorder(lambda request: httpx.Response(status, json=body))


def text_recorder(text: str, status: int) -> Recorder:
    """Recorder answering every request with a plain-text body."""
    return Recorder(lambda request: httpx.Response(status, text=text))


def chunked(data: bytes, size: int) -> Iterator[bytes]:
    """Split ``data`` into ``size``-byte chunks."""
    for i in range(0, len(data), size):
        yield data[i : i + size]


def stream_recorder(chunks: Iterable[bytes], status: int = 200) -> Recorder:
    """Recorder answering with a streamed body built from ``chunks``."""
    return Recorder(lambda request: httpx.Response(status, content=iter(chunks)))


def failing_body(chunks: Iterable[bytes], exc: Exception, before_raise: Optional[Callable[[], None]] = None) -> Iterator[bytes]:
    """Yield ``chunks`` then raise ``exc`` (after ``before_raise`` if given)."""
    yield from chunks
    if before_raise is not None:
        before_raise()
    raise exc


def sse(*payloads: Any) -> bytes:
    """Encode payloads as SSE ``data:`` events (strings are sent verbatim)."""
    lines = []
    for payload in payloads:
        text = payload if isinstance(payload, str) else json.dumps(payload)
        lines.append(f"data: {text}\n\n")
    return "".join(lines).encode("utf-8")


def ndjson(*objects: Any) -> bytes:
    """Encode objects as newline-delimited JSON (strings are sent verbatim)."""
    lines = [obj if isinstance(obj, str) else json.dumps(obj) for obj in objects]
    return ("\n".join(lines) + "\n").encode("utf-8")


def chat_delta(text: str) -> Dict[str, Any]:
    """A chat-completions streaming chunk carrying ``text``."""
    return {"choices": [{"index": 0, "delta": {"content": text}}]}
