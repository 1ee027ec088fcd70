"""Base shared constants for completion backends.

Central location to avoid scattering magic strings and default numbers.
"""
from __future__ import annotations

# Non-2xx response bodies are cut to this many characters in error messages
HTTP_ERROR_BODY_LIMIT = 400

# SSE framing
SSE_DATA_PREFIX = "data: "
SSE_DONE_SENTINEL = "[DONE]"

__all__ = [
    "HTTP_ERROR_BODY_LIMIT",
    "SSE_DATA_PREFIX",
    "SSE_DONE_SENTINEL",
]
