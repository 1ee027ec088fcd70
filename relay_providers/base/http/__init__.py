"""HTTP transport helpers (client construction, status and error mapping)."""

from .client import (
    new_httpx_client,
    raise_for_status,
    request_timeout,
    translate_transport_error,
    truncate_body,
)

__all__ = [
    "new_httpx_client",
    "request_timeout",
    "truncate_body",
    "raise_for_status",
    "translate_transport_error",
]
