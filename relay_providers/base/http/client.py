"""HTTP client helpers for completion backends.

Purpose:
    Build the ``httpx.Client`` a backend owns and translate transport outcomes
    (non-2xx statuses, connection failures, timeouts) into the package's error
    taxonomy.

External dependencies:
    - ``httpx`` for the underlying synchronous HTTP client.

Timeout strategy:
    - Clients are created with ``timeout=None`` so no client-level limit can
      pre-empt the caller's deadline.
    - Each request receives a per-call ``httpx.Timeout`` equal to the time left
      on the caller's :class:`CancellationToken` (:func:`request_timeout`), or
      no timeout when the token carries no deadline.

Failure modes:
    - :func:`raise_for_status` raises :class:`ProviderError` for non-2xx
      responses with the body truncated to ``HTTP_ERROR_BODY_LIMIT`` chars.
    - :func:`translate_transport_error` maps ``httpx`` exceptions to either a
      cancellation error (when the token was cancelled or its deadline passed)
      or a classified :class:`ProviderError`. Cancellation always wins.

Lifecycle:
    - One client per backend instance; backends close clients they created and
      leave injected clients (tests, embedders) to their owners.
"""

from __future__ import annotations

from typing import Any, Optional

import httpx

from ..cancellation import CancellationToken, DeadlineExceededError
from ..constants import HTTP_ERROR_BODY_LIMIT
from ..errors import ProviderError, classify_exception, code_for_status

# Floor for per-call timeouts so an almost-expired deadline still yields a
# valid httpx timeout instead of zero (which httpx treats as "fail at once").
_MIN_TIMEOUT_SECONDS = 0.001


def new_httpx_client(*, transport: Optional[httpx.BaseTransport] = None) -> httpx.Client:
    """Return a fresh ``httpx.Client`` with client-level timeouts disabled.

    Backends send absolute URLs and per-request headers, so the same call
    path works for owned clients and injected ones.

    Parameters:
        transport: Optional transport override (``httpx.MockTransport`` in tests).
    """
    return httpx.Client(timeout=None, transport=transport)


def request_timeout(token: Optional[CancellationToken]) -> Optional[httpx.Timeout]:
    """Derive the per-call timeout from the token's remaining deadline."""
    remaining = token.remaining() if token is not None else None
    if remaining is None:
        return None
    return httpx.Timeout(max(remaining, _MIN_TIMEOUT_SECONDS))


def truncate_body(text: str, limit: int = HTTP_ERROR_BODY_LIMIT) -> str:
    """Return ``text`` stripped and cut to ``limit`` chars (``...`` marks a cut)."""
    body = (text or "").strip()
    if len(body) <= limit:
        return body
    return body[:limit] + "..."


def raise_for_status(response: httpx.Response, *, label: str, provider: str, model: Optional[str]) -> None:
    """Raise :class:`ProviderError` when ``response`` is not 2xx.

    The response body must already be read (call ``response.read()`` first for
    streamed responses). The message has the shape
    ``"<label>: <status> - <truncated body>"``.
    """
    if response.is_success:
        return
    status = response.status_code
    raise ProviderError(
        code=code_for_status(status),
        message=f"{label}: {status} - {truncate_body(response.text)}",
        provider=provider,
        model=model,
        status_code=status,
    )


def translate_transport_error(
    exc: Exception,
    token: Optional[CancellationToken],
    *,
    provider: str,
    model: Optional[str],
    partial: Any = None,
) -> Exception:
    """Map an ``httpx`` failure to the error the caller should raise.

    Cancellation takes precedence: when the token is cancelled (or its deadline
    elapsed, which is what a per-call timeout firing means) the result is a
    cancellation error even though the transport reported something else.
    """
    if token is not None:
        if token.cancelled:
            return token.to_error(partial)
        if isinstance(exc, httpx.TimeoutException) and token.deadline is not None:
            return DeadlineExceededError("deadline exceeded", partial=partial)
    return ProviderError(
        code=classify_exception(exc),
        message=f"{provider} request failed: {exc}",
        provider=provider,
        model=model,
        partial=partial,
        raw=exc,
    )


__all__ = [
    "new_httpx_client",
    "request_timeout",
    "truncate_body",
    "raise_for_status",
    "translate_transport_error",
]
