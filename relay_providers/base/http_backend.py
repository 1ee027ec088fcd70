"""Shared HTTP backend implementation.

Purpose:
    Hold everything the OpenAI and Ollama backends have in common: the owned
    ``httpx.Client``, request dispatch with deadline-derived timeouts, error
    translation, structured start/end logging, and the streaming loop that
    attaches partial results to failures. Concrete backends supply the wire
    details through four hooks:

    - ``path``: endpoint path relative to the base URL.
    - ``build_payload(request, stream)``: JSON request body.
    - ``parse_response(data)``: ``(text, usage)`` from a non-streaming body.
    - ``consume_stream(reader, acc)``: drive a decoder over the line reader
      and feed the accumulator.

External dependencies:
    - ``httpx`` for transport (see :mod:`relay_providers.base.http`).

Failure modes:
    - Non-2xx: :class:`ProviderError` with a status-derived code and the body
      truncated for diagnostics.
    - Connection/read failures: :class:`ProviderError` (``TRANSIENT`` or
      ``TIMEOUT``), unless the token was cancelled, in which case
      :class:`CancelledError` wins.
    - Malformed non-streaming body: :class:`ProviderError` (``DECODE``).
    - Streaming failures carry ``partial`` (a :class:`CompletionResult`).
    - Without an explicit token, ``request.timeout`` becomes the call's
      wall-clock deadline; a missed deadline raises
      :class:`DeadlineExceededError`.
"""

from __future__ import annotations

import abc
import time
from typing import Any, Dict, Mapping, Optional, Tuple

import httpx

from .cancellation import CancellationToken, CancelledError
from .errors import ErrorCode, ProviderError
from .http import new_httpx_client, raise_for_status, request_timeout, translate_transport_error
from .logging import LogContext, get_logger, normalized_log_event
from .models import CompletionRequest, CompletionResult, Usage
from .streaming import DeltaAccumulator, DeltaSink, LineReader


class HTTPCompletionBackend(abc.ABC):
    """Base class for JSON-over-HTTP completion backends.

    Subclasses set ``provider_name``, ``variant`` and ``path`` and implement
    the payload/decode hooks. Instances own their client unless one is
    injected; use them as context managers or call :meth:`close`.
    """

    provider_name: str = ""
    variant: str = ""
    path: str = ""
    error_label: str = ""

    def __init__(
        self,
        base_url: str,
        *,
        headers: Optional[Mapping[str, str]] = None,
        client: Optional[httpx.Client] = None,
    ) -> None:
        self.base_url = base_url.rstrip("/")
        self._owns_client = client is None
        self._client = client if client is not None else new_httpx_client()
        self._headers = dict(headers or {})
        self._logger = get_logger(f"relay.{self.provider_name}")

    # ---- capability surface -------------------------------------------------

    @property
    def name(self) -> str:
        return self.provider_name

    def close(self) -> None:
        """Close the HTTP client when this backend created it."""
        if self._owns_client:
            self._client.close()

    def __enter__(self) -> "HTTPCompletionBackend":
        return self

    def __exit__(self, *exc_info: Any) -> None:
        self.close()

    # ---- hooks --------------------------------------------------------------

    @abc.abstractmethod
    def build_payload(self, request: CompletionRequest, *, stream: bool) -> Dict[str, Any]:
        """Return the JSON body for ``request``."""

    @abc.abstractmethod
    def parse_response(self, data: Any) -> Tuple[str, Usage]:
        """Return ``(text, usage)`` from a decoded non-streaming body."""

    @abc.abstractmethod
    def consume_stream(self, reader: LineReader, acc: DeltaAccumulator) -> None:
        """Decode ``reader`` into ``acc`` until a terminal marker or end of input."""

    # ---- shared plumbing ----------------------------------------------------

    def _url(self) -> str:
        return f"{self.base_url}{self.path}"

    def _ctx(self, request: CompletionRequest) -> LogContext:
        return LogContext(provider=self.provider_name, model=request.model, variant=self.variant)

    def _error(self, code: ErrorCode, message: str, model: Optional[str], **kwargs: Any) -> ProviderError:
        return ProviderError(code=code, message=message, provider=self.provider_name, model=model, **kwargs)

    def _deadline_token(
        self, request: CompletionRequest, token: Optional[CancellationToken]
    ) -> Optional[CancellationToken]:
        """Return ``token``, or one built from ``request.timeout`` when none was passed."""
        if token is None and request.timeout:
            return CancellationToken.with_timeout(request.timeout)
        return token

    def _log_failure(self, event: str, ctx: LogContext, exc: Exception, t0: float, emitted: Optional[int] = None) -> None:
        code = ErrorCode.CANCELLED.value if isinstance(exc, CancelledError) else getattr(exc, "code", ErrorCode.UNKNOWN).value
        normalized_log_event(
            self._logger,
            event,
            ctx,
            phase="finalize",
            error_code=code,
            emitted=emitted,
            error=str(exc),
            latency_ms=(time.perf_counter() - t0) * 1000.0,
        )

    def complete(
        self, request: CompletionRequest, *, token: Optional[CancellationToken] = None
    ) -> CompletionResult:
        """Issue one blocking request and decode the single JSON body."""
        token = self._deadline_token(request, token)
        ctx = self._ctx(request)
        payload = self.build_payload(request, stream=False)
        normalized_log_event(
            self._logger,
            "complete.start",
            ctx,
            phase="start",
            max_tokens=request.max_tokens or None,
            temperature=request.temperature,
        )
        t0 = time.perf_counter()
        try:
            if token is not None:
                token.raise_if_cancelled()
            try:
                response = self._client.post(
                    self._url(), json=payload, headers=self._headers, timeout=request_timeout(token)
                )
            except httpx.HTTPError as exc:
                raise translate_transport_error(
                    exc, token, provider=self.provider_name, model=request.model
                ) from exc
            if token is not None:
                token.raise_if_cancelled()
            raise_for_status(response, label=self.error_label, provider=self.provider_name, model=request.model)
            try:
                data = response.json()
            except ValueError as exc:
                raise self._error(
                    ErrorCode.DECODE, f"{self.provider_name}: invalid JSON response: {exc}", request.model, raw=exc
                ) from exc
            text, usage = self.parse_response(data)
        except (ProviderError, CancelledError) as exc:
            if isinstance(exc, ProviderError) and exc.model is None:
                exc.model = request.model
            self._log_failure("complete.error", ctx, exc, t0)
            raise
        normalized_log_event(
            self._logger,
            "complete.end",
            ctx,
            phase="finalize",
            emitted=1,
            tokens=usage,
            latency_ms=(time.perf_counter() - t0) * 1000.0,
        )
        return CompletionResult(text=text, usage=usage, provider=self.provider_name, model=request.model)

    def stream(
        self,
        request: CompletionRequest,
        on_delta: Optional[DeltaSink] = None,
        *,
        token: Optional[CancellationToken] = None,
    ) -> CompletionResult:
        """Issue one streaming request, forwarding deltas to ``on_delta``."""
        token = self._deadline_token(request, token)
        ctx = self._ctx(request)
        payload = self.build_payload(request, stream=True)
        normalized_log_event(
            self._logger,
            "stream.start",
            ctx,
            phase="start",
            max_tokens=request.max_tokens or None,
            temperature=request.temperature,
        )
        t0 = time.perf_counter()
        first_delta_ms: Optional[float] = None

        def _timed_sink(delta: str) -> None:
            nonlocal first_delta_ms
            if first_delta_ms is None:
                first_delta_ms = (time.perf_counter() - t0) * 1000.0
            if on_delta is not None:
                on_delta(delta)

        acc = DeltaAccumulator(_timed_sink, provider=self.provider_name, model=request.model)
        try:
            if token is not None:
                token.raise_if_cancelled()
            try:
                with self._client.stream(
                    "POST", self._url(), json=payload, headers=self._headers, timeout=request_timeout(token)
                ) as response:
                    if not response.is_success:
                        response.read()
                        raise_for_status(
                            response, label=self.error_label, provider=self.provider_name, model=request.model
                        )
                    self.consume_stream(LineReader(response.iter_bytes(), token=token), acc)
            except httpx.HTTPError as exc:
                raise translate_transport_error(
                    exc, token, provider=self.provider_name, model=request.model, partial=acc.result()
                ) from exc
        except CancelledError as exc:
            exc.partial = acc.result()
            self._log_failure("stream.cancelled", ctx, exc, t0, emitted=acc.emitted)
            raise
        except ProviderError as exc:
            if exc.partial is None:
                exc.partial = acc.result()
            if exc.model is None:
                exc.model = request.model
            self._log_failure("stream.error", ctx, exc, t0, emitted=acc.emitted)
            raise
        normalized_log_event(
            self._logger,
            "stream.end",
            ctx,
            phase="finalize",
            emitted=acc.emitted,
            tokens=acc.usage,
            latency_ms=(time.perf_counter() - t0) * 1000.0,
            time_to_first_delta_ms=first_delta_ms,
        )
        return acc.result()


__all__ = ["HTTPCompletionBackend"]
