"""Error classification and HTTP helper tests."""

from __future__ import annotations

import time

import httpx
import pytest

from relay_providers.base.cancellation import CancellationToken, CancelledError, DeadlineExceededError
from relay_providers.base.errors import ErrorCode, ProviderError, ResolutionError, classify_exception, code_for_status
from relay_providers.base.http import raise_for_status, request_timeout, translate_transport_error, truncate_body


@pytest.mark.parametrize(
    "status,code",
    [
        (400, ErrorCode.VALIDATION),
        (401, ErrorCode.AUTH),
        (403, ErrorCode.AUTH),
        (404, ErrorCode.NOT_FOUND),
        (418, ErrorCode.VALIDATION),
        (429, ErrorCode.RATE_LIMIT),
        (500, ErrorCode.SERVER_ERROR),
        (503, ErrorCode.UNAVAILABLE),
        (504, ErrorCode.TIMEOUT),
        (599, ErrorCode.SERVER_ERROR),
    ],
)
def test_code_for_status(status, code):
    assert code_for_status(status) is code  # nosec B101


def test_classify_exception_precedence():
    assert classify_exception(httpx.ReadTimeout("slow")) is ErrorCode.TIMEOUT  # nosec B101
    assert classify_exception(TimeoutError()) is ErrorCode.TIMEOUT  # nosec B101
    assert classify_exception(httpx.ConnectError("refused")) is ErrorCode.TRANSIENT  # nosec B101
    assert classify_exception(ValueError("bad json")) is ErrorCode.DECODE  # nosec B101
    assert classify_exception(RuntimeError("?")) is ErrorCode.UNKNOWN  # nosec B101
    err = ProviderError(code=ErrorCode.AUTH, message="m", provider="openai")
    assert classify_exception(err) is ErrorCode.AUTH  # nosec B101


def test_provider_error_str_and_resolution_error():
    err = ProviderError(code=ErrorCode.DECODE, message="bad body", provider="ollama", model="llama3")
    assert str(err) == "ollama:llama3 decode: bad body"  # nosec B101
    res = ResolutionError("no provider keys found", variable="RELAY_API_KEY")
    assert isinstance(res, ProviderError)  # nosec B101
    assert res.code is ErrorCode.RESOLUTION  # nosec B101
    assert str(res) == "no provider keys found"  # nosec B101


def test_truncate_body():
    assert truncate_body("  short  ") == "short"  # nosec B101
    assert truncate_body("y" * 400) == "y" * 400  # nosec B101
    assert truncate_body("y" * 401) == "y" * 400 + "..."  # nosec B101


def test_raise_for_status_passes_success_and_raises_failure():
    raise_for_status(httpx.Response(204), label="openai error", provider="openai", model="m")
    with pytest.raises(ProviderError) as excinfo:
        raise_for_status(httpx.Response(502, text="upstream"), label="ollama error", provider="ollama", model="m")
    assert excinfo.value.message == "ollama error: 502 - upstream"  # nosec B101
    assert excinfo.value.status_code == 502  # nosec B101


def test_request_timeout_follows_token():
    assert request_timeout(None) is None  # nosec B101
    assert request_timeout(CancellationToken()) is None  # nosec B101
    timeout = request_timeout(CancellationToken.with_timeout(30))
    assert timeout is not None and 0 < timeout.read <= 30  # nosec B101
    expired = request_timeout(CancellationToken(deadline=time.monotonic() - 5))
    assert expired is not None and expired.read > 0  # nosec B101


def test_translate_transport_error_precedence():
    exc = httpx.ReadError("reset")
    plain = translate_transport_error(exc, None, provider="openai", model="m")
    assert isinstance(plain, ProviderError) and plain.code is ErrorCode.TRANSIENT  # nosec B101
    assert plain.message == "openai request failed: reset"  # nosec B101

    token = CancellationToken()
    token.cancel("user")
    cancelled = translate_transport_error(exc, token, provider="openai", model="m", partial="p")
    assert type(cancelled) is CancelledError and cancelled.partial == "p"  # nosec B101

    with_deadline = CancellationToken.with_timeout(60)
    timed_out = translate_transport_error(httpx.ReadTimeout("slow"), with_deadline, provider="openai", model="m")
    assert isinstance(timed_out, DeadlineExceededError)  # nosec B101

    no_deadline = translate_transport_error(httpx.ReadTimeout("slow"), CancellationToken(), provider="openai", model="m")
    assert isinstance(no_deadline, ProviderError) and no_deadline.code is ErrorCode.TIMEOUT  # nosec B101
