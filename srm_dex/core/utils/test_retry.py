from unittest.mock import AsyncMock, patch

import httpx
import pytest

from srm_dex.core.utils.retry import (
    exponential_backoff_s,
    is_retryable_http_error,
    retry_after_s,
    retry_async,
)


def status_error(status: int, headers: dict | None = None) -> httpx.HTTPStatusError:
    request = httpx.Request("POST", "https://rpc.example")
    response = httpx.Response(status, headers=headers, request=request)
    return httpx.HTTPStatusError("err", request=request, response=response)


def test_exponential_backoff():
    assert exponential_backoff_s(0) == 0.25
    assert exponential_backoff_s(3) == 2.0
    assert exponential_backoff_s(10, max_delay_s=5.0) == 5.0


@pytest.mark.parametrize(
    "exc,expected",
    [
        (status_error(429), True),
        (status_error(503), True),
        (status_error(400), False),
        (httpx.ConnectError("down"), True),
        (ValueError("nope"), False),
    ],
)
def test_is_retryable_http_error(exc, expected):
    assert is_retryable_http_error(exc) is expected


def test_retry_after_header_wins():
    assert retry_after_s(status_error(429, {"Retry-After": "3"}), 0) == 3.0
    assert retry_after_s(status_error(429, {"Retry-After": "soon"}), 1) == 0.5


@pytest.mark.asyncio
async def test_retry_async_retries_then_succeeds():
    fn = AsyncMock(side_effect=[status_error(502), "ok"])
    seen = []

    with patch("srm_dex.core.utils.retry.asyncio.sleep", new=AsyncMock()) as sleep:
        result = await retry_async(
            fn, on_retry=lambda attempt, exc, delay: seen.append((attempt, delay))
        )

    assert result == "ok"
    assert fn.await_count == 2
    assert seen == [(0, 0.25)]
    sleep.assert_awaited_once_with(0.25)


@pytest.mark.asyncio
async def test_retry_async_does_not_retry_client_errors():
    fn = AsyncMock(side_effect=status_error(404))

    with pytest.raises(httpx.HTTPStatusError):
        await retry_async(fn)
    assert fn.await_count == 1


@pytest.mark.asyncio
async def test_retry_async_gives_up_after_max_retries():
    fn = AsyncMock(side_effect=status_error(500))

    with patch("srm_dex.core.utils.retry.asyncio.sleep", new=AsyncMock()):
        with pytest.raises(httpx.HTTPStatusError):
            await retry_async(fn, max_retries=2)
    assert fn.await_count == 2


@pytest.mark.asyncio
async def test_retry_async_rejects_zero_retries():
    with pytest.raises(ValueError):
        await retry_async(AsyncMock(), max_retries=0)
