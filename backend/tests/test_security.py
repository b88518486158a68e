"""
Tests for the per-IP rate limiter window and its bookkeeping.
"""

import pytest
from fastapi import Request
from fastapi.responses import PlainTextResponse

from utils_api.security import RateLimitMiddleware


class FakeClock:
    def __init__(self, start: float = 1000.0) -> None:
        self.now = start

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


async def _ok(request):
    return PlainTextResponse("ok")


async def _noop_app(scope, receive, send):
    return None


def _request(ip: str) -> Request:
    return Request(
        {
            "type": "http",
            "method": "GET",
            "path": "/version",
            "headers": [],
            "query_string": b"",
            "client": (ip, 50000),
        }
    )


@pytest.fixture
def clock():
    return FakeClock()


@pytest.mark.asyncio
async def test_window_expiry_lets_client_through_again(clock):
    limiter = RateLimitMiddleware(_noop_app, limit=1, window_seconds=60, clock=clock)

    assert (await limiter.dispatch(_request("10.0.0.1"), _ok)).status_code == 200
    blocked = await limiter.dispatch(_request("10.0.0.1"), _ok)
    assert blocked.status_code == 429
    assert blocked.headers["Retry-After"] == "61"

    clock.advance(30)
    assert (await limiter.dispatch(_request("10.0.0.1"), _ok)).status_code == 429

    clock.advance(31)
    assert (await limiter.dispatch(_request("10.0.0.1"), _ok)).status_code == 200


@pytest.mark.asyncio
async def test_limit_is_tracked_per_client(clock):
    limiter = RateLimitMiddleware(_noop_app, limit=1, window_seconds=60, clock=clock)

    assert (await limiter.dispatch(_request("10.0.0.1"), _ok)).status_code == 200
    assert (await limiter.dispatch(_request("10.0.0.2"), _ok)).status_code == 200
    assert (await limiter.dispatch(_request("10.0.0.1"), _ok)).status_code == 429


@pytest.mark.asyncio
async def test_idle_clients_are_forgotten(clock):
    limiter = RateLimitMiddleware(_noop_app, limit=5, window_seconds=1, clock=clock)

    for index in range(1000):
        await limiter.dispatch(_request(f"10.0.{index // 256}.{index % 256}"), _ok)
    assert len(limiter.requests) == 1000

    clock.advance(1.2)
    await limiter.dispatch(_request("192.168.1.1"), _ok)

    assert list(limiter.requests) == ["192.168.1.1"]


@pytest.mark.asyncio
async def test_active_clients_survive_cleanup(clock):
    limiter = RateLimitMiddleware(_noop_app, limit=5, window_seconds=10, clock=clock)

    await limiter.dispatch(_request("10.0.0.1"), _ok)
    clock.advance(8)
    await limiter.dispatch(_request("10.0.0.2"), _ok)
    clock.advance(4)
    await limiter.dispatch(_request("10.0.0.3"), _ok)

    assert set(limiter.requests) == {"10.0.0.2", "10.0.0.3"}
