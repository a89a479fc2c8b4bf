"""
Creator Swipes Backend — Rate Limiter Tests
============================================

What:  FixedWindowCounter semantics and RateLimitMiddleware responses.
How:   A fake clock drives the counter; a throwaway FastAPI app hosts the
       middleware with a tiny limit so the real app's budget is untouched.
"""

import pytest
from fastapi import FastAPI
from httpx import ASGITransport, AsyncClient

from app.config import settings
from app.main import create_app
from app.middleware.rate_limit import FixedWindowCounter, RateLimitMiddleware


class FakeClock:
    def __init__(self, now: float = 1000.0):
        self.now = now

    def __call__(self) -> float:
        return self.now


class TestFixedWindowCounter:

    def test_admits_up_to_limit(self):
        counter = FixedWindowCounter(limit=3, window=60, clock=FakeClock())

        decisions = [counter.hit("1.2.3.4") for _ in range(4)]

        assert [d.allowed for d in decisions] == [True, True, True, False]
        assert [d.remaining for d in decisions] == [2, 1, 0, 0]

    def test_keys_are_independent(self):
        counter = FixedWindowCounter(limit=1, window=60, clock=FakeClock())

        assert counter.hit("a").allowed
        assert not counter.hit("a").allowed
        assert counter.hit("b").allowed

    def test_window_expiry_resets_count(self):
        clock = FakeClock()
        counter = FixedWindowCounter(limit=2, window=60, clock=clock)
        counter.hit("ip")
        counter.hit("ip")
        assert not counter.hit("ip").allowed

        clock.now += 60

        decision = counter.hit("ip")
        assert decision.allowed
        assert decision.remaining == 1

    def test_window_is_fixed_not_sliding(self):
        """Hits late in a window do not extend it."""
        clock = FakeClock()
        counter = FixedWindowCounter(limit=2, window=60, clock=clock)
        counter.hit("ip")
        clock.now += 59
        counter.hit("ip")
        assert not counter.hit("ip").allowed

        clock.now += 1
        assert counter.hit("ip").allowed

    def test_reset_after_counts_down(self):
        clock = FakeClock()
        counter = FixedWindowCounter(limit=5, window=60, clock=clock)
        assert counter.hit("ip").reset_after == 60
        clock.now += 45.5
        assert counter.hit("ip").reset_after == 15

    def test_expired_keys_are_purged(self):
        clock = FakeClock()
        counter = FixedWindowCounter(limit=10, window=60, clock=clock)
        counter.CLEANUP_EVERY = 3
        counter.hit("old-1")
        counter.hit("old-2")
        clock.now += 61

        counter.hit("new")

        assert len(counter) == 1


def _app(limit: int) -> FastAPI:
    app = FastAPI()
    app.add_middleware(RateLimitMiddleware, limit=limit, window=60)

    @app.get("/ping")
    async def ping():
        return {"ok": True}

    @app.get("/health")
    async def health():
        return {"status": "healthy"}

    return app


class TestRateLimitMiddleware:

    @pytest.mark.asyncio
    async def test_rejects_after_limit(self):
        transport = ASGITransport(app=_app(limit=2))
        async with AsyncClient(transport=transport, base_url="http://test") as client:
            first = await client.get("/ping")
            second = await client.get("/ping")
            third = await client.get("/ping")

        assert first.status_code == 200
        assert first.headers["X-RateLimit-Limit"] == "2"
        assert first.headers["X-RateLimit-Remaining"] == "1"
        assert second.status_code == 200
        assert third.status_code == 429
        assert third.json()["error"] == "rate_limit_exceeded"
        assert int(third.headers["Retry-After"]) > 0

    @pytest.mark.asyncio
    async def test_health_is_exempt(self):
        transport = ASGITransport(app=_app(limit=1))
        async with AsyncClient(transport=transport, base_url="http://test") as client:
            await client.get("/ping")
            responses = [await client.get("/health") for _ in range(3)]

        assert all(r.status_code == 200 for r in responses)


class TestApplicationChain:
    """The limiter as wired into create_app()."""

    @pytest.mark.asyncio
    async def test_rejection_carries_request_id(self, monkeypatch):
        monkeypatch.setattr(settings, "rate_limit_requests", 1)
        transport = ASGITransport(app=create_app())
        async with AsyncClient(transport=transport, base_url="http://test") as client:
            await client.get("/")
            rejected = await client.get("/")
            traced = await client.get("/", headers={"X-Request-ID": "trace-429"})

        assert rejected.status_code == 429
        assert rejected.json()["error"] == "rate_limit_exceeded"
        assert rejected.headers["X-Request-ID"]
        assert rejected.json()["request_id"] == rejected.headers["X-Request-ID"]
        assert traced.status_code == 429
        assert traced.headers["X-Request-ID"] == "trace-429"
        assert traced.json()["request_id"] == "trace-429"
