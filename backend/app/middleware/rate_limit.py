"""
Creator Swipes Backend — Rate Limiting Middleware
==================================================

What:  Per-IP fixed window rate limiter applied to every request.
How:   A process-wide counter store maps client IP → (window start, count).
       The middleware asks the store to admit each request and either passes
       it on or answers 429 itself.
Who:   Applied to every request via Starlette middleware.
When:  Inside RequestID and logging, ahead of CORS and routing.

Algorithm: Fixed Window Counter
    1. Look up the IP's window; if none exists or it has expired, start a
       new window at `now` with count 0
    2. If count >= limit, deny until the window's end
    3. Otherwise increment the count and allow

    Default: 100 requests per 60 seconds per IP.

Response headers (every admitted or rejected request):
    X-RateLimit-Limit      – requests allowed per window
    X-RateLimit-Remaining  – requests left in the current window
    X-RateLimit-Reset      – seconds until the current window ends
    Retry-After            – on 429 only

Scope:
    State lives in process memory. Each uvicorn worker keeps its own table,
    so N workers admit up to N × limit requests per IP.
"""

import logging
import math
import threading
import time
from dataclasses import dataclass
from typing import Callable, Dict, Optional

from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import JSONResponse, Response

from app.config import settings
from app.exceptions import RateLimitExceededError
from app.middleware.request_id import request_id_var

logger = logging.getLogger(__name__)


@dataclass
class WindowState:
    started_at: float
    count: int


@dataclass(frozen=True)
class RateLimitDecision:
    """Outcome of one admission check."""
    allowed: bool
    limit: int
    remaining: int
    reset_after: int  # whole seconds until the window ends


class FixedWindowCounter:
    """
    Thread-safe fixed window counter keyed by an arbitrary string (client IP).

    Args:
        limit:  Requests admitted per key per window
        window: Window length in seconds
        clock:  Monotonic time source; injectable for tests
    """

    # Purge expired keys after this many admissions
    CLEANUP_EVERY = 1000

    def __init__(
        self,
        limit: int,
        window: float,
        clock: Callable[[], float] = time.monotonic,
    ):
        self.limit = limit
        self.window = window
        self._clock = clock
        self._windows: Dict[str, WindowState] = {}
        self._lock = threading.Lock()
        self._since_cleanup = 0

    def hit(self, key: str) -> RateLimitDecision:
        """Records one request for `key` and reports whether it is admitted."""
        now = self._clock()
        with self._lock:
            state = self._windows.get(key)
            if state is None or now - state.started_at >= self.window:
                state = WindowState(started_at=now, count=0)
                self._windows[key] = state

            reset_after = max(1, math.ceil(state.started_at + self.window - now))

            if state.count >= self.limit:
                return RateLimitDecision(False, self.limit, 0, reset_after)

            state.count += 1
            self._since_cleanup += 1
            if self._since_cleanup >= self.CLEANUP_EVERY:
                self._purge_expired(now)

            return RateLimitDecision(True, self.limit, self.limit - state.count, reset_after)

    def _purge_expired(self, now: float) -> None:
        """Drops keys whose window ended. Caller holds the lock."""
        expired = [
            key for key, state in self._windows.items()
            if now - state.started_at >= self.window
        ]
        for key in expired:
            del self._windows[key]
        self._since_cleanup = 0
        if expired:
            logger.debug("Cleaned up %d expired rate limit windows", len(expired))

    def __len__(self) -> int:
        return len(self._windows)

    def reset(self) -> None:
        with self._lock:
            self._windows.clear()
            self._since_cleanup = 0


def client_ip(request: Request) -> str:
    """Remote address of the connection; behind a proxy this is the proxy's address."""
    return getattr(request.client, "host", "unknown") if request.client else "unknown"


class RateLimitMiddleware(BaseHTTPMiddleware):
    """
    Starlette middleware wrapping a FixedWindowCounter.

    Configuration (from settings unless passed explicitly):
        rate_limit_requests: Max requests per window (default: 100)
        rate_limit_window: Window duration in seconds (default: 60)

    Excluded paths:
        - /health: probes must not consume client budgets
        - /docs, /redoc, /openapi.json: API documentation
    """

    EXCLUDED_PATHS = {"/health", "/docs", "/openapi.json", "/redoc"}

    def __init__(
        self,
        app,
        limit: Optional[int] = None,
        window: Optional[int] = None,
        counter: Optional[FixedWindowCounter] = None,
        **kwargs,
    ):
        super().__init__(app, **kwargs)
        self.counter = counter or FixedWindowCounter(
            limit=limit if limit is not None else settings.rate_limit_requests,
            window=window if window is not None else settings.rate_limit_window,
        )

    async def dispatch(
        self, request: Request, call_next: RequestResponseEndpoint
    ) -> Response:
        if request.url.path in self.EXCLUDED_PATHS:
            return await call_next(request)

        ip = client_ip(request)
        decision = self.counter.hit(ip)
        headers = {
            "X-RateLimit-Limit": str(decision.limit),
            "X-RateLimit-Remaining": str(decision.remaining),
            "X-RateLimit-Reset": str(decision.reset_after),
        }

        if not decision.allowed:
            logger.warning(
                "Rate limit exceeded for IP %s: %d requests in %ss window",
                ip,
                decision.limit,
                self.counter.window,
            )
            exc = RateLimitExceededError(retry_after=decision.reset_after)
            # Answered here: exceptions raised inside BaseHTTPMiddleware bypass
            # the app's exception handlers
            return JSONResponse(
                status_code=429,
                content={
                    "error": "rate_limit_exceeded",
                    "message": exc.message,
                    "details": exc.context,
                    "request_id": request_id_var.get(""),
                },
                headers={**headers, "Retry-After": str(decision.reset_after)},
            )

        response = await call_next(request)
        response.headers.update(headers)
        return response
