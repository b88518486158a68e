"""
HTTP hardening: security headers, CORS and a per-IP request limit.
"""

from __future__ import annotations

import logging
import time
from collections import defaultdict, deque
from typing import Callable, Deque, Dict

from fastapi import FastAPI, Request, Response, status
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.middleware.base import BaseHTTPMiddleware

from .config import AppConfig

logger = logging.getLogger(__name__)

SECURITY_HEADERS: Dict[str, str] = {
    "Content-Security-Policy": "default-src 'self';base-uri 'self';font-src 'self' https: data:;"
    "form-action 'self';frame-ancestors 'self';img-src 'self' data: https:;object-src 'none';"
    "script-src 'self' https://cdn.jsdelivr.net 'unsafe-inline';"
    "style-src 'self' https: 'unsafe-inline';upgrade-insecure-requests",
    "Cross-Origin-Opener-Policy": "same-origin",
    "Cross-Origin-Resource-Policy": "same-origin",
    "Origin-Agent-Cluster": "?1",
    "Referrer-Policy": "no-referrer",
    "Strict-Transport-Security": "max-age=15552000; includeSubDomains",
    "X-Content-Type-Options": "nosniff",
    "X-DNS-Prefetch-Control": "off",
    "X-Download-Options": "noopen",
    "X-Frame-Options": "SAMEORIGIN",
    "X-Permitted-Cross-Domain-Policies": "none",
    "X-XSS-Protection": "0",
}

RATE_LIMIT_MESSAGE = "Too many requests created from this IP, please try again after 1 minute"


class SecurityHeadersMiddleware(BaseHTTPMiddleware):
    async def dispatch(self, request: Request, call_next: Callable) -> Response:
        response = await call_next(request)
        for header, value in SECURITY_HEADERS.items():
            response.headers.setdefault(header, value)
        return response


class RateLimitMiddleware(BaseHTTPMiddleware):
    """
    Sliding-window request limit per client IP.

    State lives in process memory, so each worker enforces its own window.
    """

    def __init__(
        self,
        app,
        limit: int,
        window_seconds: int = 60,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        super().__init__(app)
        self.limit = limit
        self.window_seconds = window_seconds
        self.requests: Dict[str, Deque[float]] = defaultdict(deque)
        self.clock = clock
        self._last_cleanup = clock()

    async def dispatch(self, request: Request, call_next: Callable) -> Response:
        client_ip = request.client.host if request.client else "unknown"
        now = self.clock()
        self._cleanup_idle_clients(now)
        history = self.requests[client_ip]

        cutoff = now - self.window_seconds
        while history and history[0] <= cutoff:
            history.popleft()

        if len(history) >= self.limit:
            retry_after = int(self.window_seconds - (now - history[0])) + 1
            logger.warning(
                "Rate limit exceeded for %s (%d requests in %ds)",
                client_ip,
                len(history),
                self.window_seconds,
            )
            return JSONResponse(
                {"detail": RATE_LIMIT_MESSAGE},
                status_code=status.HTTP_429_TOO_MANY_REQUESTS,
                headers={"Retry-After": str(retry_after)},
            )

        history.append(now)
        return await call_next(request)

    def _cleanup_idle_clients(self, now: float) -> None:
        """Forget clients whose last request fell out of the window."""
        if now - self._last_cleanup < self.window_seconds:
            return

        self._last_cleanup = now
        cutoff = now - self.window_seconds
        idle = [ip for ip, history in self.requests.items() if not history or history[-1] <= cutoff]
        for ip in idle:
            del self.requests[ip]

        if idle:
            logger.debug("Dropped %d idle rate limit entries", len(idle))


def setup_security(app: FastAPI, config: AppConfig) -> None:
    # Starlette runs the last added middleware first: CORS, then headers, then limit.
    app.add_middleware(
        RateLimitMiddleware,
        limit=config.security.request_limit,
        window_seconds=config.security.rate_limit_window_seconds,
    )
    app.add_middleware(SecurityHeadersMiddleware)
    if config.security.allowed_cors:
        app.add_middleware(
            CORSMiddleware,
            allow_origins=config.security.allowed_cors,
            allow_credentials=True,
            allow_methods=["GET", "HEAD", "PUT", "PATCH", "POST", "DELETE", "OPTIONS"],
            allow_headers=["*"],
        )
