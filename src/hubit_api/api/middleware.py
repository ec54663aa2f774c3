"""CORS, request context, rate limiting, and security headers middleware."""

import time
import uuid
from typing import Any

from fastapi import FastAPI, Request, Response
from fastapi.middleware.cors import CORSMiddleware
from loguru import logger
from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.types import ASGIApp

from hubit_api.core.config import Settings

_DEFAULT_TRUSTED_HEADERS = ["CF-Connecting-IP", "X-Forwarded-For", "X-Real-IP"]

REQUEST_ID_HEADER = "X-Request-ID"
_WINDOW_SECONDS = 60.0


def get_client_ip(request: Request, trusted_headers: list[str] | None = None) -> str:
    """Extract the real client IP from proxy headers or direct connection.

    Checks headers in priority order. For X-Forwarded-For, uses the
    leftmost (client-supplied) IP. Falls back to request.client.host.

    Args:
        request: The incoming Starlette request.
        trusted_headers: Ordered list of header names to check.
            Defaults to ["CF-Connecting-IP", "X-Forwarded-For", "X-Real-IP"].

    Returns:
        The client IP address string, or "unknown" if not determinable.
    """
    headers = trusted_headers if trusted_headers is not None else _DEFAULT_TRUSTED_HEADERS

    for header in headers:
        value = request.headers.get(header, "").strip()
        if not value:
            continue
        # X-Forwarded-For can contain multiple IPs: "client, proxy1, proxy2"
        if header.lower() == "x-forwarded-for":
            return value.split(",")[0].strip()
        return value

    if request.client:
        return request.client.host
    return "unknown"


def setup_cors(app: FastAPI, settings: Settings) -> None:
    """Configure CORS middleware on the FastAPI app.

    Args:
        app: The FastAPI application.
        settings: Application settings.
    """
    kwargs: dict[str, Any] = {
        "allow_credentials": True,
        "allow_methods": ["*"],
        "allow_headers": ["*"],
    }
    if settings.cors_origin_list:
        kwargs["allow_origins"] = settings.cors_origin_list
    if settings.cors_origin_regex.strip():
        kwargs["allow_origin_regex"] = settings.cors_origin_regex.strip()
    app.add_middleware(CORSMiddleware, **kwargs)


class RequestContextMiddleware(BaseHTTPMiddleware):
    """Tag each request with an id and log its outcome.

    The id is taken from an incoming ``X-Request-ID`` header when present,
    bound into the Loguru context for the duration of the request, and
    echoed back on the response. The authorized subject, when the guard
    attached one, is included in the completion log line.
    """

    async def dispatch(self, request: Request, call_next: RequestResponseEndpoint) -> Response:
        request_id = request.headers.get(REQUEST_ID_HEADER) or uuid.uuid4().hex
        started = time.perf_counter()
        with logger.contextualize(request_id=request_id):
            response = await call_next(request)
            identity = getattr(request.state, "identity", None)
            subject = identity.subject_id if identity is not None else "-"
            elapsed_ms = (time.perf_counter() - started) * 1000
            logger.info(
                f"{request.method} {request.url.path} -> {response.status_code} "
                f"subject={subject} {elapsed_ms:.1f}ms"
            )
        response.headers[REQUEST_ID_HEADER] = request_id
        return response


class SecurityHeadersMiddleware(BaseHTTPMiddleware):
    """Add security headers to all responses."""

    async def dispatch(self, request: Request, call_next: RequestResponseEndpoint) -> Response:
        response = await call_next(request)
        response.headers["X-Content-Type-Options"] = "nosniff"
        response.headers["X-Frame-Options"] = "DENY"
        response.headers["Strict-Transport-Security"] = "max-age=31536000; includeSubDomains"
        response.headers["Cache-Control"] = "no-store"
        return response


class RateLimitMiddleware(BaseHTTPMiddleware):
    """In-memory per-IP rate limiting over a sliding one-minute window.

    Uses proxy headers to identify real client IPs behind reverse proxies.
    Clients with no request inside the window are dropped from the table,
    swept at most once per window.
    """

    def __init__(
        self,
        app: ASGIApp,
        requests_per_minute: int = 60,
        trusted_proxy_headers: list[str] | None = None,
    ) -> None:
        super().__init__(app)
        self.requests_per_minute = requests_per_minute
        self.trusted_proxy_headers = trusted_proxy_headers
        self._request_counts: dict[str, list[float]] = {}
        self._last_sweep = 0.0

    async def dispatch(self, request: Request, call_next: RequestResponseEndpoint) -> Response:
        client_ip = get_client_ip(request, self.trusted_proxy_headers)
        now = time.time()
        window_start = now - _WINDOW_SECONDS

        if now - self._last_sweep >= _WINDOW_SECONDS:
            self._evict_idle(window_start)
            self._last_sweep = now

        recent = [t for t in self._request_counts.get(client_ip, []) if t > window_start]
        if len(recent) >= self.requests_per_minute:
            self._request_counts[client_ip] = recent
            logger.warning(f"Rate limit exceeded for {client_ip}")
            return Response(
                content='{"detail":"Rate limit exceeded","code":"rate_limited"}',
                status_code=429,
                media_type="application/json",
                headers={"Retry-After": "60"},
            )

        recent.append(now)
        self._request_counts[client_ip] = recent
        return await call_next(request)

    def _evict_idle(self, window_start: float) -> None:
        idle = [ip for ip, stamps in self._request_counts.items() if not stamps or stamps[-1] <= window_start]
        for ip in idle:
            del self._request_counts[ip]
