"""Slow-request logging middleware."""

import logging
import time
from typing import Callable

from fastapi import Request, Response
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.types import ASGIApp

logger = logging.getLogger(__name__)


class PerformanceMiddleware(BaseHTTPMiddleware):
    """
    Adds X-Response-Time and logs slow requests.

    Suggestion requests wait on one recipe call plus N image calls, so the
    thresholds are configured in seconds rather than milliseconds.
    """

    def __init__(
        self,
        app: ASGIApp,
        slow_request_threshold: float = 10.0,
        very_slow_request_threshold: float = 30.0,
    ):
        super().__init__(app)
        self.slow_threshold = slow_request_threshold
        self.very_slow_threshold = very_slow_request_threshold

    async def dispatch(self, request: Request, call_next: Callable) -> Response:
        start_time = time.time()
        response = await call_next(request)
        duration = time.time() - start_time
        duration_ms = round(duration * 1000, 2)

        response.headers["X-Response-Time"] = f"{duration_ms}ms"

        method = request.method
        path = request.url.path
        log_data = {
            "request_id": getattr(request.state, "request_id", "unknown"),
            "method": method,
            "path": path,
            "status_code": response.status_code,
            "duration_ms": duration_ms,
        }

        if duration >= self.very_slow_threshold:
            logger.error(f"VERY SLOW REQUEST: {method} {path} took {duration_ms}ms", extra=log_data)
        elif duration >= self.slow_threshold:
            logger.warning(f"Slow request: {method} {path} took {duration_ms}ms", extra=log_data)

        return response
