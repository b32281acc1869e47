"""
Request logging middleware.
Logs method, path, status and duration for every API request.
"""

from typing import Callable
from fastapi import Request, Response
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.types import ASGIApp
import logging
import time

logger = logging.getLogger(__name__)


class RequestLoggingMiddleware(BaseHTTPMiddleware):
    """
    Middleware timing each request.
    Adds an X-Processing-Time header and warns about slow requests.
    """

    def __init__(
        self,
        app: ASGIApp,
        path_prefix: str = "/api",
        slow_request_threshold: float = 2.0  # seconds
    ):
        super().__init__(app)
        self.path_prefix = path_prefix
        self.slow_request_threshold = slow_request_threshold

    async def dispatch(self, request: Request, call_next: Callable) -> Response:
        """
        Process request through the logging middleware.

        Args:
            request: FastAPI request object
            call_next: Next middleware/handler in chain

        Returns:
            Response object with timing header
        """
        start_time = time.perf_counter()

        response = await call_next(request)

        duration = time.perf_counter() - start_time
        response.headers["X-Processing-Time"] = f"{duration:.4f}"

        path = request.url.path
        if path.startswith(self.path_prefix):
            duration_ms = int(duration * 1000)
            log_extra = {
                "method": request.method,
                "path": path,
                "status_code": response.status_code,
                "duration_ms": duration_ms
            }

            if duration > self.slow_request_threshold:
                logger.warning(
                    f"Slow request: {request.method} {path} {response.status_code} in {duration_ms}ms",
                    extra=log_extra
                )
            else:
                logger.info(
                    f"{request.method} {path} {response.status_code} in {duration_ms}ms",
                    extra=log_extra
                )

        return response
