"""
Logging middleware for request/response tracking.

Logs every HTTP request with method, path, status code, latency, the
correlation ID and the authenticated principal (when there is one).
Failed requests are logged with their traceback and re-raised.

Must be registered so that it runs AFTER RequestIDMiddleware.
"""

import time
from typing import Callable

from fastapi import Request, Response
from starlette.middleware.base import BaseHTTPMiddleware

from carmaint.core.logging_config import get_logger


logger = get_logger(__name__)


def _principal_name(request: Request):
    principal = getattr(request.state, "principal", None)
    return principal.username if principal is not None else None


class LoggingMiddleware(BaseHTTPMiddleware):
    """
    Middleware to log all HTTP requests and responses.

    Log output (JSON):
        {
            "timestamp": "2025-11-24T10:30:00.123456+00:00",
            "level": "INFO",
            "message": "Request completed",
            "method": "GET",
            "path": "/maintenance",
            "status_code": 200,
            "latency_ms": 12.5,
            "request_id": "abc-123",
            "principal": "user"
        }
    """

    async def dispatch(
        self, request: Request, call_next: Callable
    ) -> Response:
        method = request.method
        path = request.url.path
        query_params = str(request.query_params) if request.query_params else None
        request_id = getattr(request.state, "request_id", None)

        logger.info(
            "Request started",
            extra={
                "method": method,
                "path": path,
                "query_params": query_params,
                "request_id": request_id,
            }
        )

        start_time = time.perf_counter()

        try:
            response = await call_next(request)
        except Exception as exc:
            latency_ms = (time.perf_counter() - start_time) * 1000
            logger.error(
                f"Request failed: {exc}",
                extra={
                    "method": method,
                    "path": path,
                    "latency_ms": round(latency_ms, 2),
                    "request_id": request_id,
                    "principal": _principal_name(request),
                    "exception_type": type(exc).__name__,
                },
                exc_info=True
            )
            raise

        latency_ms = (time.perf_counter() - start_time) * 1000
        logger.info(
            "Request completed",
            extra={
                "method": method,
                "path": path,
                "status_code": response.status_code,
                "latency_ms": round(latency_ms, 2),
                "request_id": request_id,
                "principal": _principal_name(request),
            }
        )
        return response
