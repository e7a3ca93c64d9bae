"""
FastAPI middleware for the translator sync server.
"""

import time
import uuid
from typing import Callable, List

from fastapi import Request, Response
from fastapi.middleware.cors import CORSMiddleware
from starlette.middleware.base import BaseHTTPMiddleware

from translator_server.utils.logging import api_logger


class RequestLoggingMiddleware(BaseHTTPMiddleware):
    """Middleware for logging HTTP requests and responses."""

    async def dispatch(self, request: Request, call_next: Callable) -> Response:
        correlation_id = request.headers.get("x-correlation-id") or str(uuid.uuid4())
        request.state.correlation_id = correlation_id

        start_time = time.perf_counter()
        method = request.method
        path = request.url.path

        api_logger.debug(
            f"Request started: {method} {path}",
            event="request_started",
            metadata={
                "correlation_id": correlation_id,
                "method": method,
                "path": path,
                "client_ip": request.client.host if request.client else "unknown",
                "user_agent": request.headers.get("user-agent", "unknown")
            }
        )

        try:
            response = await call_next(request)
        except Exception as e:
            process_time = time.perf_counter() - start_time
            api_logger.error(
                f"Request failed: {method} {path} - {str(e)}",
                event="request_failed",
                metrics={"processing_time_ms": round(process_time * 1000, 2)},
                metadata={
                    "correlation_id": correlation_id,
                    "method": method,
                    "path": path,
                    "error": str(e)
                },
                exc_info=True
            )
            raise

        process_time_ms = round((time.perf_counter() - start_time) * 1000, 2)
        api_logger.request_completed(method, path, response.status_code, process_time_ms, correlation_id)

        response.headers["X-Correlation-ID"] = correlation_id
        response.headers["X-Process-Time"] = str(process_time_ms)
        return response


def setup_cors_middleware(app, origins: List[str]):
    """Setup CORS middleware."""
    allow_all = "*" in origins
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"] if allow_all else origins,
        allow_credentials=not allow_all,
        allow_methods=["GET", "HEAD", "POST", "OPTIONS"],
        allow_headers=["*"],
        expose_headers=["X-Correlation-ID", "X-Process-Time"]
    )


def setup_middleware(app, cors_origins: List[str]):
    """Setup all middleware for the FastAPI app."""
    # Last added runs first.
    app.add_middleware(RequestLoggingMiddleware)
    setup_cors_middleware(app, cors_origins)
