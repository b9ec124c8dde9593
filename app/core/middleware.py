# app/core/middleware.py
"""Request tracing middleware"""
import logging
import time
import uuid
from contextvars import ContextVar

from starlette.requests import Request

logger = logging.getLogger(__name__)

# Read by the logging filter so every record of a request carries its id
correlation_id_var: ContextVar[str] = ContextVar("correlation_id", default="-")

QUIET_PATHS = ("/health",)


async def correlation_id_middleware(request: Request, call_next):
    """Tag each request with a correlation ID, reusing the caller's when sent"""
    correlation_id = request.headers.get("X-Correlation-ID") or str(uuid.uuid4())
    request.state.correlation_id = correlation_id
    token = correlation_id_var.set(correlation_id)

    try:
        response = await call_next(request)
    finally:
        correlation_id_var.reset(token)

    response.headers["X-Correlation-ID"] = correlation_id
    return response


async def request_logging_middleware(request: Request, call_next):
    """Log method, path, status and duration of every non-health request"""
    if request.url.path.startswith(QUIET_PATHS):
        return await call_next(request)

    start_time = time.perf_counter()
    response = await call_next(request)
    duration_ms = round((time.perf_counter() - start_time) * 1000, 2)

    client = request.client.host if request.client else "unknown"
    logger.info(f"{request.method} {request.url.path} -> {response.status_code} ({duration_ms} ms, client {client})")

    return response
