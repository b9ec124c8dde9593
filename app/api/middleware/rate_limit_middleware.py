# ===== app/api/middleware/rate_limit_middleware.py =====
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request
from starlette.responses import JSONResponse
import logging
import time

logger = logging.getLogger(__name__)


class RateLimitMiddleware(BaseHTTPMiddleware):
    """
    Per-client rate limiting for the public (unauthenticated) routes.

    Sliding window of `window_seconds`, keyed by client host. State lives in
    the process, so each worker enforces its own limit.
    """

    def __init__(self, app, requests_per_window: int = 20, window_seconds: float = 60.0, path_prefix: str = "/api/v1/public/"):
        super().__init__(app)
        self.requests_per_window = requests_per_window
        self.window_seconds = window_seconds
        self.path_prefix = path_prefix
        self.request_times = {}
        self.last_sweep = time.time()

    def sweep(self, current_time: float) -> None:
        """Forget clients with no request inside the window, at most once per window"""
        if current_time - self.last_sweep < self.window_seconds:
            return

        self.request_times = {
            client_id: times for client_id, times in self.request_times.items()
            if times and current_time - times[-1] < self.window_seconds
        }
        self.last_sweep = current_time

    async def dispatch(self, request: Request, call_next):
        if not request.url.path.startswith(self.path_prefix):
            return await call_next(request)

        client_id = request.client.host if request.client else "unknown"
        current_time = time.time()
        self.sweep(current_time)

        # Remove old timestamps
        recent = [
            t for t in self.request_times.get(client_id, [])
            if current_time - t < self.window_seconds
        ]

        if len(recent) >= self.requests_per_window:
            self.request_times[client_id] = recent
            retry_after = max(1, int(self.window_seconds - (current_time - recent[0])))
            logger.warning(f"Rate limit exceeded for {client_id} on {request.url.path}")
            return JSONResponse(
                status_code=429,
                content={
                    "detail": "Rate limit exceeded. Too many requests.",
                    "retry_after": retry_after
                },
                headers={"Retry-After": str(retry_after)}
            )

        recent.append(current_time)
        self.request_times[client_id] = recent

        return await call_next(request)
