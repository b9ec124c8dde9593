"""
FastAPI application for ZebraTime bookings

Public booking widget API, confirmation links and the voice-assistant webhook
"""
import logging
from collections import defaultdict
from contextlib import asynccontextmanager

import uvicorn
from fastapi import FastAPI, Request
from fastapi.encoders import jsonable_encoder
from fastapi.exception_handlers import request_validation_exception_handler
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from fastapi.routing import APIRoute

from app.api.middleware.rate_limit_middleware import RateLimitMiddleware
from app.api.v1.router import api_v1_router
from app.config.settings import get_settings
from app.core.middleware import correlation_id_middleware, request_logging_middleware
from app.core.monitoring import health_router
from app.utils.my_logging import setup_logging
from app.webhooks.router import webhook_router

settings = get_settings()
logger = logging.getLogger(__name__)

PUBLIC_API_PREFIX = "/api/v1/public/"


def log_routes(app: FastAPI) -> None:
    """Log every registered route, grouped by tag"""
    routes_by_tag = defaultdict(list)
    for route in app.routes:
        if isinstance(route, APIRoute):
            tag = route.tags[0] if route.tags else "other"
            for method in sorted(route.methods):
                routes_by_tag[tag].append((method, route.path, route.name))

    for tag, routes in sorted(routes_by_tag.items()):
        logger.info(f"[{tag.upper()}]")
        for method, path, name in sorted(routes, key=lambda r: (r[1], r[0])):
            logger.info(f"  {method:8} {path:55} ({name})")


async def public_validation_handler(request: Request, exc: RequestValidationError):
    """Invalid input on the public API is a 400; other routes keep FastAPI's 422"""
    if not request.url.path.startswith(PUBLIC_API_PREFIX):
        return await request_validation_exception_handler(request, exc)

    logger.info(f"Rejected invalid input on {request.method} {request.url.path}")
    return JSONResponse(status_code=400, content={"detail": jsonable_encoder(exc.errors())})


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan events"""
    setup_logging()
    logger.info(f"{settings.APP_NAME} starting up")
    if settings.DEBUG:
        log_routes(app)

    yield

    logger.info(f"{settings.APP_NAME} shutting down")


def create_app() -> FastAPI:
    """Create and configure FastAPI application"""

    app = FastAPI(
        title=settings.APP_NAME,
        description="Restaurant booking availability and table assignment",
        version="0.1.0",
        lifespan=lifespan,
        docs_url="/docs" if settings.DEBUG else None,
        redoc_url="/redoc" if settings.DEBUG else None,
    )

    app.add_exception_handler(RequestValidationError, public_validation_handler)

    app.add_middleware(
        RateLimitMiddleware,
        requests_per_window=settings.PUBLIC_RATE_LIMIT_PER_MINUTE,
        window_seconds=60.0,
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.ALLOWED_ORIGINS,
        allow_credentials=True,
        allow_methods=["GET", "POST"],
        allow_headers=["*"],
    )

    # Registered last so the correlation ID is set before anything logs
    app.middleware("http")(request_logging_middleware)
    app.middleware("http")(correlation_id_middleware)

    app.include_router(webhook_router, prefix="/webhooks", tags=["webhooks"])
    app.include_router(health_router, prefix="/health", tags=["monitoring"])
    app.include_router(api_v1_router, prefix="/api/v1")

    @app.get("/")
    async def root():
        return {
            "service": settings.APP_NAME,
            "version": "0.1.0",
            "status": "running",
            "endpoints": {
                "public": "/api/v1/public/",
                "webhooks": "/webhooks/",
                "health": "/health",
                "docs": "/docs" if settings.DEBUG else "disabled"
            }
        }

    return app


app = create_app()


if __name__ == "__main__":
    uvicorn.run(
        "app.main:app",
        host=settings.HOST,
        port=settings.PORT,
        reload=settings.DEBUG,
        log_level=settings.LOG_LEVEL.lower()
    )
