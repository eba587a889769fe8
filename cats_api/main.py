"""Cats API — FastAPI application entry point and composition root.

Invariants:
    - Routes registered explicitly (no auto-discovery)
    - Global error handlers map CatsApiError → structured JSON responses
    - CORS configured from settings (not hardcoded)
    - Each app owns exactly one repository + service, built in create_app()
      and reachable only through app.state (no module-level store)

Design Decisions:
    - App factory: tests build isolated apps with a fixed clock, uvicorn
      serves the module-level `app`
    - Lifespan over @app.on_event: logging configured once on startup
"""

import logging
import time
from contextlib import asynccontextmanager

import uvicorn
from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware

from cats_api.api.error_handlers import register_error_handlers
from cats_api.api.routes import cats, health
from cats_api.config import Settings, get_settings
from cats_api.core.clock import Clock, utc_now
from cats_api.core.repository_protocols import CatRepository
from cats_api.infrastructure.in_memory_cats import InMemoryCatRepository
from cats_api.infrastructure.observability import setup_logging
from cats_api.services.cats_service import CatsService

logger = logging.getLogger(__name__)


def create_app(
    settings: Settings | None = None,
    clock: Clock = utc_now,
    repository: CatRepository | None = None,
) -> FastAPI:
    """Build a fully wired FastAPI app."""
    settings = settings or get_settings()

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        """Startup/shutdown lifecycle."""
        setup_logging(settings.log_level, settings.log_format)
        logger.info(f"{settings.app_name} {settings.app_version} started")
        yield
        logger.info(f"{settings.app_name} shutting down")

    app = FastAPI(
        title="Cats API", version=settings.app_version, lifespan=lifespan,
    )
    app.state.started_at_ms = int(time.time() * 1000)
    app.state.cats_service = CatsService(
        repository or InMemoryCatRepository(clock), clock,
    )

    # CORS origins come from settings
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.middleware("http")
    async def log_requests(request: Request, call_next):
        start = time.perf_counter()
        response = await call_next(request)
        duration_ms = round((time.perf_counter() - start) * 1000, 2)
        logger.info(
            f"{request.method} {request.url.path} {response.status_code}",
            extra={
                "method": request.method,
                "path": request.url.path,
                "status_code": response.status_code,
                "duration_ms": duration_ms,
            },
        )
        return response

    # Routes
    app.include_router(health.router)
    app.include_router(cats.router)

    register_error_handlers(app)
    return app


app = create_app()


def run() -> None:
    """Console entry point: serve the app with uvicorn."""
    settings = get_settings()
    uvicorn.run(
        "cats_api.main:app", host=settings.host, port=settings.port,
        log_level=settings.log_level.lower(),
    )
