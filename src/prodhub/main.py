"""FastAPI application factory.

Learn: App factory pattern — create_app() returns a configured FastAPI
instance. Lifespan manages startup/shutdown (database, Redis).
Middleware, CORS, exception handlers and routers all registered here.

The database engine lives on app.state rather than in a module global,
so tests can hand the app their own engine without touching imports.
"""

from contextlib import asynccontextmanager

import structlog
from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from starlette.exceptions import HTTPException

from prodhub import __version__
from prodhub.api import api_router
from prodhub.config import settings
from prodhub.errors import (
    INTERNAL_ERROR_MESSAGE,
    AppError,
    AuthenticationError,
    RequestValidationFailed,
    error_response,
)
from prodhub.logging_setup import configure_logging

logger = structlog.get_logger()


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Startup and shutdown lifecycle.

    Learn: Anything before `yield` runs at startup, after `yield` runs
    at shutdown.
    """
    logger.info(
        "prodhub.starting",
        version=__version__,
        environment=settings.environment,
        port=settings.port,
    )

    from prodhub.db.engine import build_engine, build_session_factory
    from prodhub.db.models import Base

    engine = build_engine(settings)
    app.state.engine = engine
    app.state.session_factory = build_session_factory(engine)

    if settings.create_schema_on_startup:
        async with engine.begin() as conn:
            await conn.run_sync(Base.metadata.create_all)
        logger.info("prodhub.schema_ready")

    from prodhub.cache import close_redis, init_redis
    try:
        await init_redis()
        logger.info("prodhub.redis_connected", url=settings.redis_url)
    except Exception as e:
        logger.warning("prodhub.redis_unavailable", error=str(e))
        # Redis is optional; only rate limiting depends on it

    yield

    logger.info("prodhub.shutdown")
    await close_redis()
    await engine.dispose()


def _field_message(exc: RequestValidationError) -> str:
    """First validation error as "field: message"."""
    errors = exc.errors()
    if not errors:
        return RequestValidationFailed.message
    first = errors[0]
    loc = [
        str(p) for p in first.get("loc", ())
        if isinstance(p, str) and p not in ("body", "query", "path", "header")
    ]
    msg = first.get("msg", RequestValidationFailed.message)
    return f"{'.'.join(loc)}: {msg}" if loc else msg


def register_exception_handlers(app: FastAPI) -> None:
    """Every failure leaves as {"success": false, "error": "..."}."""

    @app.exception_handler(AppError)
    async def app_error_handler(request: Request, exc: AppError):
        headers = None
        if isinstance(exc, AuthenticationError):
            headers = {"WWW-Authenticate": "Bearer"}
        return error_response(exc.status_code, exc.message, headers=headers)

    @app.exception_handler(HTTPException)
    async def http_error_handler(request: Request, exc: HTTPException):
        return error_response(exc.status_code, str(exc.detail), headers=exc.headers)

    @app.exception_handler(RequestValidationError)
    async def validation_error_handler(request: Request, exc: RequestValidationError):
        return error_response(400, _field_message(exc))

    @app.exception_handler(Exception)
    async def unhandled_error_handler(request: Request, exc: Exception):
        logger.exception("http.unhandled_error", path=request.url.path)
        return error_response(500, INTERNAL_ERROR_MESSAGE)


def create_app() -> FastAPI:
    """Build and return the FastAPI application."""
    configure_logging(settings.environment, settings.debug)

    app = FastAPI(
        title="Productivity Hub",
        description="Tasks, notes, goals, moods, calendar and focus timer, per user",
        version=__version__,
        lifespan=lifespan,
    )

    # ── Middleware stack ──────────────────────────────────────
    # Note: Starlette middleware executes in reverse order of registration.
    # Request flow: CORS → RateLimit → Security → RequestId → handler

    from prodhub.middleware.rate_limit import RateLimitMiddleware
    from prodhub.middleware.request_id import RequestIdMiddleware
    from prodhub.middleware.security import SecurityHeadersMiddleware

    app.add_middleware(RequestIdMiddleware)
    app.add_middleware(SecurityHeadersMiddleware)
    app.add_middleware(
        RateLimitMiddleware,
        default_rpm=settings.rate_limit_rpm,
        auth_rpm=settings.rate_limit_auth_rpm,
    )
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    register_exception_handlers(app)

    app.include_router(api_router)

    @app.get("/", include_in_schema=False)
    async def root():
        return {"success": True, "message": "Productivity Hub API", "version": __version__}

    return app


# Default app instance (used by uvicorn: prodhub.main:app)
app = create_app()
