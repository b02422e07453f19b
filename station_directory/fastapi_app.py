"""
FastAPI Application Factory.
Creates and configures the FastAPI application with all routers, middleware, and DI.

Endpoints:
- auth (/signup, /login, /logout, /session), users (/me, /users),
  chat (/chat/*), admin (/admin/*), health (/health)
"""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from fastapi.exceptions import RequestValidationError
from fastapi.encoders import jsonable_encoder
from starlette.exceptions import HTTPException as StarletteHTTPException
from starlette.middleware.base import BaseHTTPMiddleware
from dishka import Provider
from dishka.integrations.fastapi import setup_dishka

from station_directory import __version__
from station_directory.config.logging_config import (
    NO_CORRELATION_ID,
    correlation_id_var,
    setup_logging,
)
from station_directory.config.settings import Config
from station_directory.domain.exceptions import DomainError
from station_directory.domain.ports.persistence_backend import PersistenceBackend
from station_directory.presentation.api import (
    admin_router,
    auth_router,
    chat_router,
    users_router,
)
from station_directory.presentation.errors import domain_error_response, error_body
from station_directory.setup.ioc.container import create_container

# Setup logging
setup_logging(Config.LOG_LEVEL, Config.LOG_PATH)
logger = logging.getLogger(__name__)


class CorrelationIdMiddleware(BaseHTTPMiddleware):
    """Middleware to extract and set correlation ID from request headers."""

    async def dispatch(self, request: Request, call_next):
        # Get correlation ID from header or use default
        correlation_id = request.headers.get("X-Correlation-ID", NO_CORRELATION_ID)

        # Set in contextvars (propagates to async tasks and logging)
        correlation_id_var.set(correlation_id)

        response = await call_next(request)
        response.headers["X-Correlation-ID"] = correlation_id
        return response


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    FastAPI lifespan context manager.

    - Startup: container and Dishka are already set up by the factory
    - Shutdown: close the DI container (closes the storage backend)
    """
    logger.info(f"{Config.APP_NAME} started with {Config.STORAGE_BACKEND} storage")
    yield
    await app.state.dishka_container.close()
    logger.info(f"{Config.APP_NAME} shut down. DI container closed.")


def create_fastapi_app(provider: Provider | None = None) -> FastAPI:
    """
    Application factory for creating FastAPI app.

    Args:
        provider: Replacement for the default AppProvider()

    Returns:
        FastAPI application instance
    """
    app = FastAPI(
        title=Config.APP_NAME,
        description="User directory with direct messaging behind server-side sessions",
        version=__version__,
        lifespan=lifespan,
    )

    # Setup Dishka BEFORE app starts (must add middleware before startup)
    setup_dishka(create_container(provider), app)

    # Correlation ID middleware (must be added before CORS)
    app.add_middleware(CorrelationIdMiddleware)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=Config.CORS_ORIGINS,
        # Credentials only with an explicit origin list
        allow_credentials="*" not in Config.CORS_ORIGINS,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # Domain errors carry their own kind → status mapping
    @app.exception_handler(DomainError)
    async def domain_exception_handler(request: Request, exc: DomainError):
        logger.info(f"[{exc.kind}] {request.method} {request.url.path}: {exc.message}")
        return domain_error_response(exc)

    # Validation error handler - malformed bodies and query params
    @app.exception_handler(RequestValidationError)
    async def validation_exception_handler(request: Request, exc: RequestValidationError):
        errors = jsonable_encoder(exc.errors())
        logger.info(f"[ValidationError] {request.method} {request.url.path}: {errors}")
        return JSONResponse(
            status_code=400,
            content=error_body("ValidationError", "Invalid request", details=errors),
        )

    # HTTP exception handler - unknown routes, wrong methods
    @app.exception_handler(StarletteHTTPException)
    async def http_exception_handler(request: Request, exc: StarletteHTTPException):
        logger.info(f"[HTTP {exc.status_code}] {request.method} {request.url.path}: {exc.detail}")
        return JSONResponse(
            status_code=exc.status_code,
            content=error_body("HTTPError", str(exc.detail)),
            headers=getattr(exc, "headers", None),
        )

    # Global exception handler
    @app.exception_handler(Exception)
    async def global_exception_handler(request: Request, exc: Exception):
        logger.exception(f"[GLOBAL ERROR] {type(exc).__name__}: {exc}")
        return JSONResponse(
            status_code=500,
            content=error_body("InternalError", "Internal server error"),
        )

    # Health check routes
    @app.get("/health", tags=["health"])
    async def health(request: Request):
        backend = await request.app.state.dishka_container.get(PersistenceBackend)
        return {"status": "healthy", "storage": backend.name}

    # Register routers
    app.include_router(auth_router)  # /signup, /login, /logout, /session
    app.include_router(users_router)  # /me, /users
    app.include_router(chat_router)  # /chat/send, /chat/history, /chat/messages/{id}
    app.include_router(admin_router)  # /admin/users...

    return app


# Create the app instance
app = create_fastapi_app()
