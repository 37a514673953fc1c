"""
FastAPI application factory.

Creates and configures the FastAPI application instance.
"""

import logging
from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from shared.config import get_settings
from shared.exceptions import (
    JotterError,
    NotFoundError,
    ValidationError,
    ConflictError,
    AuthenticationError,
    ConfigurationError,
    ExternalServiceError,
)
from modules.auth.exceptions import (
    ExpiredTokenError,
    InvalidTokenError,
    MissingTokenError,
    UserNotFoundError,
)
from modules.auth.routes import router as auth_router
from modules.notes.routes import router as notes_router

from .dependencies import ServiceContainer
from .routes import health, users

logger = logging.getLogger(__name__)

# Most specific first. Login and OTP failures are 400 like any other bad
# submission; only session token problems are 401.
ERROR_STATUS_CODES: list[tuple[type[JotterError], int]] = [
    (MissingTokenError, 401),
    (InvalidTokenError, 401),
    (ExpiredTokenError, 401),
    (UserNotFoundError, 401),
    (ValidationError, 400),
    (AuthenticationError, 400),
    (NotFoundError, 404),
    (ConflictError, 409),
    (ConfigurationError, 503),
    (ExternalServiceError, 500),
]

SERVER_ERROR_BODY = {"error": "SERVER_ERROR", "message": "Server error", "details": {}}


def status_code_for(exc: JotterError) -> int:
    """Map an application error to its HTTP status."""
    for error_type, status_code in ERROR_STATUS_CODES:
        if isinstance(exc, error_type):
            return status_code
    return 500


async def jotter_error_handler(request: Request, exc: JotterError) -> JSONResponse:
    """Render application errors. Dependency failures never expose details."""
    status_code = status_code_for(exc)
    settings = get_settings()

    if status_code >= 500:
        if not settings.is_production:
            logger.exception(f"{request.method} {request.url.path} failed", exc_info=exc)
        if isinstance(exc, ExternalServiceError):
            body = {"error": exc.code, "message": exc.message, "details": {}}
        elif isinstance(exc, ConfigurationError):
            body = exc.to_dict()
        else:
            body = SERVER_ERROR_BODY
        return JSONResponse(status_code=status_code, content=body)

    return JSONResponse(status_code=status_code, content=exc.to_dict())


async def request_validation_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    """Malformed request bodies get the usual 400 error shape. Input values are not echoed."""
    fields = sorted({
        ".".join(str(part) for part in error["loc"] if part != "body")
        for error in exc.errors()
    })
    error = ValidationError(
        "Invalid request body",
        code="VALIDATION_ERROR",
        details={"fields": fields},
    )
    return JSONResponse(status_code=400, content=error.to_dict())


async def unhandled_error_handler(request: Request, exc: Exception) -> JSONResponse:
    """Opaque 500 for anything unexpected (store outages included)."""
    if not get_settings().is_production:
        logger.exception(f"{request.method} {request.url.path} failed", exc_info=exc)
    return JSONResponse(status_code=500, content=SERVER_ERROR_BODY)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Application lifespan handler.

    Runs startup and shutdown logic. A missing JWT secret is fatal.
    """
    # Startup
    settings = get_settings()
    logging.basicConfig(
        level=logging.DEBUG if settings.debug else logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    container: ServiceContainer = app.state.container
    if not container.settings.jwt_secret:
        raise ConfigurationError(
            "JWT secret is not configured. Set the JWT_SECRET environment variable.",
            code="JWT_SECRET_MISSING",
        )
    logger.info(f"Starting {settings.app_name} on {settings.host}:{settings.port}")
    yield
    # Shutdown
    logger.info(f"Shutting down {settings.app_name}")


def create_app(container: Optional[ServiceContainer] = None) -> FastAPI:
    """
    Create and configure the FastAPI application.

    Args:
        container: Service container to use; a fresh one is created if omitted

    Returns:
        Configured FastAPI instance
    """
    settings = get_settings()

    app = FastAPI(
        title=settings.app_name,
        description="Personal notes API with email-verified signup",
        version=settings.app_version,
        lifespan=lifespan,
        docs_url="/api/docs" if settings.debug else None,
        redoc_url="/api/redoc" if settings.debug else None,
    )
    app.state.container = container or ServiceContainer(settings)

    # Configure CORS
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=settings.cors_allow_credentials,
        allow_methods=settings.cors_allow_methods,
        allow_headers=settings.cors_allow_headers,
    )

    app.add_exception_handler(JotterError, jotter_error_handler)
    app.add_exception_handler(RequestValidationError, request_validation_handler)
    app.add_exception_handler(Exception, unhandled_error_handler)

    # Register routes
    app.include_router(health.router, prefix="/api", tags=["health"])
    app.include_router(auth_router, prefix="/api/auth", tags=["auth"])
    app.include_router(users.router, prefix="/api/users", tags=["users"])
    app.include_router(notes_router, prefix="/api/notes", tags=["notes"])

    return app


# Application instance for uvicorn
app = create_app()
