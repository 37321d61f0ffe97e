"""FastAPI application factory and configuration.

This module provides the application factory function for creating
and configuring the FastAPI application with all middleware, routes,
exception handlers and lifecycle handlers.
"""

from contextlib import asynccontextmanager
from http import HTTPStatus
from typing import AsyncGenerator

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from fleetgrid.core.config import Settings, get_settings
from fleetgrid.core.logging import (
    bind_correlation_id,
    clear_context,
    configure_logging,
    get_logger,
    new_correlation_id,
)
from fleetgrid.domain.exceptions import (
    ConflictError,
    FleetGridError,
    ForbiddenRoleError,
    NotFoundError,
    UnauthorizedError,
    ValidationError,
)
from fleetgrid.infrastructure.auth import IdentityResolver, JWTService
from fleetgrid.infrastructure.persistence.database import (
    close_database,
    init_database,
)

logger = get_logger(__name__)

ERROR_STATUS_CODES: dict[type[FleetGridError], int] = {
    UnauthorizedError: status.HTTP_401_UNAUTHORIZED,
    ForbiddenRoleError: status.HTTP_403_FORBIDDEN,
    ValidationError: status.HTTP_400_BAD_REQUEST,
    ConflictError: status.HTTP_409_CONFLICT,
    NotFoundError: status.HTTP_404_NOT_FOUND,
}


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Application lifespan manager.

    Handles startup and shutdown events for the application.

    Args:
        app: FastAPI application instance.

    Yields:
        None: Control is yielded to the application during its lifetime.
    """
    settings: Settings = app.state.settings

    logger.info(
        "Starting FleetGrid",
        app_name=settings.app_name,
        version=settings.app_version,
        environment=settings.environment,
    )
    if settings.uses_default_secret:
        logger.warning("Using the default secret key; set FLEETGRID_SECRET_KEY")

    try:
        await init_database(settings)
        logger.info("Database initialized successfully")
    except Exception as e:
        logger.error("Failed to initialize database", error=str(e))
        raise

    yield

    logger.info("Shutting down FleetGrid")
    await close_database()
    logger.info("Database connection closed")


def create_app(settings: Settings | None = None) -> FastAPI:
    """Create and configure the FastAPI application.

    Args:
        settings: Optional settings instance. Defaults to the cached settings.

    Returns:
        FastAPI: Configured FastAPI application instance.
    """
    settings = settings or get_settings()
    configure_logging(settings)

    app = FastAPI(
        title=settings.app_name,
        version=settings.app_version,
        description="Role-gated fleet records with spreadsheet import and export",
        docs_url="/docs" if settings.is_development else None,
        redoc_url="/redoc" if settings.is_development else None,
        openapi_url="/openapi.json" if settings.is_development else None,
        lifespan=lifespan,
    )

    # Session signing is configured once here and shared through app state
    jwt_service = JWTService(
        secret_key=settings.secret_key,
        expire_days=settings.session_expire_days,
    )
    app.state.settings = settings
    app.state.jwt_service = jwt_service
    app.state.identity_resolver = IdentityResolver(jwt_service)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=settings.cors_allow_credentials,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    register_health_check(app)
    register_routes(app)
    register_exception_handlers(app)
    register_middleware(app)

    return app


def register_health_check(app: FastAPI) -> None:
    """Register the health check endpoint.

    Args:
        app: FastAPI application instance.
    """

    @app.get("/health", tags=["health"])
    async def health_check():
        """Returns 200 while the service is running."""
        return {
            "status": "healthy",
            "service": app.state.settings.app_name,
            "version": app.state.settings.app_version,
        }


def register_routes(app: FastAPI) -> None:
    """Register API routes.

    Args:
        app: FastAPI application instance.
    """
    from fleetgrid.infrastructure.api.routes import (
        auth_router,
        directory_router,
        documents_router,
        users_router,
    )

    prefix = app.state.settings.api_prefix

    app.include_router(auth_router, prefix=f"{prefix}/auth", tags=["auth"])
    app.include_router(users_router, prefix=f"{prefix}/users", tags=["users"])
    app.include_router(documents_router, prefix=f"{prefix}/excel", tags=["documents"])
    app.include_router(directory_router, prefix=f"{prefix}/directory", tags=["directory"])


def register_exception_handlers(app: FastAPI) -> None:
    """Register exception handlers translating errors into JSON responses.

    Args:
        app: FastAPI application instance.
    """

    @app.exception_handler(FleetGridError)
    async def domain_exception_handler(request: Request, exc: FleetGridError):
        """Render a domain error with its mapped status code."""
        status_code = next(
            (
                code
                for error_type, code in ERROR_STATUS_CODES.items()
                if isinstance(exc, error_type)
            ),
            status.HTTP_500_INTERNAL_SERVER_ERROR,
        )
        logger.info(
            "Request rejected",
            path=request.url.path,
            method=request.method,
            status_code=status_code,
            error=exc.message,
        )
        return JSONResponse(
            status_code=status_code,
            content={"error": exc.title, "message": exc.message},
        )

    @app.exception_handler(StarletteHTTPException)
    async def http_exception_handler(request: Request, exc: StarletteHTTPException):
        """Render framework errors (unknown route, wrong method) in the same shape."""
        try:
            title = HTTPStatus(exc.status_code).phrase
        except ValueError:
            title = "Error"
        return JSONResponse(
            status_code=exc.status_code,
            content={"error": title, "message": str(exc.detail)},
            headers=exc.headers,
        )

    @app.exception_handler(RequestValidationError)
    async def request_validation_handler(request: Request, exc: RequestValidationError):
        """Render request validation failures as 400 with per-field details."""
        details = [
            {
                "field": ".".join(
                    str(part) for part in error["loc"] if part not in ("body", "path", "query")
                ),
                "message": error["msg"],
                "code": error["type"],
            }
            for error in exc.errors()
        ]
        logger.info(
            "Request validation failed",
            path=request.url.path,
            method=request.method,
            error_count=len(details),
        )
        return JSONResponse(
            status_code=status.HTTP_400_BAD_REQUEST,
            content={"error": "Validation error", "details": details},
        )

    @app.exception_handler(Exception)
    async def global_exception_handler(request: Request, exc: Exception):
        """Handle uncaught exceptions."""
        logger.error(
            "Unhandled exception",
            path=str(request.url),
            method=request.method,
            error=str(exc),
            exc_type=type(exc).__name__,
        )
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content={
                "error": "Internal server error",
                "message": str(exc)
                if app.state.settings.debug
                else "An unexpected error occurred",
            },
        )


def register_middleware(app: FastAPI) -> None:
    """Register custom middleware.

    Args:
        app: FastAPI application instance.
    """

    @app.middleware("http")
    async def logging_middleware(request: Request, call_next):
        """Log every request and tag it with a correlation ID."""
        correlation_id = request.headers.get("X-Correlation-ID") or new_correlation_id()
        bind_correlation_id(correlation_id)

        logger.info(
            "Request started",
            method=request.method,
            path=str(request.url.path),
        )

        try:
            response = await call_next(request)
            logger.info(
                "Request completed",
                method=request.method,
                path=str(request.url.path),
                status_code=response.status_code,
            )
            response.headers["X-Correlation-ID"] = correlation_id
            return response
        finally:
            clear_context()


# Create the application instance
app = create_app()
