"""
Main FastAPI application entry point.
Configures the app, middleware, routers, and startup/shutdown events.
"""

from contextlib import asynccontextmanager
from typing import Dict, Any, Optional
import logging

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
import sentry_sdk
from sentry_sdk.integrations.fastapi import FastApiIntegration
from sentry_sdk.integrations.sqlalchemy import SqlalchemyIntegration

from app.config import Settings, get_settings
from app.infrastructure.auth import IdentityVerifier, SupabaseAuthService, build_identity_verifier
from app.infrastructure.db.database import Database
from app.infrastructure.email import EmailService
from app.infrastructure.events import RecipientResolver, build_event_dispatcher
from app.infrastructure.rate_limiting import InMemoryRateLimiter, build_rate_limits
from app.infrastructure.validation import RequestSizeMiddleware, SecurityHeadersMiddleware
from app.application.dto.base_dto import ErrorResponseDTO, ValidationErrorResponseDTO
from app.infrastructure.web.middleware.error_handler import ErrorHandlerMiddleware, register_exception_handlers
from app.infrastructure.web.routers import (
    profiles,
    gigs,
    applications,
    invoices,
    reviews,
    notifications,
    companies,
    time_tracking,
    health,
)

logger = logging.getLogger(__name__)

# Documented error bodies shared by every authenticated router
ERROR_RESPONSES: Dict[int, Dict[str, Any]] = {
    400: {"model": ValidationErrorResponseDTO, "description": "Invalid request or business rule violation"},
    401: {"model": ErrorResponseDTO, "description": "Missing or invalid access token"},
    403: {"model": ErrorResponseDTO, "description": "Caller may not act on this resource"},
    404: {"model": ErrorResponseDTO, "description": "Resource not found"},
    409: {"model": ErrorResponseDTO, "description": "Conflicting state"},
    429: {"model": ErrorResponseDTO, "description": "Rate limit exceeded"},
}


def configure_logging(settings: Settings) -> None:
    logging.basicConfig(
        level=logging.DEBUG if settings.debug else logging.INFO,
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
    )


def init_sentry(settings: Settings) -> None:
    """Initialize Sentry if a DSN is configured outside development."""
    if not settings.sentry_dsn or settings.is_development:
        return
    sentry_sdk.init(
        dsn=settings.sentry_dsn,
        traces_sample_rate=settings.sentry_traces_sample_rate,
        environment=settings.environment,
        integrations=[
            FastApiIntegration(transaction_style="endpoint"),
            SqlalchemyIntegration(),
        ],
    )
    logger.info("Sentry initialized")


def build_recipient_resolver(identity_verifier: IdentityVerifier) -> RecipientResolver:
    """Account emails can only be looked up through the Supabase admin API."""
    if isinstance(identity_verifier, SupabaseAuthService):
        return RecipientResolver(identity_verifier.get_user_email)
    return RecipientResolver()


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Manage application lifecycle.
    Creates whatever collaborators were not injected and disposes the
    database engine on shutdown.
    """
    settings: Settings = app.state.settings
    state = app.state

    # Startup
    logger.info(f"Starting {settings.api_title} v{settings.api_version}")
    logger.info(f"Environment: {settings.environment}")
    init_sentry(settings)

    owns_database = getattr(state, "database", None) is None
    if owns_database:
        state.database = Database.from_settings(settings)
    if getattr(state, "identity_verifier", None) is None:
        state.identity_verifier = build_identity_verifier(settings)
    if getattr(state, "email_service", None) is None:
        state.email_service = EmailService.from_settings(settings)
        if not state.email_service.is_configured:
            logger.warning("No email transport configured, emails will only be logged")

    state.event_dispatcher = build_event_dispatcher(
        state.database,
        state.email_service,
        build_recipient_resolver(state.identity_verifier),
    )
    logger.info("Event system initialized")

    yield

    # Shutdown
    logger.info("Shutting down application")
    if owns_database:
        state.database.dispose()


def create_application(
    settings: Optional[Settings] = None,
    database: Optional[Database] = None,
    identity_verifier: Optional[IdentityVerifier] = None,
    email_service: Optional[EmailService] = None
) -> FastAPI:
    """
    Create and configure the FastAPI application.
    Collaborators passed in are used as-is; the rest are built at startup.
    """
    settings = settings or get_settings()
    configure_logging(settings)

    app = FastAPI(
        title=settings.api_title,
        version=settings.api_version,
        debug=settings.debug,
        docs_url=f"{settings.api_prefix}/docs" if settings.debug else None,
        redoc_url=f"{settings.api_prefix}/redoc" if settings.debug else None,
        openapi_url=f"{settings.api_prefix}/openapi.json" if settings.debug else None,
        lifespan=lifespan
    )

    app.state.settings = settings
    app.state.database = database
    app.state.identity_verifier = identity_verifier
    app.state.email_service = email_service
    app.state.rate_limiter = InMemoryRateLimiter() if settings.rate_limit_enabled else None
    app.state.rate_limits = build_rate_limits(settings)

    # Add CORS middleware
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=settings.cors_allow_credentials,
        allow_methods=settings.cors_allow_methods,
        allow_headers=settings.cors_allow_headers,
    )

    # Request guards
    app.add_middleware(SecurityHeadersMiddleware, enable_hsts=settings.is_production)
    app.add_middleware(RequestSizeMiddleware, max_size=settings.max_request_size)

    # Add custom error handler middleware
    app.add_middleware(ErrorHandlerMiddleware, debug=settings.debug)
    register_exception_handlers(app)

    # Include routers
    prefix = settings.api_prefix
    app.include_router(profiles.router, prefix=prefix, tags=["Profiles"], responses=ERROR_RESPONSES)
    app.include_router(gigs.router, prefix=f"{prefix}/gigs", tags=["Gigs"], responses=ERROR_RESPONSES)
    app.include_router(applications.router, prefix=prefix, tags=["Applications"], responses=ERROR_RESPONSES)
    app.include_router(invoices.router, prefix=f"{prefix}/invoices", tags=["Invoices"], responses=ERROR_RESPONSES)
    app.include_router(reviews.router, prefix=f"{prefix}/reviews", tags=["Reviews"], responses=ERROR_RESPONSES)
    app.include_router(
        notifications.router, prefix=f"{prefix}/notifications", tags=["Notifications"], responses=ERROR_RESPONSES
    )
    app.include_router(companies.router, prefix=f"{prefix}/company", tags=["Companies"], responses=ERROR_RESPONSES)
    app.include_router(
        time_tracking.router, prefix=f"{prefix}/time", tags=["Time Tracking"], responses=ERROR_RESPONSES
    )
    app.include_router(health.router, prefix=f"{prefix}/health", tags=["Health"])

    # Root endpoint
    @app.get("/")
    async def root() -> Dict[str, Any]:
        """Root endpoint with API information."""
        return {
            "name": settings.api_title,
            "version": settings.api_version,
            "environment": settings.environment,
            "docs": f"{prefix}/docs" if settings.debug else None,
            "health": f"{prefix}/health"
        }

    return app


# Create the FastAPI app instance
app = create_application()

if __name__ == "__main__":
    import uvicorn

    _settings = get_settings()
    uvicorn.run(
        "app.main:app",
        host=_settings.host,
        port=_settings.port,
        reload=_settings.is_development,
        log_level="debug" if _settings.debug else "info",
    )
