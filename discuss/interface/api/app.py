"""FastAPI application."""

from contextlib import asynccontextmanager

from dishka import AsyncContainer
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from discuss.config import AuthSettings, Settings
from discuss.interface.api.routes import comments, health, votes
from discuss.util.di.container import create_container, setup_di
from discuss.util.error import ConfigurationError
from discuss.util.observability import instrument_fastapi


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Close the DI container (engine, Redis client) on shutdown."""
    yield
    await app.state.dishka_container.close()


def check_settings(settings: Settings) -> None:
    """Refuse to serve with settings that are unsafe outside development.

    Raises:
        ConfigurationError: If production runs with the default JWT secret
    """
    if settings.environment != "production":
        return
    if settings.auth.jwt_secret == AuthSettings().jwt_secret:
        raise ConfigurationError("AUTH__JWT_SECRET must be set in production")


def create_app(container: AsyncContainer | None = None) -> FastAPI:
    """Create FastAPI application.

    Note: Logfire should be configured before calling this function.
    In production, start_app.py handles this.

    Args:
        container: DI container to serve from (production container if omitted)
    """
    settings = Settings()
    check_settings(settings)

    app_instance = FastAPI(
        title="Pack Discussions API",
        description="Threaded comments and voting for texture-pack catalog items",
        version="0.1.0",
        lifespan=lifespan,
    )

    # Instrument FastAPI for automatic tracing of HTTP requests
    instrument_fastapi(app_instance)

    app_instance.add_middleware(
        CORSMiddleware,
        allow_origins=[
            settings.api.frontend_url,
            "http://localhost:3000",  # Local development
        ],
        allow_credentials=True,
        allow_methods=["GET", "POST", "PUT", "DELETE", "OPTIONS"],
        allow_headers=[
            "Content-Type",
            "Accept",
            "Origin",
            "Cache-Control",
            "X-Requested-With",
        ],
        expose_headers=[
            "Content-Length",
            "Content-Type",
            "Retry-After",
            "X-RateLimit-Limit",
            "X-RateLimit-Remaining",
            "X-RateLimit-Reset",
        ],
        max_age=600,  # Cache preflight requests for 10 minutes
    )

    # Setup dependency injection
    # Settings are loaded from environment automatically
    setup_di(app_instance, container or create_container())

    # Register routes
    app_instance.include_router(health.router)
    app_instance.include_router(comments.router)
    app_instance.include_router(votes.router)

    return app_instance


# Create app instance for uvicorn
# Note: Logfire must be configured before this module is imported
# In production: start_app.py handles this
app = create_app()
