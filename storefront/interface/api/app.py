"""FastAPI application."""

from contextlib import asynccontextmanager

from dishka import AsyncContainer
from fastapi import FastAPI, Request, status
from fastapi.responses import JSONResponse

from storefront.config import Settings
from storefront.domain.service import StorefrontUrlBuilder, StoreService
from storefront.interface.api.antiforgery import Antiforgery
from storefront.interface.api.challenge import (
    ChallengePolicy,
    register_challenge_handlers,
)
from storefront.interface.api.responses import ResultRenderer
from storefront.interface.api.routes import account, health, storefront_api
from storefront.interface.api.routing import StoreRoutingMiddleware
from storefront.interface.error import AntiforgeryError
from storefront.util.di.container import create_container, setup_di
from storefront.util.observability import (
    instrument_fastapi,
    instrument_httpx,
)


@asynccontextmanager
async def lifespan(app: FastAPI):
    yield
    # Closes the platform client and drains pending event deliveries
    await app.state.dishka_container.close()


def create_app(
    settings: Settings | None = None, container: AsyncContainer | None = None
) -> FastAPI:
    """Create FastAPI application.

    Note: Logfire should be configured before calling this function.
    In production, start_app.py handles this.

    Args:
        settings: Settings override (loaded from environment if omitted)
        container: DI container override (tests pass a mocked container)
    """
    settings = settings or Settings()

    # Instrument httpx for outbound HTTP requests
    # (Logfire must be configured before instrumentation)
    instrument_httpx()

    app_instance = FastAPI(
        title="Storefront Identity",
        description="Account registration, sign-in, recovery and impersonation for the storefront",
        version="0.1.0",
        lifespan=lifespan,
    )

    instrument_fastapi(app_instance)

    store_service = StoreService(settings.storefront)
    url_builder = StorefrontUrlBuilder(settings.storefront.default_store_id)
    antiforgery = Antiforgery(settings.auth, secure=settings.is_production)

    app_instance.state.settings = settings
    app_instance.state.antiforgery = antiforgery
    app_instance.state.renderer = ResultRenderer(settings, antiforgery)

    # Setup dependency injection
    container = container or create_container()
    setup_di(app_instance, container)

    # Added after DI so prefixes are stripped before anything else runs
    app_instance.add_middleware(StoreRoutingMiddleware, store_service=store_service)

    register_challenge_handlers(
        app_instance,
        ChallengePolicy(
            url_builder=url_builder,
            store_service=store_service,
            api_path_prefix=settings.storefront.api_path_prefix,
        ),
    )

    @app_instance.exception_handler(AntiforgeryError)
    async def _antiforgery_failed(request: Request, exc: AntiforgeryError):
        return JSONResponse(
            {"detail": "Invalid anti-forgery token"},
            status_code=status.HTTP_400_BAD_REQUEST,
        )

    # Register routes
    app_instance.include_router(health.router)
    app_instance.include_router(account.router)
    app_instance.include_router(
        storefront_api.router, prefix=settings.storefront.api_path_prefix
    )

    return app_instance


# Create app instance for uvicorn
# Note: Logfire must be configured before this module is imported
# In production: start_app.py handles this
app = create_app()
