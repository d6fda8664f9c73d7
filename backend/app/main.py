"""
FastAPI application entry point.

Uses structured logging from linear_gateway.logging. The credential router
is built once at startup from validated settings and shared by every
request; missing Linear API keys abort startup.

Run with:
    uvicorn backend.app.main:app
"""

from contextlib import asynccontextmanager

from fastapi import FastAPI

from linear_gateway.exceptions import MissingCredentialsError
from linear_gateway.logging import RequestLoggingMiddleware, configure_logging, get_logger
from linear_gateway.services import CredentialRouter

from .config import Settings, get_settings
from .error_handlers import register_exception_handlers
from .middleware.bearer_auth import BearerAuthMiddleware
from .middleware.request_id import RequestIDMiddleware
from .routers import issues as issues_router

logger = get_logger("api")


def build_credential_router(settings: Settings) -> CredentialRouter:
    """Build the router, logging every missing key before failing."""
    try:
        return CredentialRouter.from_settings(settings)
    except MissingCredentialsError as e:
        for name in e.missing:
            logger.error("missing_linear_api_key", variable=name)
        raise


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Build shared resources on startup and release them on shutdown."""
    settings: Settings = app.state.settings
    logger.info("app_startup", app_name=settings.app_name, env=settings.env)

    owns_router = app.state.credential_router is None
    if owns_router:
        app.state.credential_router = build_credential_router(settings)

    if not settings.api_token:
        logger.warning(
            "api_token_not_configured",
            message="API_TOKEN is empty; every issue request will be rejected with 401",
        )

    yield

    logger.info("app_shutdown")
    if owns_router:
        await app.state.credential_router.aclose()
        app.state.credential_router = None


def create_app(
    settings: Settings | None = None,
    credential_router: CredentialRouter | None = None,
) -> FastAPI:
    """
    Create and configure the FastAPI application.

    Args:
        settings: Settings to use instead of the cached environment settings.
        credential_router: Pre-built router (tests inject fakes here). When
            omitted it is built from ``settings`` during startup.
    """
    settings = settings or get_settings()
    configure_logging(
        level="DEBUG" if settings.debug else "INFO",
        development=settings.is_development,
    )

    servers = [{"url": settings.api_url, "description": "Production server"}] if settings.api_url else None

    app = FastAPI(
        title=settings.app_name,
        description=settings.app_description,
        version=settings.app_version,
        debug=settings.debug,
        servers=servers,
        openapi_url="/doc",
        docs_url="/ui",
        redoc_url=None,
        lifespan=lifespan,
    )
    app.state.settings = settings
    app.state.credential_router = credential_router

    # Added first so it runs innermost, after the request id is bound
    app.add_middleware(
        BearerAuthMiddleware,
        settings=settings,
        path_prefix=issues_router.router.prefix,
    )
    app.add_middleware(RequestIDMiddleware)
    app.add_middleware(RequestLoggingMiddleware)

    register_exception_handlers(app)

    @app.get("/health", tags=["health"], include_in_schema=False)
    async def health_check():
        """Liveness probe. Does not touch Linear."""
        return {"status": "ok"}

    app.include_router(issues_router.router)

    return app


app = create_app()
