"""
SchoolCMS API Server - FastAPI application for the school website backend.

Design Pattern:
1. Build shared services once (DatabaseService, ImageKitClient)
2. Store them on app.state; routers build stores/lifecycles per request
3. Add middleware in specific order (sessions, logging, CORS)
4. Register exception handlers, API routers and the admin console

Middleware Order (runs in reverse):
1. CORS (runs first - adds headers to all responses)
2. Logging (logs all requests)
3. Sessions (signed admin session cookie)

Endpoints:
- /health          : Health check
- /api/...         : JSON API (see routers/)
- /admin/...       : Admin console (server-rendered)
- /docs            : OpenAPI documentation

Running:
    # Development (auto-reload)
    schoolcms serve --reload

    # Production
    uvicorn schoolcms.api.main:app --host 0.0.0.0 --port 8000
"""

import secrets
import time
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from loguru import logger
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.middleware.sessions import SessionMiddleware

from .console import LoginRequired, login_redirect
from .console import router as console_router
from .errors import register_exception_handlers
from .routers import routers
from ..services.database import DatabaseService
from ..services.imagekit import AssetStore, ImageKitClient
from ..settings import Settings, settings as default_settings
from .. import __version__


class RequestLoggingMiddleware(BaseHTTPMiddleware):
    """
    Log all incoming HTTP requests and responses.

    - Logs request method, path, client
    - Logs response status and duration
    """

    async def dispatch(self, request: Request, call_next):
        start_time = time.time()

        client_host = request.client.host if request.client else "unknown"
        logger.info(f"→ REQUEST: {request.method} {request.url.path} | Client: {client_host}")

        response = await call_next(request)

        duration_ms = (time.time() - start_time) * 1000
        logger.info(
            f"← RESPONSE: {request.method} {request.url.path} | "
            f"Status: {response.status_code} | "
            f"Duration: {duration_ms:.2f}ms"
        )

        return response


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Application lifespan manager.

    Creates missing tables on startup (DATABASE__CREATE_TABLES) and
    disposes the connection pool on shutdown.
    """
    config: Settings = app.state.settings
    logger.info(f"Starting SchoolCMS API ({config.environment})")

    if config.database.create_tables:
        await app.state.db.create_all()

    if not app.state.imagekit.configured:
        logger.warning("IMAGEKIT__PRIVATE_KEY not set - image cleanup and upload auth will fail")

    yield

    await app.state.db.dispose()
    logger.info("Shutting down SchoolCMS API")


def create_app(
    settings: Settings | None = None,
    db: DatabaseService | None = None,
    assets: AssetStore | None = None,
    imagekit: ImageKitClient | None = None,
) -> FastAPI:
    """
    Create and configure the FastAPI application.

    Args:
        settings: Settings to use (defaults to the global singleton)
        db: Database service (defaults to one built from settings.database)
        assets: Asset store used for image cleanup (defaults to the ImageKit client)
        imagekit: ImageKit client used for upload auth (defaults to one built from settings)

    Returns:
        Configured FastAPI application
    """
    config = settings or default_settings

    app = FastAPI(
        title="SchoolCMS API",
        description="Content management backend for the school website",
        version=__version__,
        lifespan=lifespan,
    )

    app.state.settings = config
    app.state.db = db or DatabaseService.from_settings(config.database)
    app.state.imagekit = imagekit or ImageKitClient.from_settings(config.imagekit)
    app.state.assets = assets or app.state.imagekit

    # Session middleware for admin login
    session_secret = config.auth.session_secret or secrets.token_hex(32)
    if not config.auth.session_secret:
        logger.warning(
            "AUTH__SESSION_SECRET not set - using generated key "
            "(sessions won't persist across restarts)"
        )

    app.add_middleware(
        SessionMiddleware,
        secret_key=session_secret,
        session_cookie=config.auth.session_cookie,
        max_age=config.auth.session_max_age,
        same_site="lax",
        https_only=config.auth.https_only or config.environment == "production",
    )

    app.add_middleware(RequestLoggingMiddleware)

    # CORS LAST (runs first in middleware chain)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=config.api.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    register_exception_handlers(app)
    app.add_exception_handler(LoginRequired, login_redirect)

    @app.get("/health")
    async def health():
        """Health check endpoint."""
        return {"status": "healthy", "version": __version__}

    for router in routers:
        app.include_router(router)
    app.include_router(console_router)

    return app


# Create application instance
app = create_app()


# Main entry point for uvicorn
if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "schoolcms.api.main:app",
        host=default_settings.api.host,
        port=default_settings.api.port,
        reload=True,
    )
