"""
FastAPI application factory for the SQLegend gateway.

This module creates the main FastAPI app with:
- Storage root setup
- CORS configuration for browser clients
- Identifier and statement routes
- Failure envelopes for every error path
- Redirect of unknown paths to the external documentation site
"""

import logging
from contextlib import asynccontextmanager
from pathlib import Path
from string import Template
from typing import AsyncGenerator

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import RedirectResponse

from .config import Settings
from .errors import GatewayError, MalformedRequestError
from .gateway import TenantGateway
from .results import failure_response
from .routes import router
from .store import StoreLocator

logger = logging.getLogger(__name__)

DOCS_TEMPLATE = Path(__file__).parent / "templates" / "docs.html"


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Prepare the storage root and log the startup banner."""
    settings: Settings = app.state.settings
    app.state.gateway.locator.ensure_root()

    logger.info("-------------------------------------------")
    logger.info("SQLegend Server is running!")
    logger.info(f"Data Storage: {app.state.gateway.locator.storage_root}")
    logger.info(f"Port: {settings.port}")
    logger.info("-------------------------------------------")

    yield

    logger.info("SQLegend Server stopped")


def render_docs(settings: Settings) -> str:
    """Render the documentation page for the configured public URL."""
    template = Template(DOCS_TEMPLATE.read_text(encoding="utf-8"))
    return template.safe_substitute(api_url=settings.api_url)


def create_app(settings: Settings | None = None) -> FastAPI:
    """Create and configure the FastAPI application."""
    settings = settings or Settings()

    app = FastAPI(
        title="SQLegend",
        description=(
            "Anonymous per-tenant SQLite over HTTP. "
            "Get an ID from /new, then POST SQL to /api."
        ),
        version="1.0.0",
        lifespan=lifespan,
        docs_url=None,
        redoc_url=None,
    )

    app.state.settings = settings
    app.state.gateway = TenantGateway(
        StoreLocator(settings.data_dir),
        busy_timeout_ms=settings.busy_timeout_ms,
        wal_mode=settings.wal_mode,
    )
    app.state.docs_html = render_docs(settings)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.exception_handler(GatewayError)
    async def gateway_error_handler(request: Request, exc: GatewayError):
        return failure_response(exc)

    @app.exception_handler(RequestValidationError)
    async def validation_error_handler(request: Request, exc: RequestValidationError):
        # Absent or non-object JSON body
        return failure_response(MalformedRequestError())

    @app.exception_handler(Exception)
    async def unhandled_error_handler(request: Request, exc: Exception):
        logger.error(f"Unhandled error on {request.url.path}: {exc}", exc_info=exc)
        return failure_response(exc)

    app.include_router(router)

    @app.get("/health")
    async def health():
        return {"status": "healthy", "service": "sqlegend"}

    @app.api_route(
        "/{path:path}",
        methods=["GET", "POST", "PUT", "PATCH", "DELETE", "HEAD"],
        include_in_schema=False,
    )
    async def fallback(path: str):
        return RedirectResponse(settings.fallback_url, status_code=302)

    return app


# Default app instance
app = create_app()
