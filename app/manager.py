# =============================================================================
# app/manager.py - Application Composition
# =============================================================================
# Builds the application from a manifest of plugins:
#
#   monitor  logging of routes and requests, console reporter
#   docs     OpenAPI, Swagger UI and ReDoc (not in production)
#   api      REST API route table under settings.API_PREFIX
#   web      home, login and admin pages
#
# Plugins register in manifest order, so the monitor sees every route the
# later plugins add.
#
# Usage:
#   from app import manager
#
#   server = manager.start()
#   app = server.app
#   ...
#   manager.stop()
# =============================================================================

import logging
from contextlib import asynccontextmanager
from typing import Any

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from app import __version__
from app.config import settings
from app.exceptions import (
    InternalServerError,
    NoireException,
    noire_exception_handler,
    validation_exception_handler,
)
from app.plugins import docs, monitor
from app.routers import api, web
from app.server import Server

logger = logging.getLogger(__name__)

PLUGINS = {
    monitor.name: monitor,
    docs.name: docs,
    api.name: api,
    web.name: web,
}

DEFAULT_MANIFEST: dict[str, Any] = {
    "registrations": [
        {"plugin": "monitor"},
        {"plugin": "docs"},
        {"plugin": "api", "options": {"prefix": settings.API_PREFIX}},
        {"plugin": "web", "options": {"admin_path": settings.ADMIN_PATH}},
    ]
}

# The running server, if any
_server: Server | None = None


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Application lifespan handler.

    - Startup: Log the configuration the server runs with
    - Shutdown: Let plugins release their resources
    """
    logger.info(f"Starting Noire in {settings.ENVIRONMENT} mode")
    logger.info(f"CORS origins: {settings.cors_origins_list}")

    yield

    logger.info("Shutting down Noire")
    app.state.server.stop()


async def handle_general_exception(request: Request, exc: Exception):
    """Handle unexpected exceptions."""
    logger.exception(f"Unexpected error: {exc}")
    return JSONResponse(status_code=500, content=InternalServerError().to_dict())


def create_app() -> FastAPI:
    """FastAPI application with middleware and exception handlers, no routes."""
    app = FastAPI(
        title="Noire",
        description="User, role and resource administration with a REST API.",
        version=__version__,
        # Served by the docs plugin outside production
        openapi_url=None,
        docs_url=None,
        redoc_url=None,
        lifespan=lifespan,
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins_list if settings.is_production else ["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.add_exception_handler(NoireException, noire_exception_handler)
    app.add_exception_handler(RequestValidationError, validation_exception_handler)
    app.add_exception_handler(Exception, handle_general_exception)

    return app


def create_server(manifest: dict[str, Any] | None = None) -> Server:
    """
    Compose a server from a manifest.

    Args:
        manifest: {"registrations": [{"plugin": name, "options": {...}}, ...]}

    Raises:
        KeyError: If the manifest names an unknown plugin
    """
    manifest = manifest or DEFAULT_MANIFEST
    server = Server(create_app())

    for registration in manifest.get("registrations", []):
        plugin = PLUGINS[registration["plugin"]]
        server.register(plugin, registration.get("options"))

    logger.info(f"Server composed with plugins: {', '.join(server.plugins)}")
    return server


def start(manifest: dict[str, Any] | None = None) -> Server:
    """Create the server once; later calls return the running one."""
    global _server

    if _server is None:
        _server = create_server(manifest)
        _server.log(["server", "info"], f"Noire {__version__} ready ({settings.ENVIRONMENT})")

    return _server


def stop() -> None:
    """Stop the running server, if any."""
    global _server

    if _server is not None:
        _server.stop()
        _server = None
        logger.info("Server stopped")
