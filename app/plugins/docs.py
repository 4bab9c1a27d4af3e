# =============================================================================
# app/plugins/docs.py - API Documentation Plugin
# =============================================================================
# Serves the generated OpenAPI schema, Swagger UI and ReDoc outside
# production. In production the documentation routes are never added.
# =============================================================================

import logging
from typing import Any

from fastapi.openapi.docs import get_redoc_html, get_swagger_ui_html
from fastapi.responses import HTMLResponse, JSONResponse

from app import __version__
from app.config import settings

logger = logging.getLogger(__name__)

name = "docs"

OPENAPI_URL = "/openapi.json"
DOCS_URL = "/docs"
REDOC_URL = "/redoc"


def register(server: Any, options: dict[str, Any] | None = None) -> None:
    """Plugin registration function."""
    if settings.ENVIRONMENT == "production":
        return

    app = server.app
    app.version = (options or {}).get("api_version", __version__)
    title = f"{app.title} - Documentation"

    async def openapi() -> JSONResponse:
        return JSONResponse(app.openapi())

    async def swagger_ui() -> HTMLResponse:
        return get_swagger_ui_html(openapi_url=OPENAPI_URL, title=title)

    async def redoc() -> HTMLResponse:
        return get_redoc_html(openapi_url=OPENAPI_URL, title=title)

    server.route("GET", OPENAPI_URL, openapi, include_in_schema=False)
    server.route("GET", DOCS_URL, swagger_ui, include_in_schema=False)
    server.route("GET", REDOC_URL, redoc, include_in_schema=False)

    # Links in the generated pages point here
    app.openapi_url = OPENAPI_URL
    app.docs_url = DOCS_URL
    app.redoc_url = REDOC_URL

    server.log(["docs", "debug"], "started")
    logger.debug("Docs plugin started")
