# =============================================================================
# app/routers/web/ - Server-Rendered Pages
# =============================================================================
# Registered as the "web" plugin:
# - pages.py: Home and login pages
# - app/admin/routes.py: Admin dashboard and lists, under settings.ADMIN_PATH
# =============================================================================

from typing import Any

from app.admin.routes import router as admin_router
from app.config import settings
from app.routers.web import pages

name = "web"


def register(server: Any, options: dict[str, Any] | None = None) -> None:
    """Plugin registration function."""
    admin_path = (options or {}).get("admin_path", settings.ADMIN_PATH)

    server.include_router(pages.router)
    server.include_router(admin_router, prefix=admin_path)
