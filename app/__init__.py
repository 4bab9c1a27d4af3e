# =============================================================================
# app/ - FastAPI Application Package
# =============================================================================
# This package contains the Noire web application:
# - main.py: App entry point, logging setup, ASGI app instance
# - manager.py: Composes the server (plugins, API routes, web routes)
# - server.py: Server facade with lifecycle events and plugin registration
# - config.py: Environment variable loading and settings
# - routers/: API endpoint definitions organized by module
# - admin/: Server-rendered admin pages and list helpers
# - plugins/: Monitoring, reporting and documentation plugins
#
# The app layer is thin - it handles HTTP concerns and delegates
# business logic to the core/ package.
# =============================================================================

__version__ = "1.0.0"
