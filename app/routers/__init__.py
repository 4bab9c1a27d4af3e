# =============================================================================
# app/routers/ - Route Plugins
# =============================================================================
# This package contains the routes, each package registered as a plugin:
# - api/: REST API route table ("api" plugin)
# - web/: Home, login and admin pages ("web" plugin)
#
# Both are registered by app/manager.py.
# =============================================================================

from . import api
from . import web

__all__ = [
    "api",
    "web",
]
