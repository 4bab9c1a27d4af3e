# =============================================================================
# app/routers/api/version.py - Version Endpoint
# =============================================================================

from app import __version__
from app.config import settings
from app.routers.api.endpoint import EndpointConfig


async def get_version():
    """Running API version and environment."""
    return {"version": __version__, "environment": settings.ENVIRONMENT}


GET = EndpointConfig(handler=get_version, summary="API version", tags=["Meta"])
