# =============================================================================
# app/routers/api/resource.py - Resource Endpoints
# =============================================================================

from fastapi import Depends

from app.routers.api.endpoint import EndpointConfig, list_query, page_of
from core.models.common import ListQuery
from core.services import ResourceService


async def list_resources(query: ListQuery = Depends(list_query)):
    """One page of resources permissions can be granted on."""
    return page_of(ResourceService.list(query), ResourceService.count(query.search), query)


LIST = EndpointConfig(
    handler=list_resources,
    summary="List resources",
    tags=["Resources"],
    auth="admin",
)
