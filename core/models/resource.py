# =============================================================================
# core/models/resource.py - Resource Schemas
# =============================================================================

from pydantic import BaseModel, ConfigDict


class ResourceResponse(BaseModel):
    """A protected resource permissions can refer to."""

    model_config = ConfigDict(from_attributes=True)

    id: int
    name: str
    description: str | None = None
