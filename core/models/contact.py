# =============================================================================
# core/models/contact.py - Contact Schemas
# =============================================================================
# A contact is a person who signed up for an invitation before registering.
# =============================================================================

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field

from .user import EMAIL_PATTERN


class ContactCreate(BaseModel):
    """
    Schema for the public signup form.

    Example:
        {"name": "Jane Doe", "email": "jane@example.com", "company": "ACME"}
    """

    name: str = Field(..., min_length=1, max_length=100)
    email: str = Field(..., max_length=255, pattern=EMAIL_PATTERN)
    company: str | None = Field(default=None, max_length=100)


class ContactResponse(BaseModel):
    """Contact returned to clients."""

    model_config = ConfigDict(from_attributes=True)

    id: int
    name: str
    email: str
    company: str | None = None
    created_at: datetime | None = None
