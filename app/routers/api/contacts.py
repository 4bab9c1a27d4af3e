# =============================================================================
# app/routers/api/contacts.py - Contact Endpoints
# =============================================================================
# Public signup form plus admin-only contact management.
# =============================================================================

from typing import Annotated

from fastapi import Depends, Path, Request

from app.routers.api.endpoint import EndpointConfig, list_query, page_of
from app.server import request_log
from core.models.common import ListQuery
from core.models.contact import ContactCreate, ContactResponse
from core.services import ContactService


async def signup(request: Request, body: ContactCreate):
    """Leave contact details. Each email can sign up once."""
    contact = ContactService.signup(body)
    request_log(request, ["contact", "signup"], {"contact": contact["id"]})
    return contact


async def list_contacts(query: ListQuery = Depends(list_query)):
    """One page of contacts."""
    return page_of(ContactService.list(query), ContactService.count(query.search), query)


async def get_contact(contact_id: Annotated[int, Path(ge=1)]):
    return ContactService.get(contact_id)


async def delete_contact(request: Request, contact_id: Annotated[int, Path(ge=1)]):
    ContactService.delete(contact_id)
    request_log(request, ["contact", "delete"], {"contact": contact_id})


SIGNUP = EndpointConfig(
    handler=signup,
    summary="Sign up for contact",
    tags=["Contacts"],
    status_code=201,
    response_model=ContactResponse,
)
LIST = EndpointConfig(
    handler=list_contacts,
    summary="List contacts",
    tags=["Contacts"],
    auth="admin",
)
GET = EndpointConfig(
    handler=get_contact,
    summary="Get contact",
    tags=["Contacts"],
    response_model=ContactResponse,
    auth="admin",
)
DELETE = EndpointConfig(
    handler=delete_contact,
    summary="Delete contact",
    tags=["Contacts"],
    status_code=204,
    auth="admin",
)
