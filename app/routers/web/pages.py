# =============================================================================
# app/routers/web/pages.py - Public Pages
# =============================================================================
# Server-rendered pages outside the admin area.
# =============================================================================

from typing import Optional

from fastapi import APIRouter, Depends, Query, Request
from fastapi.responses import HTMLResponse

from app.auth import AuthUser, get_current_user_optional
from app.config import settings
from app.templating import templates

router = APIRouter()


@router.get("/", response_class=HTMLResponse, include_in_schema=False)
async def home(
    request: Request,
    user: Optional[AuthUser] = Depends(get_current_user_optional),
):
    return templates.TemplateResponse(request, "pages/home.html", {"current_user": user})


@router.get("/login", response_class=HTMLResponse, include_in_schema=False)
async def login_page(request: Request, next_url: str = Query("/", alias="next")):
    """Login form posting to the API login endpoint."""
    # Only same-site redirects after login
    if not next_url.startswith("/") or next_url.startswith("//"):
        next_url = "/"

    return templates.TemplateResponse(request, "pages/login.html", {
        "current_user": None,
        "login_url": f"{settings.API_PREFIX}{settings.prefixes.login}",
        "next_url": next_url,
    })
