# =============================================================================
# app/routers/api/register.py - Self-Service Registration
# =============================================================================

from fastapi import Request

from app.routers.api.endpoint import EndpointConfig
from app.server import request_log
from core.models.auth import RegisterRequest
from core.models.user import UserResponse
from core.services import AuthService


async def register(request: Request, body: RegisterRequest):
    """
    Create an account with the default role.

    Raises 409 when the username or email is already taken.
    """
    user = AuthService.register(body)
    request_log(request, ["auth", "register"], {"user": user["id"]})
    return user


REGISTER = EndpointConfig(
    handler=register,
    summary="Register",
    tags=["Auth"],
    status_code=201,
    response_model=UserResponse,
)
