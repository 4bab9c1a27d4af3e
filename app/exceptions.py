# =============================================================================
# app/exceptions.py - Custom Exception Handlers
# =============================================================================
# Centralized exception handling for the API and the admin pages.
# Errors tell HOW to fix, not just WHAT failed.
# =============================================================================

from http import HTTPStatus
from typing import Any

from fastapi import Request
from fastapi.encoders import jsonable_encoder
from fastapi.responses import JSONResponse


class NoireException(Exception):
    """
    Base exception for the Noire server.

    All custom exceptions inherit from this class.
    Provides structured error responses with actionable suggestions.
    """

    def __init__(
        self,
        message: str,
        code: str = "NOIRE_ERROR",
        status_code: int = 500,
        suggestion: str | None = None,
        details: dict[str, Any] | None = None,
    ):
        super().__init__(message)
        self.message = message
        self.code = code
        self.status_code = status_code
        self.suggestion = suggestion
        self.details = details or {}

    def to_dict(self) -> dict[str, Any]:
        """Convert exception to API response dict."""
        result = {
            "error": HTTPStatus(self.status_code).phrase,
            "detail": self.message,
            "code": self.code,
        }
        if self.suggestion:
            result["suggestion"] = self.suggestion
        if self.details:
            result["details"] = self.details
        return result


# =============================================================================
# Record Exceptions
# =============================================================================

class RecordNotFoundError(NoireException):
    """Raised when a user, role, resource or contact ID doesn't exist."""

    def __init__(self, entity: str, record_id: int | str):
        super().__init__(
            message=f"{entity.capitalize()} not found: {record_id}",
            code=f"{entity.upper()}_NOT_FOUND",
            status_code=404,
            suggestion=f"Check that the {entity} id is correct",
            details={"id": record_id}
        )


class RecordConflictError(NoireException):
    """Raised when creating a record that violates a uniqueness rule."""

    def __init__(self, entity: str, field: str, value: Any):
        super().__init__(
            message=f"{entity.capitalize()} with {field} '{value}' already exists",
            code=f"{entity.upper()}_EXISTS",
            status_code=409,
            suggestion=f"Choose a different {field}",
            details={field: value}
        )


# =============================================================================
# Auth Exceptions
# =============================================================================

class InvalidCredentialsError(NoireException):
    """Raised when username/password authentication fails."""

    def __init__(self):
        super().__init__(
            message="Invalid username or password",
            code="INVALID_CREDENTIALS",
            status_code=401,
            suggestion="Check your username and password and try again",
        )


class InvalidTokenError(NoireException):
    """Raised when an auth or reset token can't be verified."""

    def __init__(self, reason: str = "Invalid token"):
        super().__init__(
            message=reason,
            code="INVALID_TOKEN",
            status_code=401,
            suggestion="Log in again to obtain a new token",
        )


class ForbiddenError(NoireException):
    """Raised when the authenticated user lacks a required scope."""

    def __init__(self, scope: str):
        super().__init__(
            message=f"Insufficient scope, '{scope}' is required",
            code="FORBIDDEN",
            status_code=403,
            details={"scope": scope}
        )


class InternalServerError(NoireException):
    """Raised when a collaborator fails while serving a page."""

    def __init__(self):
        super().__init__(
            message="An internal server error occurred",
            code="INTERNAL_ERROR",
            status_code=500,
        )


# =============================================================================
# Exception Handlers
# =============================================================================

async def noire_exception_handler(
    request: Request,
    exc: NoireException
) -> JSONResponse:
    """
    Convert NoireException to JSON response.

    Returns structured error with:
    - error: HTTP status phrase
    - detail: Human-readable message
    - code: Machine-readable error code
    - suggestion: How to fix (if available)
    - details: Additional context
    """
    headers = {"WWW-Authenticate": "Bearer"} if exc.status_code == 401 else None
    return JSONResponse(
        status_code=exc.status_code,
        content=exc.to_dict(),
        headers=headers,
    )


async def validation_exception_handler(
    request: Request,
    exc: Exception
) -> JSONResponse:
    """
    Handle Pydantic validation errors.

    Converts validation errors to user-friendly messages.
    """
    errors = jsonable_encoder(exc.errors()) if hasattr(exc, "errors") else str(exc)
    return JSONResponse(
        status_code=422,
        content={
            "error": HTTPStatus.UNPROCESSABLE_ENTITY.phrase,
            "detail": "Validation error",
            "code": "VALIDATION_ERROR",
            "errors": errors,
        }
    )
