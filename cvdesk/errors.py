"""Error taxonomy for the service and its HTTP mapping."""

from __future__ import annotations

import logging

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from pydantic import ValidationError as PydanticValidationError

logger = logging.getLogger(__name__)


class CVDeskError(Exception):
    """Base exception for application errors."""

    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR

    def __init__(self, message: str):
        self.message = message
        super().__init__(self.message)

    def to_body(self) -> dict:
        return {"message": self.message}


class ValidationError(CVDeskError):
    """Raised when input fails field-level validation."""

    status_code = status.HTTP_400_BAD_REQUEST

    def __init__(self, errors: dict[str, list[str]], message: str = "Validation error"):
        self.errors = errors
        super().__init__(message)

    def to_body(self) -> dict:
        return {"message": self.message, "errors": self.errors}

    @classmethod
    def from_pydantic(cls, exc: PydanticValidationError) -> "ValidationError":
        errors: dict[str, list[str]] = {}
        for item in exc.errors():
            field = ".".join(str(part) for part in item.get("loc", ())) or "request"
            errors.setdefault(field, []).append(item.get("msg", "Invalid value"))
        return cls(errors)


class NotFoundError(CVDeskError):
    """Raised when a requested record does not exist."""

    status_code = status.HTTP_404_NOT_FOUND

    def __init__(self, resource: str, record_id: int | str):
        self.resource = resource
        self.record_id = record_id
        super().__init__(f"{resource} {record_id} not found")


class ConflictError(CVDeskError):
    """Raised when a unique value is already taken."""

    status_code = status.HTTP_409_CONFLICT

    def __init__(self, field: str, value: str):
        self.field = field
        self.value = value
        super().__init__(f"A user with this {field} already exists")


class ForbiddenError(CVDeskError):
    """Raised when the caller's role lacks a capability."""

    status_code = status.HTTP_403_FORBIDDEN

    def __init__(self, capability: str, message: str = "Not permitted"):
        self.capability = capability
        super().__init__(message)


class AccessDeniedError(ForbiddenError):
    """Raised when the caller may not open a named view."""

    def __init__(self, view: str):
        self.view = view
        super().__init__(capability=view, message="Access Denied")


class AuthError(CVDeskError):
    """Raised when authentication fails."""

    status_code = status.HTTP_401_UNAUTHORIZED


class MissingCredentialsError(AuthError):
    def __init__(self) -> None:
        super().__init__("Username and password are required")


class InvalidCredentialsError(AuthError):
    def __init__(self) -> None:
        super().__init__("Invalid username or password")


class NotAuthenticatedError(AuthError):
    def __init__(self) -> None:
        super().__init__("Not authenticated")


class StorageError(CVDeskError):
    """Raised when the record store fails underneath an operation."""

    def to_body(self) -> dict:
        return {"message": "Internal server error"}


class AuditWriteError(StorageError):
    """Raised when a version history entry cannot be written."""


def _cvdesk_error_handler(request: Request, exc: CVDeskError) -> JSONResponse:
    if isinstance(exc, StorageError):
        logger.error("%s %s failed: %s", request.method, request.url.path, exc.message, exc_info=exc)
    headers = {"WWW-Authenticate": "Bearer"} if isinstance(exc, AuthError) else None
    return JSONResponse(status_code=exc.status_code, content=exc.to_body(), headers=headers)


def _request_validation_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    errors: dict[str, list[str]] = {}
    for item in exc.errors():
        location = [str(part) for part in item.get("loc", ()) if part not in ("body", "query", "path")]
        errors.setdefault(".".join(location) or "request", []).append(item.get("msg", "Invalid value"))
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content={"message": "Validation error", "errors": errors},
    )


def register_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(CVDeskError, _cvdesk_error_handler)
    app.add_exception_handler(RequestValidationError, _request_validation_handler)
