"""
Custom exceptions and error handlers for consistent error responses.

Every failure leaves the API as ``{"error": <message>, "error_code": <code>}``.
"""

import logging
from fastapi import Request, status
from fastapi.responses import JSONResponse
from fastapi.exceptions import RequestValidationError
from fastapi.encoders import jsonable_encoder
from starlette.exceptions import HTTPException
from typing import Any, Dict, Optional

logger = logging.getLogger("equipment_monitoring.errors")


class AppException(Exception):
    """Base application exception."""

    def __init__(self, message: str, error_code: str, status_code: int = 500, details: Dict[str, Any] = None):
        self.message = message
        self.error_code = error_code
        self.status_code = status_code
        self.details = details or {}
        super().__init__(message)


# Authentication

class AuthError(AppException):
    """Raised for authentication failures."""

    def __init__(self, message: str = "Authentication failed", error_code: str = "ERR_AUTH_001",
                 status_code: int = status.HTTP_401_UNAUTHORIZED):
        super().__init__(message=message, error_code=error_code, status_code=status_code)


class InvalidCredentialsError(AuthError):
    """Wrong password and unknown username share this error."""

    def __init__(self):
        super().__init__(message="Invalid credentials", error_code="ERR_AUTH_001")


class MissingCredentialsError(AuthError):
    def __init__(self):
        super().__init__(message="Access token required", error_code="ERR_AUTH_002")


class InvalidTokenError(AuthError):
    """Expired and tampered tokens are reported identically."""

    def __init__(self):
        super().__init__(
            message="Invalid token",
            error_code="ERR_AUTH_003",
            status_code=status.HTTP_403_FORBIDDEN,
        )


# Authorization

class InsufficientRoleError(AppException):
    """Raised when user doesn't have the role required for an action."""

    def __init__(self, message: str = "Admin access required"):
        super().__init__(
            message=message,
            error_code="ERR_PERM_001",
            status_code=status.HTTP_403_FORBIDDEN,
        )


# Domain validation

class DomainError(AppException):
    """Base for rejected-but-well-formed requests."""

    def __init__(self, message: str, error_code: str, status_code: int = status.HTTP_400_BAD_REQUEST,
                 details: Dict[str, Any] = None):
        super().__init__(message=message, error_code=error_code, status_code=status_code, details=details)


class InvalidStatusError(DomainError):
    def __init__(self, value: Any, allowed: Optional[list] = None):
        allowed = allowed or []
        super().__init__(
            message=f"Invalid status '{value}'. Allowed: {', '.join(allowed)}",
            error_code="ERR_DOMAIN_001",
            details={"status": value, "allowed": allowed},
        )


class InvalidShiftWindowError(DomainError):
    def __init__(self):
        super().__init__(
            message="Shift start_time must be before end_time",
            error_code="ERR_DOMAIN_002",
        )


class UnsupportedMediaTypeError(DomainError):
    def __init__(self, content_type: Optional[str]):
        super().__init__(
            message="Only audio files are allowed",
            error_code="ERR_DOMAIN_003",
            status_code=status.HTTP_415_UNSUPPORTED_MEDIA_TYPE,
            details={"content_type": content_type},
        )


class PayloadTooLargeError(DomainError):
    def __init__(self, limit: int):
        super().__init__(
            message=f"File exceeds the {limit} byte limit",
            error_code="ERR_DOMAIN_004",
            status_code=status.HTTP_413_REQUEST_ENTITY_TOO_LARGE,
            details={"limit": limit},
        )


class DuplicateUsernameError(DomainError):
    def __init__(self, username: str):
        super().__init__(
            message="Username already registered",
            error_code="ERR_DOMAIN_005",
            status_code=status.HTTP_409_CONFLICT,
            details={"username": username},
        )


class ResourceNotFoundError(AppException):
    """Raised when requested resource is not found."""

    def __init__(self, resource: str, resource_id: Any = None):
        message = f"{resource} not found"
        if resource_id is not None:
            message = f"{resource} with ID {resource_id} not found"
        super().__init__(
            message=message,
            error_code="ERR_NOT_FOUND_001",
            status_code=status.HTTP_404_NOT_FOUND,
            details={"resource": resource, "id": resource_id},
        )


class StorageError(AppException):
    """Generic backend failure. The cause is logged, never returned."""

    def __init__(self, operation: str = "storage operation"):
        self.operation = operation
        super().__init__(
            message="Database error",
            error_code="ERR_STORAGE_001",
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        )


# Global Exception Handlers

async def app_exception_handler(request: Request, exc: AppException) -> JSONResponse:
    """Handler for custom application exceptions."""
    if isinstance(exc, StorageError):
        logger.error(
            "Storage failure during %s on %s %s",
            exc.operation, request.method, request.url.path,
            exc_info=exc.__cause__ or exc,
        )
    content = {"error": exc.message, "error_code": exc.error_code}
    if exc.details and exc.status_code < 500:
        content["details"] = exc.details
    return JSONResponse(status_code=exc.status_code, content=content)


async def http_exception_handler(request: Request, exc: HTTPException) -> JSONResponse:
    """Handler for HTTPException (routing 404/405 included) with standardized format."""
    error_code_map = {
        400: "ERR_BAD_REQUEST",
        401: "ERR_UNAUTHORIZED",
        403: "ERR_FORBIDDEN",
        404: "ERR_NOT_FOUND",
        405: "ERR_METHOD_NOT_ALLOWED",
        500: "ERR_INTERNAL_SERVER"
    }

    return JSONResponse(
        status_code=exc.status_code,
        content={
            "error": exc.detail,
            "error_code": error_code_map.get(exc.status_code, "ERR_UNKNOWN"),
        },
        headers=getattr(exc, "headers", None),
    )


async def validation_exception_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    """Handler for Pydantic validation errors."""
    return JSONResponse(
        status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
        content={
            "error": "Validation error",
            "error_code": "ERR_VALIDATION",
            "details": {"errors": jsonable_encoder(exc.errors())},
        }
    )


async def generic_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    """Handler for unhandled exceptions."""
    logger.exception("Unhandled exception on %s %s", request.method, request.url.path)

    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={
            "error": "An internal server error occurred",
            "error_code": "ERR_INTERNAL_SERVER",
        }
    )
