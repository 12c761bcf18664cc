"""Global error handling middleware to prevent information disclosure."""

import logging
from typing import Any

from fastapi import Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from sqlalchemy.exc import SQLAlchemyError
from starlette.exceptions import HTTPException as StarletteHTTPException

from school_rbac.config import get_settings
from school_rbac.exceptions import (
    CannotModifySystemRoleError,
    RoleNotFoundError,
    RoleStoreError,
    SchoolRbacError,
    UnsupportedOperationError,
    ValidationError,
)
from school_rbac.utils.secure_logging import log_error

logger = logging.getLogger(__name__)

HTTP_422 = 422


def _get_cors_headers(request: Request) -> dict[str, str]:
    """Get CORS headers for error responses.

    Exception handlers run before the CORS middleware can add headers to
    the response, so allowed origins are echoed here.

    Args:
        request: The incoming request

    Returns:
        Dict of CORS headers to add to the response
    """
    origin = request.headers.get("origin")
    if not origin:
        return {}

    if origin in get_settings().cors_origins_list:
        return {
            "Access-Control-Allow-Origin": origin,
            "Access-Control-Allow-Credentials": "true",
        }

    return {}


# Safe error messages that can be shown to users
SAFE_ERROR_MESSAGES = {
    400: "Invalid request",
    404: "Resource not found",
    405: "Method not allowed",
    409: "Conflict with existing resource",
    422: "Invalid input data",
    429: "Too many requests",
    500: "Internal server error",
    501: "Not implemented",
    502: "Service unavailable",
    503: "Service temporarily unavailable",
}

# Error messages that are safe to pass through
# These don't reveal internal implementation details
ALLOWED_ERROR_PATTERNS = [
    "Resource not found",
    "Role not found",
    "Role name is required",
    "At least one permission is required",
    "Unknown permissions",
    "Cannot delete system roles",
    "Cannot rename system roles",
    "Cannot modify system roles",
    "Assigning roles via this endpoint is not supported yet",
    "Role storage failed",
    "Rate limit exceeded",
]


def is_safe_error_message(message: str) -> bool:
    """Check if an error message is safe to expose to users.

    Args:
        message: Error message to check

    Returns:
        True if message is safe to expose
    """
    message_lower = message.lower()
    return any(pattern.lower() in message_lower for pattern in ALLOWED_ERROR_PATTERNS)


def sanitize_error_detail(detail: Any, status_code: int) -> str:
    """Sanitize error detail to prevent information disclosure.

    Args:
        detail: Original error detail
        status_code: HTTP status code

    Returns:
        Safe error message
    """
    if isinstance(detail, str):
        if is_safe_error_message(detail):
            return detail
    elif isinstance(detail, list):
        # Validation errors - extract safe field information
        safe_errors = []
        for error in detail:
            if isinstance(error, dict):
                loc = error.get("loc", [])
                msg = error.get("msg", "Invalid value")
                # Only include field name, not detailed type information
                field = loc[-1] if loc else "field"
                if isinstance(field, str) and not field.startswith("_"):
                    safe_errors.append(f"{field}: {msg}")
        if safe_errors:
            return "; ".join(safe_errors[:3])  # Limit to 3 errors

    # Return generic message for unknown patterns
    return SAFE_ERROR_MESSAGES.get(status_code, "Request failed")


def status_code_for(exc: SchoolRbacError) -> int:
    """Map a domain error to its HTTP status code."""
    if isinstance(exc, RoleNotFoundError):
        return status.HTTP_404_NOT_FOUND
    if isinstance(exc, (ValidationError, CannotModifySystemRoleError)):
        return status.HTTP_400_BAD_REQUEST
    if isinstance(exc, UnsupportedOperationError):
        return status.HTTP_501_NOT_IMPLEMENTED
    if isinstance(exc, RoleStoreError) and "status_code" in exc.details:
        return status.HTTP_502_BAD_GATEWAY
    return status.HTTP_500_INTERNAL_SERVER_ERROR


async def http_exception_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    """Handle HTTP exceptions with sanitized messages.

    Args:
        request: FastAPI request
        exc: HTTP exception

    Returns:
        JSONResponse with sanitized error
    """
    cors_headers = _get_cors_headers(request)

    # In debug mode, return original detail
    if get_settings().debug:
        return JSONResponse(
            status_code=exc.status_code,
            content={"detail": exc.detail},
            headers=cors_headers,
        )

    return JSONResponse(
        status_code=exc.status_code,
        content={"detail": sanitize_error_detail(exc.detail, exc.status_code)},
        headers=cors_headers,
    )


async def validation_exception_handler(
    request: Request, exc: RequestValidationError
) -> JSONResponse:
    """Handle request validation exceptions with sanitized messages.

    Args:
        request: FastAPI request
        exc: Validation exception

    Returns:
        JSONResponse with sanitized error
    """
    cors_headers = _get_cors_headers(request)

    logger.warning(f"Validation error for {request.url.path}: {exc.errors()}")

    # In debug mode, return full details
    if get_settings().debug:
        return JSONResponse(
            status_code=HTTP_422,
            content={"detail": exc.errors()},
            headers=cors_headers,
        )

    return JSONResponse(
        status_code=HTTP_422,
        content={"detail": sanitize_error_detail(exc.errors(), HTTP_422)},
        headers=cors_headers,
    )


async def domain_exception_handler(request: Request, exc: SchoolRbacError) -> JSONResponse:
    """Handle domain errors that escaped the routers.

    Args:
        request: FastAPI request
        exc: Domain exception

    Returns:
        JSONResponse with the mapped status code
    """
    status_code = status_code_for(exc)
    if status_code >= 500:
        log_error(logger, f"Role operation failed for {request.url.path}", exc)

    detail = exc.message if get_settings().debug else sanitize_error_detail(exc.message, status_code)
    return JSONResponse(
        status_code=status_code,
        content={"detail": detail},
        headers=_get_cors_headers(request),
    )


async def generic_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    """Handle unexpected exceptions without leaking information.

    Args:
        request: FastAPI request
        exc: Unexpected exception

    Returns:
        JSONResponse with generic error
    """
    cors_headers = _get_cors_headers(request)

    logger.error(f"Unhandled exception for {request.url.path}: {exc}", exc_info=True)

    if get_settings().debug:
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content={
                "detail": str(exc),
                "type": type(exc).__name__,
            },
            headers=cors_headers,
        )

    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={"detail": SAFE_ERROR_MESSAGES[500]},
        headers=cors_headers,
    )


async def sqlalchemy_exception_handler(request: Request, exc: SQLAlchemyError) -> JSONResponse:
    """Handle SQLAlchemy exceptions without leaking database details.

    Args:
        request: FastAPI request
        exc: SQLAlchemy exception

    Returns:
        JSONResponse with safe error
    """
    log_error(logger, f"Database error for {request.url.path}", exc)

    content: dict[str, str] = {"detail": "Database error occurred"}
    if get_settings().debug:
        content = {"detail": "Database error", "type": type(exc).__name__}

    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content=content,
        headers=_get_cors_headers(request),
    )
