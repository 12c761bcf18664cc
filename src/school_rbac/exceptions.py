"""Domain-specific exceptions for the school RBAC service.

These exceptions provide a clean separation between service-layer errors
and HTTP responses, avoiding string matching in routers.
"""

from typing import Any

ASSIGN_ROLE_NOT_SUPPORTED = "Assigning roles via this endpoint is not supported yet"


class SchoolRbacError(Exception):
    """Base exception for all school RBAC errors."""

    def __init__(self, message: str = "An error occurred", details: dict[str, Any] | None = None) -> None:
        self.message = message
        self.details = details or {}
        super().__init__(self.message)


# =============================================================================
# Validation Errors (400)
# =============================================================================


class ValidationError(SchoolRbacError):
    """Base class for validation errors."""

    pass


class RoleValidationError(ValidationError):
    """Raised when a role fails local validation before reaching storage."""

    def __init__(self, message: str, fields: list[str] | None = None) -> None:
        self.fields = fields or []
        super().__init__(message, {"fields": self.fields})


# =============================================================================
# Storage / Transport Errors
# =============================================================================


class RoleStoreError(SchoolRbacError):
    """Raised when the role persistence collaborator fails.

    Callers of the role services treat every subclass the same way; the
    subclasses only exist so the HTTP layer can pick a status code.
    """

    pass


class RoleNotFoundError(RoleStoreError):
    """Raised when a role cannot be found."""

    def __init__(self, role_id: str | None = None) -> None:
        details = {"role_id": str(role_id)} if role_id else {}
        super().__init__("Role not found", details)


class CannotModifySystemRoleError(RoleStoreError):
    """Raised when trying to delete or rename a system role."""

    def __init__(self, role_name: str | None = None, action: str = "modify") -> None:
        message = f"Cannot {action} system roles"
        details = {"role_name": role_name} if role_name else {}
        super().__init__(message, details)


# =============================================================================
# Unsupported Operations (501)
# =============================================================================


class UnsupportedOperationError(SchoolRbacError):
    """Raised for operations the backend does not offer. Never retry these."""

    def __init__(self, message: str = ASSIGN_ROLE_NOT_SUPPORTED) -> None:
        super().__init__(message)
