"""Role DTOs."""

from datetime import datetime

from pydantic import BaseModel, Field, field_validator

from school_rbac.constants.permissions import unknown_permissions
from school_rbac.models.domain.role import Role


def _check_known(keys: list[str]) -> list[str]:
    unknown = unknown_permissions(keys)
    if unknown:
        raise ValueError(f"Unknown permissions: {', '.join(sorted(unknown))}")
    return keys


class RoleCreateRequest(BaseModel):
    """Role creation request."""

    name: str = Field(max_length=100)
    description: str | None = Field(default=None, max_length=500)
    permissions: list[str] = Field(max_length=200)

    @field_validator("permissions")
    @classmethod
    def validate_permissions(cls, v: list[str]) -> list[str]:
        return _check_known(v)


class RoleUpdateRequest(BaseModel):
    """Role update request. Replaces the whole record."""

    name: str = Field(max_length=100)
    description: str | None = Field(default=None, max_length=500)
    permissions: list[str] = Field(max_length=200)

    @field_validator("permissions")
    @classmethod
    def validate_permissions(cls, v: list[str]) -> list[str]:
        return _check_known(v)


class RoleResponse(BaseModel):
    """Role response DTO."""

    id: str
    name: str
    description: str | None = None
    permissions: list[str]
    is_system: bool = False
    created_at: datetime | None = None
    updated_at: datetime | None = None

    @classmethod
    def from_role(cls, role: Role) -> "RoleResponse":
        """Build a response from a domain role."""
        return cls(
            id=role.id,
            name=role.name,
            description=role.description,
            permissions=sorted(role.permissions),
            is_system=role.is_system,
            created_at=role.created_at,
            updated_at=role.updated_at,
        )


class RoleListResponse(BaseModel):
    """Role list response."""

    items: list[RoleResponse]
    total: int


class RolePermissionsResponse(BaseModel):
    """Permission keys granted by a stored role."""

    role: str
    permissions: list[str]
    count: int


class DefaultRolePermissionsResponse(BaseModel):
    """Default permission keys of a built-in role."""

    role: str
    permissions: list[str]


class RoleHierarchyEntry(BaseModel):
    """Built-in role display metadata."""

    role: str
    display_name: str
    level: int
    description: str
