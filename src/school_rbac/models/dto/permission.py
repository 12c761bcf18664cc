"""Permission DTOs."""

from pydantic import BaseModel, Field

from school_rbac.models.domain.permission import Permission


class PermissionResponse(BaseModel):
    """Permission response DTO."""

    key: str
    label: str
    category: str

    @classmethod
    def from_permission(cls, permission: Permission) -> "PermissionResponse":
        """Build a response from a catalog entry."""
        return cls(key=permission.key, label=permission.label, category=permission.category.value)


class PermissionListResponse(BaseModel):
    """Permission list response."""

    items: list[PermissionResponse]
    total: int


class PermissionsByCategory(BaseModel):
    """Permissions grouped by category."""

    category: str
    permissions: list[PermissionResponse]


class SelectionRequest(BaseModel):
    """Candidate permission set to summarize."""

    permissions: list[str] = Field(default_factory=list, max_length=200)
