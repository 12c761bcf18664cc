"""Permissions router for the static permission catalog."""

from fastapi import APIRouter

from school_rbac.constants.permissions import all_permissions, permissions_by_category
from school_rbac.models.dto.permission import (
    PermissionListResponse,
    PermissionResponse,
    PermissionsByCategory,
    SelectionRequest,
)
from school_rbac.services.permission_selection import SelectionSummary, summarize_selection

router = APIRouter()


@router.get("", response_model=PermissionListResponse)
async def list_permissions() -> PermissionListResponse:
    """List all permissions."""
    items = [PermissionResponse.from_permission(p) for p in all_permissions()]
    return PermissionListResponse(items=items, total=len(items))


@router.get("/by-category", response_model=list[PermissionsByCategory])
async def list_permissions_by_category() -> list[PermissionsByCategory]:
    """List all permissions grouped by category, in display order."""
    return [
        PermissionsByCategory(
            category=category.value,
            permissions=[PermissionResponse.from_permission(p) for p in permissions],
        )
        for category, permissions in permissions_by_category()
    ]


@router.post("/selection", response_model=SelectionSummary)
async def summarize_permission_selection(body: SelectionRequest) -> SelectionSummary:
    """Summarize a candidate permission set per category."""
    return summarize_selection(body.permissions)
