"""Roles router for role record management."""

from typing import Annotated

from fastapi import APIRouter, Depends, Request, status

from school_rbac.constants.roles import get_default_permissions, get_role_hierarchy
from school_rbac.dependencies import get_role_service
from school_rbac.exceptions import (
    CannotModifySystemRoleError,
    RoleNotFoundError,
    RoleValidationError,
)
from school_rbac.models.dto.role import (
    DefaultRolePermissionsResponse,
    RoleCreateRequest,
    RoleHierarchyEntry,
    RoleListResponse,
    RolePermissionsResponse,
    RoleResponse,
    RoleUpdateRequest,
)
from school_rbac.security.rate_limit import ROLE_MODIFY_LIMIT, limiter
from school_rbac.services.role_service import RoleService
from school_rbac.utils.errors import raise_bad_request, raise_not_found

router = APIRouter()


@router.get("", response_model=RoleListResponse)
async def list_roles(
    service: Annotated[RoleService, Depends(get_role_service)],
) -> RoleListResponse:
    """List all roles with their permissions."""
    roles = await service.list_roles()
    items = [RoleResponse.from_role(role) for role in roles]
    return RoleListResponse(items=items, total=len(items))


@router.post("", response_model=RoleResponse, status_code=status.HTTP_201_CREATED)
@limiter.limit(ROLE_MODIFY_LIMIT)
async def create_role(
    request: Request,
    body: RoleCreateRequest,
    service: Annotated[RoleService, Depends(get_role_service)],
) -> RoleResponse:
    """Create a custom role."""
    try:
        role = await service.create_role(body.name, body.description, body.permissions)
    except RoleValidationError as e:
        raise_bad_request(e.message)
    return RoleResponse.from_role(role)


@router.get("/hierarchy", response_model=list[RoleHierarchyEntry])
async def get_hierarchy() -> list[RoleHierarchyEntry]:
    """List built-in roles ordered by hierarchy level."""
    return [
        RoleHierarchyEntry(
            role=info.role.value,
            display_name=info.display_name,
            level=info.level,
            description=info.description,
        )
        for info in get_role_hierarchy()
    ]


@router.get("/defaults/{role_name}", response_model=DefaultRolePermissionsResponse)
async def get_default_role_permissions(role_name: str) -> DefaultRolePermissionsResponse:
    """Get the default permissions of a built-in role.

    Unknown role names get an empty list.
    """
    return DefaultRolePermissionsResponse(
        role=role_name,
        permissions=sorted(get_default_permissions(role_name)),
    )


@router.get("/{role_id}", response_model=RoleResponse)
async def get_role(
    role_id: str,
    service: Annotated[RoleService, Depends(get_role_service)],
) -> RoleResponse:
    """Get role by ID."""
    try:
        role = await service.get_role(role_id)
    except RoleNotFoundError:
        raise_not_found("Role")
    return RoleResponse.from_role(role)


@router.get("/{role_id}/permissions", response_model=RolePermissionsResponse)
async def get_role_permissions(
    role_id: str,
    service: Annotated[RoleService, Depends(get_role_service)],
) -> RolePermissionsResponse:
    """Get the permission keys granted by a role."""
    try:
        role = await service.get_role(role_id)
    except RoleNotFoundError:
        raise_not_found("Role")
    permissions = sorted(role.permissions)
    return RolePermissionsResponse(role=role.name, permissions=permissions, count=len(permissions))


@router.put("/{role_id}", response_model=RoleResponse)
@limiter.limit(ROLE_MODIFY_LIMIT)
async def update_role(
    request: Request,
    role_id: str,
    body: RoleUpdateRequest,
    service: Annotated[RoleService, Depends(get_role_service)],
) -> RoleResponse:
    """Replace a role's name, description and permissions."""
    try:
        role = await service.update_role(role_id, body.name, body.description, body.permissions)
    except RoleNotFoundError:
        raise_not_found("Role")
    except (RoleValidationError, CannotModifySystemRoleError) as e:
        raise_bad_request(e.message)
    return RoleResponse.from_role(role)


@router.delete("/{role_id}", status_code=status.HTTP_204_NO_CONTENT)
@limiter.limit(ROLE_MODIFY_LIMIT)
async def delete_role(
    request: Request,
    role_id: str,
    service: Annotated[RoleService, Depends(get_role_service)],
) -> None:
    """Delete a custom role."""
    try:
        await service.delete_role(role_id)
    except RoleNotFoundError:
        raise_not_found("Role")
    except CannotModifySystemRoleError as e:
        raise_bad_request(e.message)
