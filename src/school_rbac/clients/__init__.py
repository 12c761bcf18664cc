"""HTTP clients package."""

from school_rbac.clients.roles_api import RolesApiClient

__all__ = ["RolesApiClient"]
