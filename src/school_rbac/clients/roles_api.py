"""HTTP client for the roles backend."""

import logging
from typing import Any
from urllib.parse import quote

import httpx
from pydantic import ValidationError as PydanticValidationError

from school_rbac.config import get_settings
from school_rbac.exceptions import RoleStoreError, RoleValidationError, UnsupportedOperationError
from school_rbac.models.domain.role import Role, RoleDraft, RolePatch
from school_rbac.repositories.role_store import RoleStore
from school_rbac.utils.secure_logging import log_error

logger = logging.getLogger(__name__)

SESSION_EXPIRED_MESSAGE = "Session expired. Please login again."
NETWORK_ERROR_MESSAGE = "Network error. Please check your connection."
MALFORMED_RESPONSE_MESSAGE = "Malformed response from roles service"

# Envelope keys the roles backend has used for role lists
_LIST_ENVELOPE_KEYS = ("items", "data", "roles")


class RolesApiClient(RoleStore):
    """Roles backend over REST.

    Every failure surfaces as ``RoleStoreError`` with a human-readable
    message; no request is retried.
    """

    def __init__(
        self,
        base_url: str | None = None,
        token: str | None = None,
        timeout: float | None = None,
        http_client: httpx.AsyncClient | None = None,
    ) -> None:
        """Initialize the client.

        Args:
            base_url: Roles backend URL, defaults to ROLES_API_URL
            token: Optional bearer token sent with every request
            timeout: Request timeout in seconds, defaults to ROLES_API_TIMEOUT
            http_client: Shared client; a short-lived one is opened per
                request when omitted
        """
        settings = get_settings()
        self.base_url = (base_url or settings.roles_api_url).rstrip("/")
        self.token = token
        self.timeout = timeout if timeout is not None else settings.roles_api_timeout
        self._client = http_client

    def _get_headers(self) -> dict[str, str]:
        """Get request headers with optional authentication."""
        headers = {"Accept": "application/json"}
        if self.token:
            headers["Authorization"] = f"Bearer {self.token}"
        return headers

    @staticmethod
    def _role_path(role_id: str, suffix: str = "") -> str:
        if role_id is None or not str(role_id).strip():
            raise RoleValidationError("Role id is required", ["id"])
        return f"/roles/{quote(str(role_id), safe='')}{suffix}"

    async def _send(self, method: str, path: str, json: dict[str, Any] | None) -> httpx.Response:
        url = f"{self.base_url}{path}"
        if self._client is not None:
            return await self._client.request(
                method, url, json=json, headers=self._get_headers(), timeout=self.timeout
            )
        async with httpx.AsyncClient() as client:
            return await client.request(
                method, url, json=json, headers=self._get_headers(), timeout=self.timeout
            )

    async def _request(self, method: str, path: str, json: dict[str, Any] | None = None) -> Any:
        """Send a request and return the decoded JSON body.

        Raises:
            RoleStoreError: On transport failure, error status or bad payload
        """
        try:
            response = await self._send(method, path, json)
        except httpx.HTTPError as e:
            log_error(logger, f"Roles service {method} {path} failed", e)
            raise RoleStoreError(NETWORK_ERROR_MESSAGE, {"error_type": type(e).__name__}) from e

        if response.status_code == 401:
            raise RoleStoreError(SESSION_EXPIRED_MESSAGE, {"status_code": 401})

        if response.is_error:
            message = self._error_message(response)
            logger.warning(f"Roles service {method} {path} returned {response.status_code}")
            raise RoleStoreError(message, {"status_code": response.status_code})

        return self._decode(response)

    @staticmethod
    def _error_message(response: httpx.Response) -> str:
        """Pick the most useful message from an error response."""
        try:
            body = response.json()
        except ValueError:
            body = None

        if isinstance(body, dict):
            for key in ("error", "message", "detail"):
                value = body.get(key)
                if isinstance(value, str) and value:
                    return value

        return f"HTTP {response.status_code}: {response.reason_phrase}"

    @staticmethod
    def _decode(response: httpx.Response) -> Any:
        if not response.content:
            return {}
        if "application/json" not in response.headers.get("content-type", ""):
            return {}
        try:
            return response.json()
        except ValueError as e:
            raise RoleStoreError(MALFORMED_RESPONSE_MESSAGE) from e

    @staticmethod
    def _parse_role(payload: Any) -> Role:
        record = payload
        if isinstance(payload, dict) and isinstance(payload.get("data"), dict):
            record = payload["data"]
        try:
            return Role.model_validate(record)
        except PydanticValidationError as e:
            raise RoleStoreError(MALFORMED_RESPONSE_MESSAGE) from e

    @classmethod
    def _parse_roles(cls, payload: Any) -> list[Role]:
        records = payload
        if isinstance(payload, dict):
            records = next(
                (payload[key] for key in _LIST_ENVELOPE_KEYS if isinstance(payload.get(key), list)),
                None,
            )
        if not isinstance(records, list):
            raise RoleStoreError(MALFORMED_RESPONSE_MESSAGE)
        return [cls._parse_role(record) for record in records]

    async def list_roles(self) -> list[Role]:
        """Get all roles."""
        return self._parse_roles(await self._request("GET", "/roles"))

    async def get_role(self, role_id: str) -> Role:
        """Get a single role by id."""
        return self._parse_role(await self._request("GET", self._role_path(role_id)))

    async def get_role_permissions(self, role_id: str) -> frozenset[str]:
        """Get only the permission keys of a role."""
        payload = await self._request("GET", self._role_path(role_id, "/permissions"))
        if isinstance(payload, dict) and isinstance(payload.get("data"), dict):
            payload = payload["data"]
        permissions = payload.get("permissions") if isinstance(payload, dict) else None
        if not isinstance(permissions, list):
            raise RoleStoreError(MALFORMED_RESPONSE_MESSAGE)
        return frozenset(str(key) for key in permissions)

    async def create_role(self, draft: RoleDraft) -> Role:
        """Create a role."""
        return self._parse_role(await self._request("POST", "/roles", json=draft.to_wire()))

    async def update_role(self, role_id: str, patch: RolePatch) -> Role:
        """Update a role."""
        path = self._role_path(role_id)
        return self._parse_role(await self._request("PUT", path, json=patch.to_wire()))

    async def delete_role(self, role_id: str) -> None:
        """Delete a role."""
        await self._request("DELETE", self._role_path(role_id))

    async def assign_role_to_user(self, user_id: str, role_id: str) -> None:
        """The roles backend has no assignment endpoint."""
        raise UnsupportedOperationError()
