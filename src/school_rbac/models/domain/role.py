"""Role domain models."""

from datetime import datetime
from typing import Any

from pydantic import AliasChoices, BaseModel, Field, field_validator, model_validator

_ID_FIELDS = ("_id", "id", "role_id")


class Role(BaseModel):
    """Persisted role.

    Upstream records name their identifier ``_id``, ``id`` or ``role_id``;
    all three are read into ``id`` (first non-null one wins, in that order)
    so nothing past this model branches on the field name.
    """

    id: str = Field(validation_alias=AliasChoices(*_ID_FIELDS), min_length=1)
    name: str
    description: str | None = None
    permissions: frozenset[str] = frozenset()
    is_system: bool = Field(default=False, validation_alias=AliasChoices("is_system", "isSystem"))
    created_at: datetime | None = Field(
        default=None, validation_alias=AliasChoices("created_at", "createdAt")
    )
    updated_at: datetime | None = Field(
        default=None, validation_alias=AliasChoices("updated_at", "updatedAt")
    )

    class Config:
        """Pydantic config."""

        frozen = True
        populate_by_name = True

    @model_validator(mode="before")
    @classmethod
    def _drop_null_ids(cls, data: Any) -> Any:
        # A null "_id" must not shadow a usable "id"
        if isinstance(data, dict):
            return {
                key: value
                for key, value in data.items()
                if not (key in _ID_FIELDS and value is None)
            }
        return data

    @field_validator("id", mode="before")
    @classmethod
    def _coerce_id(cls, value: Any) -> Any:
        # Mock and legacy backends hand out numeric ids
        if isinstance(value, int) and not isinstance(value, bool):
            return str(value)
        return value

    @field_validator("permissions", mode="before")
    @classmethod
    def _none_is_empty(cls, value: Any) -> Any:
        return frozenset() if value is None else value


class RoleDraft(BaseModel):
    """Full role payload sent to storage on create and update."""

    name: str
    description: str | None = None
    permissions: list[str]

    def to_wire(self) -> dict[str, Any]:
        """Serialize for the roles backend."""
        return {
            "name": self.name,
            "description": self.description,
            "permissions": list(self.permissions),
        }


class RolePatch(BaseModel):
    """Role update; only fields explicitly set are changed.

    Setting ``description=None`` explicitly clears the description.
    """

    name: str | None = None
    description: str | None = None
    permissions: list[str] | None = None

    @classmethod
    def replace(cls, draft: RoleDraft) -> "RolePatch":
        """Build a patch that replaces every field of the record."""
        return cls(name=draft.name, description=draft.description, permissions=draft.permissions)

    def to_wire(self) -> dict[str, Any]:
        """Serialize only the fields being changed."""
        return self.model_dump(exclude_unset=True)


class UserRoleAssignment(BaseModel):
    """Binding of a user identity to a role identifier."""

    user_id: str
    role_id: str

    class Config:
        """Pydantic config."""

        frozen = True
