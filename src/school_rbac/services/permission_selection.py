"""Tri-state permission selection logic for role editing.

Pure functions over an immutable candidate set: every operation returns a
new frozenset and leaves its input untouched. ``PermissionSelection`` wraps
them as the private, per-edit-session state of one role form.
"""

from collections.abc import Iterable, Sequence
from enum import Enum

from pydantic import BaseModel

from school_rbac.constants.permissions import (
    all_permission_keys,
    categories,
    keys_for_category,
)
from school_rbac.constants.roles import BuiltInRole, get_default_permissions
from school_rbac.models.domain.permission import PermissionCategory
from school_rbac.models.domain.role import Role


class SelectionStatus(str, Enum):
    """How much of a category is selected."""

    ALL = "all"
    SOME = "some"
    NONE = "none"


class CategorySelection(BaseModel):
    """Selection state of a single category."""

    category: PermissionCategory
    status: SelectionStatus
    selected: int
    total: int


class SelectionSummary(BaseModel):
    """Selection state of every category plus overall counts."""

    selected: int
    total: int
    categories: list[CategorySelection]


def aggregate(category_keys: Sequence[str], selected: Iterable[str]) -> SelectionStatus:
    """Compute the tri-state status of a category.

    Args:
        category_keys: Ordered permission keys belonging to the category
        selected: Current candidate permission set

    Returns:
        ALL if every key is selected, NONE if none is, SOME otherwise
    """
    chosen = selected if isinstance(selected, (set, frozenset)) else frozenset(selected)
    count = sum(1 for key in category_keys if key in chosen)
    if count == len(category_keys):
        return SelectionStatus.ALL
    if count == 0:
        return SelectionStatus.NONE
    return SelectionStatus.SOME


def category_status(
    category: PermissionCategory | str, selected: Iterable[str]
) -> SelectionStatus:
    """Compute the tri-state status of a catalog category."""
    return aggregate(keys_for_category(category), selected)


def toggle_category(category_keys: Sequence[str], selected: Iterable[str]) -> frozenset[str]:
    """Bulk-toggle a category.

    A fully selected category is cleared. A partially selected or empty
    category is filled, so a partial selection goes to full, not to empty.
    """
    current = frozenset(selected)
    if aggregate(category_keys, current) is SelectionStatus.ALL:
        return current.difference(category_keys)
    return current.union(category_keys)


def toggle_permission(key: str, selected: Iterable[str]) -> frozenset[str]:
    """Add the key if absent, remove it if present."""
    return frozenset(selected).symmetric_difference({key})


def toggle_all(
    selected: Iterable[str], catalog_keys: Iterable[str] | None = None
) -> frozenset[str]:
    """Select or clear the whole catalog.

    When the candidate set is as large as the catalog it is cleared;
    otherwise it becomes the full catalog.
    """
    full = all_permission_keys() if catalog_keys is None else frozenset(catalog_keys)
    current = frozenset(selected)
    if len(current) == len(full):
        return frozenset()
    return full


def summarize_selection(selected: Iterable[str]) -> SelectionSummary:
    """Summarize the selection per category, in display order."""
    current = frozenset(selected)
    rows = []
    for category in categories():
        keys = keys_for_category(category)
        rows.append(
            CategorySelection(
                category=category,
                status=aggregate(keys, current),
                selected=sum(1 for key in keys if key in current),
                total=len(keys),
            )
        )
    return SelectionSummary(
        selected=len(current),
        total=len(all_permission_keys()),
        categories=rows,
    )


class PermissionSelection:
    """Candidate permission set of one role edit session."""

    def __init__(self, permissions: Iterable[str] = ()) -> None:
        self._permissions = frozenset(permissions)

    @classmethod
    def from_role(cls, role: Role) -> "PermissionSelection":
        """Start editing an existing role."""
        return cls(role.permissions)

    @classmethod
    def for_built_in_role(cls, role_name: BuiltInRole | str) -> "PermissionSelection":
        """Start a new role pre-populated with a built-in role's defaults."""
        return cls(get_default_permissions(role_name))

    @property
    def permissions(self) -> frozenset[str]:
        return self._permissions

    @property
    def is_empty(self) -> bool:
        return not self._permissions

    def __contains__(self, key: object) -> bool:
        return key in self._permissions

    def __len__(self) -> int:
        return len(self._permissions)

    def toggle(self, key: str) -> frozenset[str]:
        self._permissions = toggle_permission(key, self._permissions)
        return self._permissions

    def toggle_category(self, category: PermissionCategory | str) -> frozenset[str]:
        self._permissions = toggle_category(keys_for_category(category), self._permissions)
        return self._permissions

    def toggle_all(self) -> frozenset[str]:
        self._permissions = toggle_all(self._permissions)
        return self._permissions

    def status(self, category: PermissionCategory | str) -> SelectionStatus:
        return category_status(category, self._permissions)

    def summary(self) -> SelectionSummary:
        return summarize_selection(self._permissions)
