"""Tests for tri-state permission selection."""

import pytest

from school_rbac.constants.permissions import ALL_PERMISSION_KEYS, keys_for_category
from school_rbac.constants.roles import get_default_permissions
from school_rbac.models.domain.permission import PermissionCategory
from school_rbac.models.domain.role import Role
from school_rbac.services.permission_selection import (
    PermissionSelection,
    SelectionStatus,
    aggregate,
    category_status,
    summarize_selection,
    toggle_all,
    toggle_category,
    toggle_permission,
)

CATEGORIES = list(PermissionCategory)


def _outsider(keys: tuple[str, ...]) -> str:
    """A key from another category that must survive any toggle."""
    return next(key for key in sorted(ALL_PERMISSION_KEYS) if key not in keys)


class TestAggregate:
    """Tests for category aggregation."""

    @pytest.mark.parametrize("category", CATEGORIES)
    def test_all_when_every_key_selected(self, category: PermissionCategory):
        """A fully selected category is ALL."""
        keys = keys_for_category(category)
        assert aggregate(keys, set(keys)) is SelectionStatus.ALL

    @pytest.mark.parametrize("category", CATEGORIES)
    def test_none_when_no_key_selected(self, category: PermissionCategory):
        """A category with nothing selected is NONE, whatever else is selected."""
        keys = keys_for_category(category)
        others = ALL_PERMISSION_KEYS.difference(keys)
        assert aggregate(keys, others) is SelectionStatus.NONE

    @pytest.mark.parametrize("category", CATEGORIES)
    def test_some_when_partially_selected(self, category: PermissionCategory):
        """A single selected key in a larger category is SOME."""
        keys = keys_for_category(category)
        assert len(keys) > 1
        assert aggregate(keys, {keys[0]}) is SelectionStatus.SOME

    def test_empty_category_is_all(self):
        """An empty key list counts as fully selected."""
        assert aggregate((), {"view_fees"}) is SelectionStatus.ALL

    def test_category_status_by_name(self):
        """Status can be asked for by category display name."""
        assert category_status("Fees", {"view_fees"}) is SelectionStatus.SOME


class TestToggleCategory:
    """Tests for bulk category toggling."""

    @pytest.mark.parametrize("category", CATEGORIES)
    def test_full_category_is_cleared(self, category: PermissionCategory):
        """Toggling a fully selected category removes exactly its keys."""
        keys = keys_for_category(category)
        selected = frozenset(keys) | {_outsider(keys)}
        result = toggle_category(keys, selected)
        assert result == selected.difference(keys)
        assert aggregate(keys, result) is SelectionStatus.NONE

    @pytest.mark.parametrize("category", CATEGORIES)
    def test_partial_category_is_filled(self, category: PermissionCategory):
        """Toggling a partially selected category selects all of it."""
        keys = keys_for_category(category)
        selected = frozenset({keys[0], _outsider(keys)})
        result = toggle_category(keys, selected)
        assert result == selected.union(keys)
        assert aggregate(keys, result) is SelectionStatus.ALL

    @pytest.mark.parametrize("category", CATEGORIES)
    def test_empty_category_is_filled(self, category: PermissionCategory):
        """Toggling an unselected category selects all of it."""
        keys = keys_for_category(category)
        assert toggle_category(keys, frozenset()) == frozenset(keys)

    def test_input_is_not_mutated(self):
        """Toggling returns a new set."""
        selected = {"view_fees"}
        toggle_category(keys_for_category("Fees"), selected)
        assert selected == {"view_fees"}


class TestTogglePermission:
    """Tests for single permission toggling."""

    def test_adds_missing_key(self):
        assert toggle_permission("view_fees", set()) == {"view_fees"}

    def test_removes_present_key(self):
        assert toggle_permission("view_fees", {"view_fees", "manage_fees"}) == {"manage_fees"}


class TestToggleAll:
    """Tests for select-all toggling."""

    def test_full_catalog_is_cleared(self):
        """Starting from the full catalog, one toggle clears everything."""
        assert toggle_all(ALL_PERMISSION_KEYS) == frozenset()

    @pytest.mark.parametrize(
        "selected",
        [frozenset(), frozenset({"view_fees"}), ALL_PERMISSION_KEYS - {"view_fees"}],
    )
    def test_proper_subset_becomes_full_catalog(self, selected: frozenset[str]):
        """Starting from any proper subset, one toggle selects everything."""
        assert toggle_all(selected) == ALL_PERMISSION_KEYS

    def test_custom_catalog(self):
        """A supplied key list replaces the full catalog."""
        assert toggle_all({"a"}, ["a", "b"]) == {"a", "b"}
        assert toggle_all({"a", "b"}, ["a", "b"]) == frozenset()


class TestSummary:
    """Tests for selection summaries."""

    def test_summary_counts(self):
        """Summary reports per-category and overall counts."""
        summary = summarize_selection({"view_fees", "manage_fees", "view_payments"})
        assert summary.selected == 3
        assert summary.total == len(ALL_PERMISSION_KEYS)
        rows = {row.category: row for row in summary.categories}
        assert rows[PermissionCategory.FEES].status is SelectionStatus.ALL
        assert rows[PermissionCategory.PAYMENTS].status is SelectionStatus.SOME
        assert rows[PermissionCategory.PAYMENTS].selected == 1
        assert rows[PermissionCategory.PAYMENTS].total == 2
        assert rows[PermissionCategory.USERS].status is SelectionStatus.NONE


class TestPermissionSelection:
    """Tests for the per-edit-session selection."""

    def test_starts_empty(self):
        selection = PermissionSelection()
        assert selection.is_empty
        assert len(selection) == 0

    def test_from_role_copies_permissions(self):
        """Editing a role starts from its stored permissions."""
        role = Role(id="1", name="Clerk", permissions={"view_fees"})
        selection = PermissionSelection.from_role(role)
        selection.toggle("manage_fees")
        assert selection.permissions == {"view_fees", "manage_fees"}
        assert role.permissions == {"view_fees"}

    def test_for_built_in_role(self):
        """A new role can be pre-populated from a built-in role's defaults."""
        selection = PermissionSelection.for_built_in_role("teacher")
        assert selection.permissions == get_default_permissions("teacher")

    def test_for_unknown_built_in_role_is_empty(self):
        assert PermissionSelection.for_built_in_role("janitor").is_empty

    def test_toggle_category_and_status(self):
        selection = PermissionSelection({"view_fees"})
        assert selection.status("Fees") is SelectionStatus.SOME
        selection.toggle_category("Fees")
        assert selection.status(PermissionCategory.FEES) is SelectionStatus.ALL
        assert "manage_fees" in selection
        selection.toggle_category("Fees")
        assert selection.status("Fees") is SelectionStatus.NONE

    def test_toggle_all(self):
        selection = PermissionSelection({"view_fees"})
        assert selection.toggle_all() == ALL_PERMISSION_KEYS
        assert selection.toggle_all() == frozenset()

    def test_summary(self):
        selection = PermissionSelection({"view_fees"})
        assert selection.summary().selected == 1
