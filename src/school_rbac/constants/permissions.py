"""Compiled-in permission catalog.

Single source of truth for every permission key the application knows,
its display label and its category. The tables are built once at import
time and exposed read-only.
"""

from collections.abc import Iterable
from types import MappingProxyType
from typing import Final

from school_rbac.models.domain.permission import Permission, PermissionCategory


def derive_label(key: str) -> str:
    """Derive a display label from a permission key.

    Underscore-delimited words are capitalized and joined with single spaces,
    e.g. ``manage_fees`` becomes ``Manage Fees``.
    """
    return " ".join(word[:1].upper() + word[1:] for word in key.split("_") if word)


# (key, explicit label or None, category)
_CATALOG_ROWS: Final[tuple[tuple[str, str | None, PermissionCategory], ...]] = (
    # Dashboard
    ("view_dashboard", None, PermissionCategory.DASHBOARD),
    ("view_analytics", None, PermissionCategory.DASHBOARD),
    # Users
    ("view_users", None, PermissionCategory.USERS),
    ("create_user", "Create Users", PermissionCategory.USERS),
    ("edit_user", "Edit Users", PermissionCategory.USERS),
    ("delete_user", "Delete Users", PermissionCategory.USERS),
    # Students
    ("view_students", None, PermissionCategory.STUDENTS),
    ("create_student", "Create Students", PermissionCategory.STUDENTS),
    ("edit_student", "Edit Students", PermissionCategory.STUDENTS),
    ("delete_student", "Delete Students", PermissionCategory.STUDENTS),
    ("view_student_profile", None, PermissionCategory.STUDENTS),
    # Teachers
    ("view_teachers", None, PermissionCategory.TEACHERS),
    ("create_teacher", "Create Teachers", PermissionCategory.TEACHERS),
    ("edit_teacher", "Edit Teachers", PermissionCategory.TEACHERS),
    ("delete_teacher", "Delete Teachers", PermissionCategory.TEACHERS),
    # Classrooms
    ("view_classrooms", None, PermissionCategory.CLASSROOMS),
    ("create_classroom", "Create Classrooms", PermissionCategory.CLASSROOMS),
    ("edit_classroom", "Edit Classrooms", PermissionCategory.CLASSROOMS),
    ("delete_classroom", "Delete Classrooms", PermissionCategory.CLASSROOMS),
    # Subjects
    ("view_subjects", None, PermissionCategory.SUBJECTS),
    ("manage_subjects", None, PermissionCategory.SUBJECTS),
    # Timetable
    ("view_timetable", None, PermissionCategory.TIMETABLE),
    ("manage_timetable", None, PermissionCategory.TIMETABLE),
    # Exams
    ("view_exams", None, PermissionCategory.EXAMS),
    ("create_exam", "Create Exams", PermissionCategory.EXAMS),
    ("edit_exam", "Edit Exams", PermissionCategory.EXAMS),
    ("delete_exam", "Delete Exams", PermissionCategory.EXAMS),
    # Results
    ("view_results", None, PermissionCategory.RESULTS),
    ("manage_grades", None, PermissionCategory.RESULTS),
    ("download_grade_card", None, PermissionCategory.RESULTS),
    # Attendance
    ("view_attendance", None, PermissionCategory.ATTENDANCE),
    ("create_attendance", "Mark Attendance", PermissionCategory.ATTENDANCE),
    ("view_staff_attendance", None, PermissionCategory.ATTENDANCE),
    ("mark_staff_attendance", None, PermissionCategory.ATTENDANCE),
    # Fees
    ("view_fees", None, PermissionCategory.FEES),
    ("manage_fees", None, PermissionCategory.FEES),
    # Payments
    ("view_payments", None, PermissionCategory.PAYMENTS),
    ("create_payment", "Create Payments", PermissionCategory.PAYMENTS),
    # Expenses
    ("view_expenses", None, PermissionCategory.EXPENSES),
    ("manage_expenses", None, PermissionCategory.EXPENSES),
    # Issues
    ("view_issues", None, PermissionCategory.ISSUES),
    ("create_issue", "Create Issues", PermissionCategory.ISSUES),
    ("manage_issues", None, PermissionCategory.ISSUES),
    # Roles
    ("view_roles", None, PermissionCategory.ROLES),
    ("manage_roles", None, PermissionCategory.ROLES),
    # Settings
    ("view_settings", None, PermissionCategory.SETTINGS),
    ("manage_settings", None, PermissionCategory.SETTINGS),
    # Reports
    ("view_reports", None, PermissionCategory.REPORTS),
    ("generate_reports", None, PermissionCategory.REPORTS),
    ("view_audit_logs", None, PermissionCategory.REPORTS),
)

PERMISSION_CATALOG: Final[tuple[Permission, ...]] = tuple(
    Permission(key=key, label=label or derive_label(key), category=category)
    for key, label, category in _CATALOG_ROWS
)

ALL_PERMISSION_KEYS: Final[frozenset[str]] = frozenset(p.key for p in PERMISSION_CATALOG)

_BY_KEY: Final = MappingProxyType({p.key: p for p in PERMISSION_CATALOG})

_KEYS_BY_CATEGORY: Final = MappingProxyType(
    {
        category: tuple(p.key for p in PERMISSION_CATALOG if p.category == category)
        for category in PermissionCategory
    }
)


def all_permissions() -> tuple[Permission, ...]:
    """Get every catalog entry in display order."""
    return PERMISSION_CATALOG


def all_permission_keys() -> frozenset[str]:
    """Get the full set of catalog keys."""
    return ALL_PERMISSION_KEYS


def get_permission(key: str) -> Permission | None:
    """Get a catalog entry by key, or None if the key is unknown."""
    return _BY_KEY.get(key)


def get_label(key: str) -> str:
    """Get the display label for a key.

    Keys outside the catalog still get a mechanically derived label.
    """
    permission = _BY_KEY.get(key)
    if permission is None:
        return derive_label(key)
    return permission.label


def is_known_permission(key: str) -> bool:
    """Check whether a key belongs to the catalog."""
    return key in _BY_KEY


def unknown_permissions(keys: Iterable[str]) -> list[str]:
    """Return the keys that are not part of the catalog, in input order."""
    return [key for key in keys if key not in _BY_KEY]


def categories() -> tuple[PermissionCategory, ...]:
    """Get all categories in display order."""
    return tuple(PermissionCategory)


def _coerce_category(category: PermissionCategory | str) -> PermissionCategory | None:
    if isinstance(category, PermissionCategory):
        return category
    try:
        return PermissionCategory(category)
    except ValueError:
        return None


def keys_for_category(category: PermissionCategory | str) -> tuple[str, ...]:
    """Get the ordered permission keys of a category.

    Accepts the enum member or its display name. Unknown categories have
    no keys.
    """
    resolved = _coerce_category(category)
    if resolved is None:
        return ()
    return _KEYS_BY_CATEGORY[resolved]


def permissions_by_category() -> list[tuple[PermissionCategory, tuple[Permission, ...]]]:
    """Group catalog entries by category, in display order."""
    return [
        (category, tuple(_BY_KEY[key] for key in keys))
        for category, keys in _KEYS_BY_CATEGORY.items()
    ]
