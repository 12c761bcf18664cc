"""Built-in roles and their default permission sets.

These defaults only pre-populate a new role's selection and seed missing
built-in roles as persisted records. Persisted roles are what the
application reads afterwards.
"""

from enum import Enum
from types import MappingProxyType
from typing import Final, NamedTuple

from school_rbac.constants.permissions import ALL_PERMISSION_KEYS


class BuiltInRole(str, Enum):
    """Built-in role names."""

    ADMIN = "admin"
    HEAD_TEACHER = "head-teacher"
    TEACHER = "teacher"
    ACCOUNTS = "accounts"
    STUDENT = "student"


class BuiltInRoleInfo(NamedTuple):
    """Display metadata for a built-in role."""

    role: BuiltInRole
    display_name: str
    level: int
    description: str


DEFAULT_ROLE_PERMISSIONS: Final = MappingProxyType(
    {
        BuiltInRole.ADMIN: ALL_PERMISSION_KEYS,
        BuiltInRole.HEAD_TEACHER: frozenset(
            {
                "view_dashboard",
                "view_analytics",
                "view_students",
                "view_student_profile",
                "view_teachers",
                "view_classrooms",
                "view_subjects",
                "manage_subjects",
                "view_timetable",
                "view_exams",
                "create_exam",
                "edit_exam",
                "view_results",
                "manage_grades",
                "view_attendance",
                "create_attendance",
                "view_staff_attendance",
                "mark_staff_attendance",
                "view_fees",
                "view_reports",
                "generate_reports",
            }
        ),
        BuiltInRole.TEACHER: frozenset(
            {
                "view_dashboard",
                "view_students",
                "view_student_profile",
                "view_subjects",
                "view_timetable",
                "view_exams",
                "view_results",
                "manage_grades",
                "view_attendance",
                "create_attendance",
                "view_reports",
            }
        ),
        BuiltInRole.ACCOUNTS: frozenset(
            {
                "view_dashboard",
                "view_analytics",
                "view_fees",
                "manage_fees",
                "view_payments",
                "create_payment",
                "view_expenses",
                "manage_expenses",
                "view_reports",
                "generate_reports",
            }
        ),
        BuiltInRole.STUDENT: frozenset(
            {
                "view_dashboard",
                "view_student_profile",
                "view_results",
                "download_grade_card",
                "view_attendance",
                "view_fees",
                "view_payments",
            }
        ),
    }
)

ROLE_HIERARCHY: Final[tuple[BuiltInRoleInfo, ...]] = (
    BuiltInRoleInfo(BuiltInRole.ADMIN, "Administrator", 1, "System administrator with full access"),
    BuiltInRoleInfo(
        BuiltInRole.HEAD_TEACHER, "Head Teacher", 2, "Head teacher managing school operations"
    ),
    BuiltInRoleInfo(BuiltInRole.ACCOUNTS, "Accounts Officer", 3, "Accounts officer managing fees"),
    BuiltInRoleInfo(BuiltInRole.TEACHER, "Teacher", 4, "Teacher managing classes and grades"),
    BuiltInRoleInfo(BuiltInRole.STUDENT, "Student", 5, "Student accessing own academic records"),
)


def _coerce_role(role_name: BuiltInRole | str) -> BuiltInRole | None:
    if isinstance(role_name, BuiltInRole):
        return role_name
    try:
        return BuiltInRole(role_name)
    except ValueError:
        return None


def get_default_permissions(role_name: BuiltInRole | str) -> frozenset[str]:
    """Get the default permission keys of a built-in role.

    Unknown role names get an empty set rather than an error.
    """
    role = _coerce_role(role_name)
    if role is None:
        return frozenset()
    return DEFAULT_ROLE_PERMISSIONS[role]


def built_in_role_names() -> tuple[str, ...]:
    """Get the built-in role names."""
    return tuple(role.value for role in BuiltInRole)


def get_role_hierarchy() -> tuple[BuiltInRoleInfo, ...]:
    """Get built-in role metadata ordered by hierarchy level."""
    return ROLE_HIERARCHY


def get_role_info(role_name: BuiltInRole | str) -> BuiltInRoleInfo | None:
    """Get display metadata for a built-in role, or None if unknown."""
    role = _coerce_role(role_name)
    if role is None:
        return None
    return next(info for info in ROLE_HIERARCHY if info.role is role)
