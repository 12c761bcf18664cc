"""Permission domain model."""

from enum import Enum

from pydantic import BaseModel


class PermissionCategory(str, Enum):
    """Fixed permission categories, in display order."""

    DASHBOARD = "Dashboard"
    USERS = "Users"
    STUDENTS = "Students"
    TEACHERS = "Teachers"
    CLASSROOMS = "Classrooms"
    SUBJECTS = "Subjects"
    TIMETABLE = "Timetable"
    EXAMS = "Exams"
    RESULTS = "Results"
    ATTENDANCE = "Attendance"
    FEES = "Fees"
    PAYMENTS = "Payments"
    EXPENSES = "Expenses"
    ISSUES = "Issues"
    ROLES = "Roles"
    SETTINGS = "Settings"
    REPORTS = "Reports"


class Permission(BaseModel):
    """Immutable permission catalog entry."""

    key: str
    label: str
    category: PermissionCategory

    class Config:
        """Pydantic config."""

        frozen = True
