"""Tests for error mapping, sanitization and settings."""

import pytest

from school_rbac.config import Settings
from school_rbac.exceptions import (
    CannotModifySystemRoleError,
    RoleNotFoundError,
    RoleStoreError,
    RoleValidationError,
    UnsupportedOperationError,
)
from school_rbac.middleware.error_handler import sanitize_error_detail, status_code_for
from school_rbac.utils.secure_logging import sanitize_exception_message


class TestStatusMapping:
    """Tests for mapping domain errors to HTTP status codes."""

    @pytest.mark.parametrize(
        "error,expected",
        [
            (RoleNotFoundError("r1"), 404),
            (RoleValidationError("Role name is required", ["name"]), 400),
            (CannotModifySystemRoleError("admin", action="delete"), 400),
            (UnsupportedOperationError(), 501),
            (RoleStoreError("HTTP 503: Service Unavailable", {"status_code": 503}), 502),
            (RoleStoreError("Role storage failed"), 500),
        ],
    )
    def test_status_code_for(self, error, expected):
        assert status_code_for(error) == expected


class TestSanitization:
    """Tests for keeping internals out of responses and logs."""

    def test_allowed_message_passes_through(self):
        assert sanitize_error_detail("Cannot delete system roles", 400) == "Cannot delete system roles"

    def test_unknown_message_replaced(self):
        detail = sanitize_error_detail("duplicate key value violates constraint roles_pkey", 400)
        assert detail == "Invalid request"

    def test_validation_errors_keep_field_names(self):
        detail = sanitize_error_detail(
            [{"loc": ["body", "permissions"], "msg": "List should have at least 1 item"}], 422
        )
        assert detail == "permissions: List should have at least 1 item"

    def test_exception_message_scrubbed(self):
        error = RuntimeError(
            "connect to postgresql+asyncpg://user:pw@db/rbac failed for admin@school.test"
        )
        message = sanitize_exception_message(error)
        assert "pw@db" not in message
        assert "admin@school.test" not in message
        assert "[URL]" in message

    def test_exception_message_truncated(self):
        message = sanitize_exception_message(RuntimeError("x " * 300))
        assert len(message) == 200
        assert message.endswith("...")


class TestSettings:
    """Tests for configuration."""

    def test_postgres_url_uses_asyncpg(self):
        settings = Settings(database_url="postgresql://u:p@localhost/rbac?sslmode=require")
        assert settings.async_database_url == "postgresql+asyncpg://u:p@localhost/rbac?ssl=require"
        assert not settings.is_sqlite

    def test_debug_refused_in_production(self):
        with pytest.raises(ValueError, match="DEBUG mode cannot be enabled"):
            Settings(environment="production", debug=True)

    def test_unsupported_database_refused(self):
        with pytest.raises(ValueError, match="PostgreSQL or SQLite"):
            Settings(database_url="mysql://localhost/rbac")

    def test_role_modify_limit(self):
        assert Settings(rate_limit_role_modify=5).role_modify_limit == "5/minute"
