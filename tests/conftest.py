"""Pytest configuration and fixtures for school RBAC tests."""

import os
import tempfile
from collections.abc import AsyncGenerator
from pathlib import Path
from unittest.mock import AsyncMock

import pytest
import pytest_asyncio

# Set test environment before importing app modules
_TEST_DB_DIR = tempfile.mkdtemp(prefix="school_rbac_tests_")
os.environ["ENVIRONMENT"] = "development"
os.environ["DEBUG"] = "false"
os.environ["DATABASE_URL"] = f"sqlite+aiosqlite:///{Path(_TEST_DB_DIR) / 'test.db'}"
os.environ["RATE_LIMIT_ENABLED"] = "false"
os.environ["SEED_DEFAULT_ROLES"] = "true"
os.environ["CORS_ORIGINS"] = "http://localhost:3000"

from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine  # noqa: E402
from sqlalchemy.pool import StaticPool  # noqa: E402

from school_rbac.database import init_db  # noqa: E402
from school_rbac.models.domain.role import Role  # noqa: E402
from school_rbac.repositories.role_store import RoleStore  # noqa: E402


@pytest_asyncio.fixture
async def db_session() -> AsyncGenerator[AsyncSession, None]:
    """Fresh in-memory SQLite database per test."""
    engine = create_async_engine(
        "sqlite+aiosqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    await init_db(bind=engine)
    session_maker = async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)
    async with session_maker() as session:
        yield session
    await engine.dispose()


@pytest.fixture
def mock_store() -> AsyncMock:
    """Create mock role store."""
    return AsyncMock(spec=RoleStore)


@pytest.fixture
def sample_role() -> Role:
    """A stored custom role."""
    return Role(
        id="r1",
        name="Librarian",
        description="Manages the library",
        permissions=frozenset({"view_dashboard", "view_students"}),
    )
