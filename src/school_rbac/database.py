"""Database connection and session management."""

from collections.abc import AsyncGenerator
from typing import Any

from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import NullPool

from school_rbac.config import get_settings
from school_rbac.models.orm import Base

settings = get_settings()


def _engine_options() -> dict[str, Any]:
    """Engine keyword arguments for the configured backend."""
    if settings.is_sqlite:
        # Sessions may run on different event loops, so no connection is reused
        return {"poolclass": NullPool, "echo": False}
    return {
        "pool_size": settings.database_pool_size,
        "max_overflow": settings.database_max_overflow,
        # Validate connections before checkout to detect stale connections
        "pool_pre_ping": True,
        "pool_recycle": 3600,
        # Never echo SQL statements as they may contain sensitive data
        "echo": False,
    }


engine = create_async_engine(settings.async_database_url, **_engine_options())

async_session_maker = async_sessionmaker(
    engine,
    class_=AsyncSession,
    expire_on_commit=False,
)


async def init_db(bind: AsyncEngine | None = None) -> None:
    """Create the roles tables if they do not exist yet."""
    async with (bind or engine).begin() as conn:
        await conn.run_sync(Base.metadata.create_all)


async def get_db() -> AsyncGenerator[AsyncSession, None]:
    """Get database session dependency."""
    async with async_session_maker() as session:
        try:
            yield session
            await session.commit()
        except Exception:
            await session.rollback()
            raise
