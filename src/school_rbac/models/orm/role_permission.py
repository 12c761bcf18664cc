"""Role-Permission junction table ORM model."""

import uuid
from datetime import datetime

from sqlalchemy import DateTime, ForeignKey, String, Uuid, func
from sqlalchemy.orm import Mapped, mapped_column, relationship

from school_rbac.models.orm.base import Base


class RolePermissionORM(Base):
    """Role-Permission junction table.

    Permissions live in a compiled-in catalog, so the junction stores the
    permission key itself rather than a foreign key to a permissions table.
    """

    __tablename__ = "role_permissions"

    role_id: Mapped[uuid.UUID] = mapped_column(
        Uuid,
        ForeignKey("roles.id", ondelete="CASCADE"),
        primary_key=True,
    )
    permission_key: Mapped[str] = mapped_column(String(100), primary_key=True)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        server_default=func.now(),
        nullable=False,
    )

    role: Mapped["RoleORM"] = relationship("RoleORM", back_populates="permission_links")
