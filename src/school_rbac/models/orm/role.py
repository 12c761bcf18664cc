"""Role ORM model."""

from sqlalchemy import Boolean, String, Text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from school_rbac.models.orm.base import Base, TimestampMixin, UUIDMixin


class RoleORM(Base, UUIDMixin, TimestampMixin):
    """Role database model."""

    __tablename__ = "roles"

    # Names are not unique: two sessions may create roles with the same name
    name: Mapped[str] = mapped_column(String(100), nullable=False, index=True)
    description: Mapped[str | None] = mapped_column(Text, nullable=True)
    is_system: Mapped[bool] = mapped_column(Boolean, default=False, nullable=False)

    # Relationships
    permission_links: Mapped[list["RolePermissionORM"]] = relationship(
        "RolePermissionORM",
        back_populates="role",
        cascade="all, delete-orphan",
        order_by="RolePermissionORM.permission_key",
    )

    @property
    def permission_keys(self) -> list[str]:
        """Permission keys granted to this role."""
        return [link.permission_key for link in self.permission_links]
