"""Role and permission models."""

from sqlalchemy import Boolean, Column, ForeignKey, Integer, String, Table
from sqlalchemy.orm import relationship

from src.database import Base
from src.models.mixins import TimestampMixin

role_user = Table(
    "role_user",
    Base.metadata,
    Column("user_id", Integer, ForeignKey("users.id", ondelete="CASCADE"), primary_key=True),
    Column("role_id", Integer, ForeignKey("roles.id", ondelete="CASCADE"), primary_key=True),
)

permission_role = Table(
    "permission_role",
    Base.metadata,
    Column(
        "permission_id",
        Integer,
        ForeignKey("permissions.id", ondelete="CASCADE"),
        primary_key=True,
    ),
    Column("role_id", Integer, ForeignKey("roles.id", ondelete="CASCADE"), primary_key=True),
)


class Role(Base, TimestampMixin):
    """Named group of permissions assigned to users."""

    __tablename__ = "roles"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String(255), unique=True, nullable=False)
    all = Column(Boolean, default=False, nullable=False)  # grants every permission
    sort = Column(Integer, default=0)

    # Relationships
    users = relationship("User", secondary=role_user, back_populates="roles")
    permissions = relationship("Permission", secondary=permission_role, back_populates="roles")

    def grants(self, name: str) -> bool:
        """Check if this role grants the named permission."""
        if self.all:
            return True
        return any(permission.name == name for permission in self.permissions)


class Permission(Base, TimestampMixin):
    """A capability name such as ``restore-users``."""

    __tablename__ = "permissions"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String(255), unique=True, nullable=False)
    display_name = Column(String(255), nullable=False)

    roles = relationship("Role", secondary=permission_role, back_populates="permissions")
