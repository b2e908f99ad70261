"""User model."""

from collections.abc import Iterable

from sqlalchemy import Column, Integer, SmallInteger, String
from sqlalchemy.orm import relationship

from src.database import Base
from src.models.enums import UserStatus
from src.models.mixins import SoftDeleteMixin, TimestampMixin
from src.models.role import Role, role_user


class User(Base, TimestampMixin, SoftDeleteMixin):
    """Administered user account."""

    __tablename__ = "users"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String(255), nullable=False)
    email = Column(String(255), unique=True, nullable=False, index=True)
    password_hash = Column(String(255), nullable=False)
    status = Column(SmallInteger, default=UserStatus.ACTIVE.value, nullable=False, index=True)
    confirmed = Column(SmallInteger, default=0, nullable=False)
    confirmation_code = Column(String(64), nullable=True)

    # Relationships
    roles = relationship(Role, secondary=role_user, back_populates="users", order_by=Role.sort)

    @property
    def is_active(self) -> bool:
        """Check if the account may sign in."""
        return self.status == UserStatus.ACTIVE and not self.trashed

    def attach_roles(self, roles: Iterable[Role]) -> None:
        """Add roles to the user, ignoring ones already assigned."""
        for role in roles:
            if role not in self.roles:
                self.roles.append(role)

    def detach_roles(self, roles: Iterable[Role]) -> None:
        """Remove roles from the user."""
        for role in list(roles):
            if role in self.roles:
                self.roles.remove(role)

    def can(self, *names: str) -> bool:
        """Check if any assigned role grants any of the named permissions."""
        return any(role.grants(name) for role in self.roles for name in names)
