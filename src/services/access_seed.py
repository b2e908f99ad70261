"""Default permissions, roles and administrator account."""

import logging

from sqlalchemy.orm import Session

from src.models.enums import Capability, UserStatus
from src.models.role import Permission, Role
from src.models.user import User
from src.services.auth import generate_confirmation_code, get_password_hash

logger = logging.getLogger(__name__)

ADMINISTRATOR_ROLE = "Administrator"
USER_ROLE = "User"


def seed_permissions(db: Session) -> list[Permission]:
    """Create a Permission row for every capability that is missing one."""
    existing = {p.name: p for p in db.query(Permission).all()}
    permissions = []
    for capability in Capability:
        permission = existing.get(capability.value)
        if permission is None:
            display_name = capability.value.replace("-", " ").capitalize()
            permission = Permission(name=capability.value, display_name=display_name)
            db.add(permission)
        permissions.append(permission)
    db.flush()
    return permissions


def seed_roles(db: Session) -> tuple[Role, Role]:
    """Create the Administrator (all permissions) and User roles."""
    admin = db.query(Role).filter(Role.name == ADMINISTRATOR_ROLE).first()
    if admin is None:
        admin = Role(name=ADMINISTRATOR_ROLE, all=True, sort=1)
        db.add(admin)

    user = db.query(Role).filter(Role.name == USER_ROLE).first()
    if user is None:
        user = Role(name=USER_ROLE, all=False, sort=2)
        db.add(user)

    db.flush()
    return admin, user


def seed_administrator(db: Session, email: str, password: str, name: str = "Admin") -> User:
    """Create a confirmed, active administrator unless the email is taken."""
    admin_role, _ = seed_roles(db)
    user = db.query(User).filter(User.email == email).first()
    if user is None:
        user = User(
            name=name,
            email=email,
            password_hash=get_password_hash(password),
            status=UserStatus.ACTIVE.value,
            confirmed=1,
            confirmation_code=generate_confirmation_code(),
        )
        db.add(user)
        logger.info(f"Seeded administrator <{email}>")
    user.attach_roles([admin_role])
    db.flush()
    return user
