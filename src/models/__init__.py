"""SQLAlchemy models."""

from src.models.role import Permission, Role, permission_role, role_user
from src.models.user import User

__all__ = [
    "User",
    "Role",
    "Permission",
    "role_user",
    "permission_role",
]
