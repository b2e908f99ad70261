"""Pydantic schemas for API requests and responses."""

from src.schemas.auth import AuthResponse, CurrentUserResponse, UserLogin
from src.schemas.user import (
    FlashResponse,
    RoleResponse,
    UserCreate,
    UserPasswordUpdate,
    UserResponse,
    UserTableRow,
    UserUpdate,
)

__all__ = [
    "UserLogin",
    "AuthResponse",
    "CurrentUserResponse",
    "UserCreate",
    "UserUpdate",
    "UserPasswordUpdate",
    "UserTableRow",
    "UserResponse",
    "RoleResponse",
    "FlashResponse",
]
