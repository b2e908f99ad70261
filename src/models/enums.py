"""Enums for model fields."""

from enum import Enum, IntEnum


class UserStatus(IntEnum):
    """Account status stored in users.status."""

    INACTIVE = 0
    ACTIVE = 1


class Capability(str, Enum):
    """Permission names checked by the user administration endpoints."""

    VIEW_USERS = "view-users"
    CREATE_USERS = "create-users"
    EDIT_USERS = "edit-users"
    CHANGE_USER_PASSWORD = "change-user-password"
    DEACTIVATE_USERS = "deactivate-users"
    REACTIVATE_USERS = "reactivate-users"
    DELETE_USERS = "delete-users"
    RESTORE_USERS = "restore-users"
    PERMANENTLY_DELETE_USERS = "permanently-delete-users"

    @classmethod
    def for_mark(cls, status: UserStatus) -> "Capability":
        """Capability needed to move an account to the given status."""
        if status == UserStatus.INACTIVE:
            return cls.DEACTIVATE_USERS
        return cls.REACTIVATE_USERS
