"""Domain errors for user administration and their HTTP rendering.

Every error carries a human-readable message and the status code the API
answers with. Nothing here is retried; errors propagate to the request layer.
"""

from typing import Any

from fastapi import Request, status
from fastapi.responses import JSONResponse

try:
    HTTP_422_UNPROCESSABLE = status.HTTP_422_UNPROCESSABLE_CONTENT
except AttributeError:  # Starlette < 0.48
    HTTP_422_UNPROCESSABLE = status.HTTP_422_UNPROCESSABLE_ENTITY


class UserAdminError(Exception):
    """Base class for all user administration errors."""

    default_message = "An error occurred while processing the user."
    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR

    def __init__(self, message: str | None = None, details: dict[str, Any] | None = None):
        self.message = message or self.default_message
        self.details = details or {}
        super().__init__(self.message)


class GeneralError(UserAdminError):
    """Unexpected low-level store failure."""


class UserNotFoundError(UserAdminError):
    default_message = "That user does not exist."
    status_code = status.HTTP_404_NOT_FOUND


class DuplicateEmailError(UserAdminError):
    default_message = "That email address belongs to a different user."
    status_code = status.HTTP_409_CONFLICT


class UserNeedsRolesError(UserAdminError):
    """Raised when a user would be left without roles.

    ``user_id`` identifies the row that was already saved, so the caller can
    offer to delete it.
    """

    default_message = "You must choose at least one role."
    status_code = HTTP_422_UNPROCESSABLE

    def __init__(self, user_id: int, message: str | None = None):
        self.user_id = user_id
        super().__init__(message, {"user_id": user_id})


class UserCreateError(UserAdminError):
    default_message = "There was a problem creating this user. Please try again."


class UserUpdateError(UserAdminError):
    default_message = "There was a problem updating this user. Please try again."


class UserUpdatePasswordError(UserAdminError):
    default_message = "There was a problem changing this user's password. Please try again."


class UserDeleteError(UserAdminError):
    default_message = "There was a problem deleting this user. Please try again."


class UserRestoreError(UserAdminError):
    default_message = "There was a problem restoring this user. Please try again."


class UserMarkError(UserAdminError):
    default_message = "There was a problem updating this user's status. Please try again."


class CannotDeleteSelfError(UserAdminError):
    default_message = "You can not delete yourself."
    status_code = HTTP_422_UNPROCESSABLE


class CannotDeactivateSelfError(UserAdminError):
    default_message = "You can not do that to yourself."
    status_code = HTTP_422_UNPROCESSABLE


class UserNotTrashedError(UserAdminError):
    """Requested transition needs a soft-deleted user."""

    status_code = status.HTTP_409_CONFLICT


class UnauthorizedError(UserAdminError):
    default_message = "You do not have access to do that."
    status_code = status.HTTP_403_FORBIDDEN

    def __init__(self, required: tuple[str, ...] = (), message: str | None = None):
        super().__init__(message, {"required": list(required)} if required else None)


async def user_admin_error_handler(request: Request, exc: UserAdminError) -> JSONResponse:
    """Render a domain error as a JSON error body."""
    return JSONResponse(
        status_code=exc.status_code,
        content={
            "error": {
                "code": exc.__class__.__name__,
                "message": exc.message,
                "details": exc.details,
                "path": request.url.path,
            }
        },
    )
