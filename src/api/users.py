"""User administration API endpoints."""

from typing import Annotated

from fastapi import APIRouter, Depends, Query, status

from src.api.dependencies import get_current_user, get_permission_checker, get_user_repository
from src.models.enums import Capability, UserStatus
from src.models.user import User
from src.repositories.user_repository import UserRepository
from src.schemas.user import (
    FlashResponse,
    UserCreate,
    UserPasswordUpdate,
    UserResponse,
    UserTableRow,
    UserUpdate,
)
from src.services.permissions import PermissionChecker

router = APIRouter(prefix="/api/v1/users", tags=["users"])


@router.get("", response_model=list[UserTableRow])
def list_users(
    current_user: Annotated[User, Depends(get_current_user)],
    repository: Annotated[UserRepository, Depends(get_user_repository)],
    permissions: Annotated[PermissionChecker, Depends(get_permission_checker)],
    user_status: UserStatus = Query(default=UserStatus.ACTIVE, alias="status"),
):
    """List users with the given status."""
    permissions.require_any(current_user, Capability.VIEW_USERS)
    return repository.get_for_table(status=user_status)


@router.post("", response_model=UserResponse, status_code=status.HTTP_201_CREATED)
def create_user(
    user_data: UserCreate,
    current_user: Annotated[User, Depends(get_current_user)],
    repository: Annotated[UserRepository, Depends(get_user_repository)],
    permissions: Annotated[PermissionChecker, Depends(get_permission_checker)],
):
    """Create a user.

    A request without roles still stores the user (deactivated) and answers
    422 with the new user's id in ``error.details.user_id``.
    """
    permissions.require_any(current_user, Capability.CREATE_USERS)
    return repository.create(user_data, user_data.assignees_roles)


@router.get("/{user_id}", response_model=UserResponse)
def get_user(
    user_id: int,
    current_user: Annotated[User, Depends(get_current_user)],
    repository: Annotated[UserRepository, Depends(get_user_repository)],
    permissions: Annotated[PermissionChecker, Depends(get_permission_checker)],
):
    """Get a user and their roles."""
    permissions.require_any(current_user, Capability.VIEW_USERS)
    return repository.find_or_fail(user_id, with_roles=True)


@router.put("/{user_id}", response_model=UserResponse)
def update_user(
    user_id: int,
    user_data: UserUpdate,
    current_user: Annotated[User, Depends(get_current_user)],
    repository: Annotated[UserRepository, Depends(get_user_repository)],
    permissions: Annotated[PermissionChecker, Depends(get_permission_checker)],
):
    """Update a user and replace their roles."""
    permissions.require_any(current_user, Capability.EDIT_USERS)
    return repository.update(user_id, user_data, user_data.assignees_roles)


@router.patch("/{user_id}/password", response_model=FlashResponse)
def change_user_password(
    user_id: int,
    password_data: UserPasswordUpdate,
    current_user: Annotated[User, Depends(get_current_user)],
    repository: Annotated[UserRepository, Depends(get_user_repository)],
    permissions: Annotated[PermissionChecker, Depends(get_permission_checker)],
):
    """Change a user's password."""
    permissions.require_any(current_user, Capability.CHANGE_USER_PASSWORD)
    repository.update_password(user_id, password_data.password)
    return FlashResponse(
        message="The user's password was successfully updated.",
        redirect_to="/api/v1/users",
    )


@router.patch("/{user_id}/mark/{user_status}", response_model=FlashResponse)
def mark_user(
    user_id: int,
    user_status: UserStatus,
    current_user: Annotated[User, Depends(get_current_user)],
    repository: Annotated[UserRepository, Depends(get_user_repository)],
    permissions: Annotated[PermissionChecker, Depends(get_permission_checker)],
):
    """Activate or deactivate a user."""
    permissions.require_any(current_user, Capability.for_mark(user_status))
    repository.mark(user_id, user_status, acting_user_id=current_user.id)
    return FlashResponse(
        message="The user was successfully updated.",
        redirect_to="/api/v1/users",
    )


@router.delete("/{user_id}", response_model=FlashResponse)
def delete_user(
    user_id: int,
    current_user: Annotated[User, Depends(get_current_user)],
    repository: Annotated[UserRepository, Depends(get_user_repository)],
    permissions: Annotated[PermissionChecker, Depends(get_permission_checker)],
):
    """Move a user to the trash."""
    permissions.require_any(current_user, Capability.DELETE_USERS)
    repository.destroy(user_id, acting_user_id=current_user.id)
    return FlashResponse(
        message="The user was successfully deleted.",
        redirect_to="/api/v1/users/deleted",
    )
