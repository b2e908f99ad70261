"""Deleted (trashed) user API endpoints."""

from typing import Annotated

from fastapi import APIRouter, Depends, HTTPException, status

from src.api.dependencies import get_current_user, get_permission_checker, get_user_repository
from src.config import Settings, get_settings
from src.models.enums import Capability
from src.models.user import User
from src.repositories.user_repository import UserRepository
from src.schemas.user import FlashResponse, UserTableRow
from src.services.permissions import PermissionChecker

router = APIRouter(prefix="/api/v1/users/deleted", tags=["deleted-users"])


@router.get("", response_model=list[UserTableRow])
def list_deleted_users(
    current_user: Annotated[User, Depends(get_current_user)],
    repository: Annotated[UserRepository, Depends(get_user_repository)],
    permissions: Annotated[PermissionChecker, Depends(get_permission_checker)],
):
    """List soft-deleted users."""
    permissions.require_any(
        current_user,
        Capability.DELETE_USERS,
        Capability.RESTORE_USERS,
        Capability.PERMANENTLY_DELETE_USERS,
    )
    return repository.get_for_table(trashed=True)


@router.api_route("/{user_id}", methods=["PUT", "PATCH"], response_model=FlashResponse)
def restore_user(
    user_id: int,
    current_user: Annotated[User, Depends(get_current_user)],
    repository: Annotated[UserRepository, Depends(get_user_repository)],
    permissions: Annotated[PermissionChecker, Depends(get_permission_checker)],
):
    """Restore a soft-deleted user."""
    permissions.require_any(current_user, Capability.RESTORE_USERS)
    repository.restore(user_id)
    return FlashResponse(
        message="The user was successfully restored.",
        redirect_to="/api/v1/users",
    )


@router.delete("/{user_id}", response_model=FlashResponse)
def permanently_delete_user(
    user_id: int,
    current_user: Annotated[User, Depends(get_current_user)],
    repository: Annotated[UserRepository, Depends(get_user_repository)],
    permissions: Annotated[PermissionChecker, Depends(get_permission_checker)],
    settings: Annotated[Settings, Depends(get_settings)],
):
    """Permanently delete a soft-deleted user."""
    permissions.require_any(current_user, Capability.RESTORE_USERS)
    if not settings.permanently_delete_users:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Not Found")

    repository.delete(user_id)
    return FlashResponse(
        message="The user was permanently deleted.",
        redirect_to="/api/v1/users/deleted",
    )
