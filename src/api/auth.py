"""Authentication API endpoints."""

from typing import Annotated

from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.orm import Session

from src.api.dependencies import get_current_user, get_permission_checker
from src.database import get_db
from src.models.user import User
from src.schemas.auth import AuthResponse, CurrentUserResponse, UserLogin
from src.services.auth import authenticate_user, create_access_token
from src.services.permissions import PermissionChecker

router = APIRouter(prefix="/api/v1/auth", tags=["auth"])


def _current_user_response(user: User, permissions: PermissionChecker) -> CurrentUserResponse:
    return CurrentUserResponse(
        id=user.id,
        email=user.email,
        name=user.name,
        permissions=permissions.granted(user),
    )


@router.post("/login", response_model=AuthResponse)
def login(
    credentials: UserLogin,
    db: Annotated[Session, Depends(get_db)],
    permissions: Annotated[PermissionChecker, Depends(get_permission_checker)],
):
    """Login with email and password."""
    user = authenticate_user(db, credentials.email, credentials.password)

    if not user:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Incorrect email or password",
            headers={"WWW-Authenticate": "Bearer"},
        )

    access_token = create_access_token(user.id, user.email)

    return AuthResponse(
        access_token=access_token,
        user=_current_user_response(user, permissions),
    )


@router.get("/me", response_model=CurrentUserResponse)
def get_me(
    current_user: Annotated[User, Depends(get_current_user)],
    permissions: Annotated[PermissionChecker, Depends(get_permission_checker)],
):
    """Get current user information."""
    return _current_user_response(current_user, permissions)


@router.post("/logout")
def logout(
    current_user: Annotated[User, Depends(get_current_user)],
):
    """Logout (client should discard token)."""
    return {"message": "Logged out successfully"}
