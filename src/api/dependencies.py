"""FastAPI dependencies for authentication, database and collaborators."""

from typing import Annotated

from fastapi import Depends, HTTPException, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.orm import Session

from src.database import get_db
from src.models.user import User
from src.repositories.user_repository import UserRepository
from src.services.auth import decode_access_token
from src.services.mail import ConfirmationMailer
from src.services.permissions import PermissionChecker

security = HTTPBearer()


def _credentials_exception(detail: str = "Invalid authentication credentials") -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail=detail,
        headers={"WWW-Authenticate": "Bearer"},
    )


def get_current_user(
    credentials: Annotated[HTTPAuthorizationCredentials, Depends(security)],
    db: Annotated[Session, Depends(get_db)],
) -> User:
    """Get the current authenticated user from JWT token.

    Trashed and deactivated accounts are rejected even with a valid token.
    """
    payload = decode_access_token(credentials.credentials)
    if payload is None:
        raise _credentials_exception()

    user_id = payload.get("sub")
    if user_id is None:
        raise _credentials_exception()

    user = db.query(User).filter(User.id == int(user_id)).first()
    if user is None:
        raise _credentials_exception("User not found")
    if not user.is_active:
        raise _credentials_exception("Account is deactivated")

    return user


def get_mailer() -> ConfirmationMailer:
    """Get the confirmation mailer."""
    return ConfirmationMailer()


def get_user_repository(
    db: Annotated[Session, Depends(get_db)],
    mailer: Annotated[ConfirmationMailer, Depends(get_mailer)],
) -> UserRepository:
    """Get user repository with dependencies."""
    return UserRepository(db, mailer)


def get_permission_checker() -> PermissionChecker:
    """Get permission checker instance."""
    return PermissionChecker()
