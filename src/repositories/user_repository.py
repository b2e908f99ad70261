"""User repository: every mutation and business rule for user accounts."""

import logging
from typing import Protocol

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session, selectinload

from src.exceptions import (
    CannotDeactivateSelfError,
    CannotDeleteSelfError,
    DuplicateEmailError,
    GeneralError,
    UserAdminError,
    UserCreateError,
    UserDeleteError,
    UserMarkError,
    UserNeedsRolesError,
    UserNotFoundError,
    UserNotTrashedError,
    UserRestoreError,
    UserUpdateError,
    UserUpdatePasswordError,
)
from src.models.enums import UserStatus
from src.models.role import Role
from src.models.user import User
from src.schemas.user import UserCreate, UserUpdate
from src.services.auth import generate_confirmation_code, get_password_hash

logger = logging.getLogger(__name__)

TABLE_COLUMNS = (
    User.id,
    User.name,
    User.email,
    User.status,
    User.confirmed,
    User.created_at,
    User.updated_at,
    User.deleted_at,
)


class Mailer(Protocol):
    def send_confirmation_email(self, user_id: int) -> None: ...


class UserRepository:
    """Repository for administering user accounts."""

    def __init__(self, db: Session, mailer: Mailer):
        self.db = db
        self.mailer = mailer

    def find_or_fail(self, user_id: int, with_roles: bool = False) -> User:
        """Get a user by ID, trashed users included."""
        query = self.db.query(User).filter(User.id == user_id)
        if with_roles:
            query = query.options(selectinload(User.roles))
        user = query.first()
        if user is None:
            raise UserNotFoundError()
        return user

    def get_for_table(self, status: int = UserStatus.ACTIVE, trashed: bool = False) -> list:
        """Get projected rows for the users table.

        With ``trashed`` only soft-deleted rows are returned and ``status`` is
        ignored. deleted_at is always selected so callers can branch per row.
        """
        query = self.db.query(*TABLE_COLUMNS)
        if trashed:
            query = query.filter(User.deleted_at.is_not(None))
        else:
            query = query.filter(User.status == int(status))
        return query.order_by(User.id).all()

    def create(self, data: UserCreate, role_ids: list[int]) -> User:
        """Create a user, then assign roles.

        Steps run as separate writes: the user row is committed before the
        role count is checked. Only ids that resolve to a role count. With no
        roles the new row is deactivated and UserNeedsRolesError carries its
        id for cleanup by the caller.
        """
        self._check_email_available(data.email)

        user = User(
            name=data.name,
            email=data.email,
            password_hash=get_password_hash(data.password),
            status=int(data.status),
            confirmation_code=generate_confirmation_code(),
            confirmed=int(data.confirmed),
        )
        self.db.add(user)
        self._commit(UserCreateError)
        logger.info(f"Created user {user.id} <{user.email}>")

        roles = self._load_roles(role_ids)
        self._validate_role_amount(user, roles)

        user.attach_roles(roles)
        self._commit(UserCreateError)

        if data.confirmation_email and not user.confirmed:
            self.mailer.send_confirmation_email(user.id)

        return user

    def update(self, user_id: int, data: UserUpdate, role_ids: list[int]) -> User:
        """Update a user's details and replace their roles."""
        user = self.find_or_fail(user_id)
        if user.email != data.email:
            self._check_email_available(data.email)

        user.name = data.name
        user.email = data.email
        user.status = int(data.status)
        user.confirmed = int(data.confirmed)
        self._commit(UserUpdateError)

        # Field edits above stay saved even when the roles are rejected
        roles = self._load_roles(role_ids)
        if not roles:
            raise UserNeedsRolesError(user.id, "You must choose at least one role.")

        user.detach_roles(user.roles)
        user.attach_roles(roles)
        self._commit(UserUpdateError)
        logger.info(f"Updated user {user.id} with roles {sorted(role.id for role in roles)}")
        return user

    def update_password(self, user_id: int, password: str) -> User:
        """Set a new password for a user."""
        user = self.find_or_fail(user_id)
        user.password_hash = get_password_hash(password)
        self._commit(UserUpdatePasswordError)
        logger.info(f"Changed password for user {user.id}")
        return user

    def destroy(self, user_id: int, acting_user_id: int) -> User:
        """Soft-delete a user."""
        if user_id == acting_user_id:
            raise CannotDeleteSelfError()

        user = self.find_or_fail(user_id)
        user.soft_delete()
        self._commit(UserDeleteError)
        logger.info(f"User {user.id} moved to trash by user {acting_user_id}")
        return user

    def delete(self, user_id: int) -> None:
        """Permanently erase a trashed user."""
        user = self.find_or_fail(user_id, with_roles=True)
        if not user.trashed:
            raise UserNotTrashedError(
                "This user must be deleted first before it can be destroyed permanently."
            )

        user.detach_roles(user.roles)
        try:
            self.db.delete(user)
            self.db.commit()
        except SQLAlchemyError as e:
            self.db.rollback()
            logger.error(f"Permanent delete of user {user_id} failed: {e}", exc_info=True)
            raise GeneralError(str(e)) from e
        logger.info(f"User {user_id} permanently deleted")

    def restore(self, user_id: int) -> User:
        """Restore a trashed user."""
        user = self.find_or_fail(user_id)
        if not user.trashed:
            raise UserNotTrashedError("This user is not deleted so it can not be restored.")

        user.restore()
        self._commit(UserRestoreError)
        logger.info(f"User {user.id} restored")
        return user

    def mark(self, user_id: int, status: int, acting_user_id: int) -> User:
        """Set a user's active/inactive status."""
        if user_id == acting_user_id and status == UserStatus.INACTIVE:
            raise CannotDeactivateSelfError()

        user = self.find_or_fail(user_id)
        user.status = int(status)
        self._commit(UserMarkError)
        logger.info(f"User {user.id} marked {UserStatus(status).name.lower()}")
        return user

    def _validate_role_amount(self, user: User, roles: list[Role]) -> None:
        """Deactivate the user and fail when no role was chosen."""
        if roles:
            return

        user.status = UserStatus.INACTIVE.value
        self._commit(UserCreateError)
        logger.warning(f"User {user.id} created without roles, deactivated")
        raise UserNeedsRolesError(
            user.id, "You must choose at least one role. User has been created but deactivated."
        )

    def _check_email_available(self, email: str) -> None:
        # No trashed filter: a soft-deleted account still owns its address
        if self.db.query(User.id).filter(User.email == email).first():
            raise DuplicateEmailError()

    def _load_roles(self, role_ids: list[int]) -> list[Role]:
        return self.db.query(Role).filter(Role.id.in_(role_ids)).all()

    def _commit(self, error: type[UserAdminError]) -> None:
        try:
            self.db.commit()
        except SQLAlchemyError as e:
            self.db.rollback()
            logger.error(f"{error.__name__}: {e}", exc_info=True)
            raise error() from e
