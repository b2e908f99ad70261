"""Mixins for SQLAlchemy models."""

from datetime import UTC, datetime

from sqlalchemy import Column, DateTime, func


class TimestampMixin:
    """Mixin to add created_at and updated_at timestamp columns."""

    created_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)
    updated_at = Column(
        DateTime(timezone=True),
        server_default=func.now(),
        onupdate=func.now(),
        nullable=False,
    )


class SoftDeleteMixin:
    """Mixin for records that are trashed before they are erased.

    Queries do not filter trashed rows automatically; callers opt in with
    ``deleted_at.is_(None)`` or ``deleted_at.is_not(None)``.
    """

    deleted_at = Column(DateTime(timezone=True), nullable=True, index=True)

    @property
    def trashed(self) -> bool:
        """Check if the record is soft-deleted."""
        return self.deleted_at is not None

    def soft_delete(self) -> None:
        """Mark the record as trashed."""
        self.deleted_at = datetime.now(UTC)

    def restore(self) -> None:
        """Clear the trashed marker."""
        self.deleted_at = None
