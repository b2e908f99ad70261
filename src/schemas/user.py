"""User administration schemas."""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, EmailStr, Field, model_validator

from src.models.enums import UserStatus


class UserCreate(BaseModel):
    """Create a user.

    The flag fields mirror optional form checkboxes: absent means False.
    """

    name: str = Field(..., min_length=1, max_length=255)
    # EmailStr lowercases the domain; the local part keeps its case and the
    # store compares addresses exactly
    email: EmailStr = Field(..., max_length=255)
    password: str = Field(..., min_length=6, max_length=128)
    status: bool = False
    confirmed: bool = False
    confirmation_email: bool = False
    assignees_roles: list[int] = Field(default_factory=list)


class UserUpdate(BaseModel):
    """Update a user's details and replace their roles."""

    name: str = Field(..., min_length=1, max_length=255)
    # Normalized the same way as UserCreate.email
    email: EmailStr = Field(..., max_length=255)
    status: bool = False
    confirmed: bool = False
    assignees_roles: list[int] = Field(default_factory=list)


class UserPasswordUpdate(BaseModel):
    """Change a user's password."""

    password: str = Field(..., min_length=6, max_length=128)
    password_confirmation: str = Field(..., max_length=128)

    @model_validator(mode="after")
    def passwords_match(self) -> "UserPasswordUpdate":
        if self.password != self.password_confirmation:
            raise ValueError("The password confirmation does not match.")
        return self


class RoleResponse(BaseModel):
    """Role summary."""

    model_config = ConfigDict(from_attributes=True)

    id: int
    name: str
    all: bool


class UserTableRow(BaseModel):
    """Row of the users table.

    deleted_at is always present so clients can pick actions per row.
    """

    model_config = ConfigDict(from_attributes=True)

    id: int
    name: str
    email: str
    status: UserStatus
    confirmed: bool
    created_at: datetime
    updated_at: datetime
    deleted_at: datetime | None


class UserResponse(UserTableRow):
    """User with assigned roles."""

    roles: list[RoleResponse] = []


class FlashResponse(BaseModel):
    """Outcome message plus the location the client should go to next."""

    message: str
    redirect_to: str
