"""Authentication schemas."""

from pydantic import BaseModel, ConfigDict, EmailStr, Field


class UserLogin(BaseModel):
    """User login request."""

    email: EmailStr = Field(..., max_length=255)
    password: str = Field(..., min_length=1, max_length=128)


class CurrentUserResponse(BaseModel):
    """Signed-in user and the permissions they hold."""

    model_config = ConfigDict(from_attributes=True)

    id: int
    email: str
    name: str
    permissions: list[str] = []


class AuthResponse(BaseModel):
    """Authentication response with token and user info."""

    access_token: str
    token_type: str = "bearer"  # noqa: S105
    user: CurrentUserResponse
