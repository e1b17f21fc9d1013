"""User and credential Pydantic schemas."""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field

from .common import Email


class UserCreate(BaseModel):
    """Profile submitted on first sign-in."""

    email: Email
    name: str | None = Field(None, max_length=200, description="Display name")
    image: str | None = Field(None, max_length=2048, description="Avatar URL")


class UserResponse(BaseModel):
    """Schema for user information returned to administrators."""

    id: int
    email: str
    name: str | None
    image: str | None
    role: str
    created_at: datetime

    model_config = ConfigDict(from_attributes=True)


class RegisterResponse(BaseModel):
    """Outcome of a sign-in registration; repeat sign-ins are not errors."""

    inserted_id: int | None = Field(..., description="New user id, or null if already present")
    created: bool = Field(..., description="True if a new record was inserted")
    message: str | None = Field(None, description="Set to 'user already exists' on repeats")


class AdminStatus(BaseModel):
    """Whether a member holds the admin role."""

    email: str
    admin: bool


class TokenRequest(BaseModel):
    """Identity payload exchanged for a bearer token."""

    email: Email
    name: str | None = Field(None, max_length=200)


class TokenResponse(BaseModel):
    """Response returned after a token has been issued."""

    token: str = Field(..., description="JWT access token")
    token_type: str = Field("bearer", description="Token type (always 'bearer')")
