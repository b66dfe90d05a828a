"""Request/response schemas for auth endpoints."""

import uuid
from datetime import datetime

from pydantic import BaseModel, Field


class RegisterRequest(BaseModel):
    """Registration form. Presence and length rules are enforced by the session service."""

    name: str | None = Field(default=None, description="Display name (3-20 chars, unique)")
    email: str | None = Field(default=None, description="Login email (unique)")
    password: str | None = Field(default=None, description="Password (min 6 chars)")
    password_confirmation: str | None = Field(
        default=None, description="Must equal password"
    )


class LoginRequest(BaseModel):
    """Credentials for login."""

    email: str | None = Field(default=None, description="Email")
    password: str | None = Field(default=None, description="Password")


class UserPublic(BaseModel):
    """Public projection of a user: never includes the password hash or refresh token."""

    id: uuid.UUID
    name: str
    email: str
    image: str = ""
    bio: str = ""
    role: str
    created_at: datetime | None = None
    updated_at: datetime | None = None

    class Config:
        from_attributes = True
