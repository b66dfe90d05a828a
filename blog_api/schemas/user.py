"""
Request schemas for user profile endpoints.

Fields accept any JSON value: presence and type are checked by the service after
ownership, so a caller editing someone else's profile always gets 403.
"""

from typing import Any

from pydantic import BaseModel


class UpdateNameRequest(BaseModel):
    name: Any = None
    password: Any = None


class UpdateEmailRequest(BaseModel):
    email: Any = None
    password: Any = None


class UpdatePasswordRequest(BaseModel):
    password: Any = None
    new_password: Any = None


class UpdateProfilePictureRequest(BaseModel):
    image: Any = None


class UpdateBioRequest(BaseModel):
    bio: Any = None


class DeleteUserRequest(BaseModel):
    password: Any = None
