"""User profile routes: public reads, owner-only updates, admin listing."""

import uuid
from typing import Annotated

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from blog_api.api.v1.auth import CurrentUserId, require_admin
from blog_api.core.config import Settings, get_settings
from blog_api.core.database import get_db
from blog_api.models import User
from blog_api.schemas.auth import UserPublic
from blog_api.schemas.common import ApiResponse
from blog_api.schemas.post import PostSummary
from blog_api.schemas.user import (
    DeleteUserRequest,
    UpdateBioRequest,
    UpdateEmailRequest,
    UpdateNameRequest,
    UpdatePasswordRequest,
    UpdateProfilePictureRequest,
)
from blog_api.services import users

router = APIRouter()

DbSession = Annotated[Session, Depends(get_db)]


@router.get("", response_model=ApiResponse[list[UserPublic]])
def list_users(
    _admin: Annotated[User, Depends(require_admin)],
    db: DbSession,
) -> ApiResponse[list[UserPublic]]:
    """List all users (admin only)."""
    return ApiResponse[list[UserPublic]](
        message="Users retrieved successfully",
        data=[UserPublic.model_validate(u) for u in users.list_users(db)],
    )


@router.get("/{user_id}", response_model=ApiResponse[UserPublic])
def get_user(user_id: uuid.UUID, db: DbSession) -> ApiResponse[UserPublic]:
    user = users.get_user(db, user_id)
    return ApiResponse[UserPublic](
        message="User retrieved successfully", data=UserPublic.model_validate(user)
    )


@router.get("/{user_id}/posts", response_model=ApiResponse[list[PostSummary]])
def get_user_posts(user_id: uuid.UUID, db: DbSession) -> ApiResponse[list[PostSummary]]:
    posts = users.get_user_posts(db, user_id)
    return ApiResponse[list[PostSummary]](
        message="User posts retrieved successfully",
        data=[PostSummary.model_validate(p) for p in posts],
    )


@router.patch("/{user_id}/update-name", response_model=ApiResponse[UserPublic])
def update_name(
    user_id: uuid.UUID, body: UpdateNameRequest, caller_id: CurrentUserId, db: DbSession
) -> ApiResponse[UserPublic]:
    user = users.update_name(db, caller_id, user_id, body.name, body.password)
    return ApiResponse[UserPublic](
        message="User name updated successfully", data=UserPublic.model_validate(user)
    )


@router.patch("/{user_id}/update-email", response_model=ApiResponse[UserPublic])
def update_email(
    user_id: uuid.UUID, body: UpdateEmailRequest, caller_id: CurrentUserId, db: DbSession
) -> ApiResponse[UserPublic]:
    user = users.update_email(db, caller_id, user_id, body.email, body.password)
    return ApiResponse[UserPublic](
        message="User email updated successfully", data=UserPublic.model_validate(user)
    )


@router.patch("/{user_id}/update-password", response_model=ApiResponse[None])
def update_password(
    user_id: uuid.UUID,
    body: UpdatePasswordRequest,
    caller_id: CurrentUserId,
    db: DbSession,
    settings: Annotated[Settings, Depends(get_settings)],
) -> ApiResponse[None]:
    users.update_password(db, caller_id, user_id, body.password, body.new_password, settings)
    return ApiResponse[None](message="User password updated successfully")


@router.patch("/{user_id}/update-profile-picture", response_model=ApiResponse[UserPublic])
def update_profile_picture(
    user_id: uuid.UUID,
    body: UpdateProfilePictureRequest,
    caller_id: CurrentUserId,
    db: DbSession,
) -> ApiResponse[UserPublic]:
    user = users.update_profile_picture(db, caller_id, user_id, body.image)
    return ApiResponse[UserPublic](
        message="User profile picture updated successfully",
        data=UserPublic.model_validate(user),
    )


@router.patch("/{user_id}/update-bio", response_model=ApiResponse[UserPublic])
def update_bio(
    user_id: uuid.UUID, body: UpdateBioRequest, caller_id: CurrentUserId, db: DbSession
) -> ApiResponse[UserPublic]:
    user = users.update_bio(db, caller_id, user_id, body.bio)
    return ApiResponse[UserPublic](
        message="User bio updated successfully", data=UserPublic.model_validate(user)
    )


@router.delete("/{user_id}", response_model=ApiResponse[None])
def delete_user(
    user_id: uuid.UUID,
    caller_id: CurrentUserId,
    db: DbSession,
    body: DeleteUserRequest | None = None,
) -> ApiResponse[None]:
    """Delete the caller's own account; the current password is required."""
    password = body.password if body is not None else None
    users.delete_user(db, caller_id, user_id, password)
    return ApiResponse[None](message="User deleted successfully")
