"""Post routes: public reads by slug, author-only writes."""

import logging
import uuid
from typing import Annotated

from fastapi import APIRouter, Depends, status
from fastapi.concurrency import run_in_threadpool
from sqlalchemy.orm import Session

from blog_api.api.v1.auth import CurrentUserId
from blog_api.core.config import Settings, get_settings
from blog_api.core.database import get_db
from blog_api.schemas.comment import CommentOut
from blog_api.schemas.common import ApiResponse
from blog_api.schemas.post import (
    CreatePostRequest,
    PostDetail,
    PostSummary,
    UpdateContentAndSubtitleRequest,
    UpdatePostCategoryRequest,
    UpdatePostImageRequest,
    UpdateTitleRequest,
)
from blog_api.services import media, posts

logger = logging.getLogger(__name__)

router = APIRouter()

DbSession = Annotated[Session, Depends(get_db)]


def _updated(post) -> ApiResponse[PostDetail]:
    return ApiResponse[PostDetail](
        message="Post updated successfully", data=PostDetail.model_validate(post)
    )


@router.get("", response_model=ApiResponse[list[PostSummary]])
def list_posts(db: DbSession) -> ApiResponse[list[PostSummary]]:
    """All posts, newest first, without their content body."""
    return ApiResponse[list[PostSummary]](
        message="Posts fetched successfully",
        data=[PostSummary.model_validate(p) for p in posts.list_posts(db)],
    )


@router.get("/{slug}", response_model=ApiResponse[PostDetail])
def get_post(slug: str, db: DbSession) -> ApiResponse[PostDetail]:
    post = posts.get_post_by_slug(db, slug)
    return ApiResponse[PostDetail](
        message="Post fetched successfully", data=PostDetail.model_validate(post)
    )


@router.get("/{slug}/comments", response_model=ApiResponse[list[CommentOut]])
def get_post_comments(slug: str, db: DbSession) -> ApiResponse[list[CommentOut]]:
    comments = posts.get_post_comments_by_slug(db, slug)
    return ApiResponse[list[CommentOut]](
        message="Post comments fetched successfully",
        data=[CommentOut.model_validate(c) for c in comments],
    )


@router.post(
    "", response_model=ApiResponse[PostDetail], status_code=status.HTTP_201_CREATED
)
def create_post(
    body: CreatePostRequest, caller_id: CurrentUserId, db: DbSession
) -> ApiResponse[PostDetail]:
    post = posts.create_post(
        db,
        caller_id,
        body.title,
        body.subtitle,
        body.content,
        body.image,
        body.category,
    )
    return ApiResponse[PostDetail](
        message="Post created successfully", data=PostDetail.model_validate(post)
    )


@router.patch("/{post_id}/update-title", response_model=ApiResponse[PostDetail])
def update_title(
    post_id: uuid.UUID, body: UpdateTitleRequest, caller_id: CurrentUserId, db: DbSession
) -> ApiResponse[PostDetail]:
    return _updated(posts.update_title(db, caller_id, post_id, body.title))


@router.patch(
    "/{post_id}/update-content-and-subtitle", response_model=ApiResponse[PostDetail]
)
def update_content_and_subtitle(
    post_id: uuid.UUID,
    body: UpdateContentAndSubtitleRequest,
    caller_id: CurrentUserId,
    db: DbSession,
) -> ApiResponse[PostDetail]:
    return _updated(
        posts.update_content_and_subtitle(db, caller_id, post_id, body.subtitle, body.content)
    )


def _replace_image(
    db: Session, caller_id: uuid.UUID, post_id: uuid.UUID, image: object
) -> tuple[ApiResponse[PostDetail], str]:
    # Database work only; runs in the threadpool.
    post, old_image = posts.update_image(db, caller_id, post_id, image)
    return _updated(post), old_image


@router.patch("/{post_id}/update-image", response_model=ApiResponse[PostDetail])
async def update_image(
    post_id: uuid.UUID,
    body: UpdatePostImageRequest,
    caller_id: CurrentUserId,
    db: DbSession,
    settings: Annotated[Settings, Depends(get_settings)],
) -> ApiResponse[PostDetail]:
    """Swap the post image; the previous image is removed from the media host."""
    response, old_image = await run_in_threadpool(
        _replace_image, db, caller_id, post_id, body.image
    )
    if old_image and old_image != response.data.image:
        try:
            await media.delete_image(old_image, settings)
        except media.MediaHostError as e:
            logger.warning(
                "Could not delete replaced image for post_id=%s: %s", post_id, e.message
            )
    return response


@router.patch("/{post_id}/update-category", response_model=ApiResponse[PostDetail])
def update_category(
    post_id: uuid.UUID,
    body: UpdatePostCategoryRequest,
    caller_id: CurrentUserId,
    db: DbSession,
) -> ApiResponse[PostDetail]:
    return _updated(posts.update_category(db, caller_id, post_id, body.category))


@router.delete("/{post_id}", response_model=ApiResponse[None])
def delete_post(
    post_id: uuid.UUID, caller_id: CurrentUserId, db: DbSession
) -> ApiResponse[None]:
    posts.delete_post(db, caller_id, post_id)
    return ApiResponse[None](message="Post deleted successfully")
