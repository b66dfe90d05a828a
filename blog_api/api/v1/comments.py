"""Comment and reply routes (all require an access token)."""

import uuid
from typing import Annotated

from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from blog_api.api.v1.auth import CurrentUserId
from blog_api.core.database import get_db
from blog_api.schemas.comment import (
    CommentOut,
    CreateCommentRequest,
    CreateReplyRequest,
    ReplyOut,
    UpdateTextRequest,
)
from blog_api.schemas.common import ApiResponse
from blog_api.services import comments

router = APIRouter()

DbSession = Annotated[Session, Depends(get_db)]


@router.post("", response_model=ApiResponse[CommentOut], status_code=status.HTTP_201_CREATED)
def create_comment(
    body: CreateCommentRequest, caller_id: CurrentUserId, db: DbSession
) -> ApiResponse[CommentOut]:
    comment = comments.create_comment(db, caller_id, body.text, body.post_id)
    return ApiResponse[CommentOut](
        message="Comment created successfully", data=CommentOut.model_validate(comment)
    )


@router.post("/reply", response_model=ApiResponse[ReplyOut], status_code=status.HTTP_201_CREATED)
def create_reply(
    body: CreateReplyRequest, caller_id: CurrentUserId, db: DbSession
) -> ApiResponse[ReplyOut]:
    reply = comments.create_reply(db, caller_id, body.text, body.comment_id)
    return ApiResponse[ReplyOut](
        message="Comment reply created successfully", data=ReplyOut.model_validate(reply)
    )


@router.put("/{comment_id}", response_model=ApiResponse[CommentOut])
def update_comment(
    comment_id: uuid.UUID, body: UpdateTextRequest, caller_id: CurrentUserId, db: DbSession
) -> ApiResponse[CommentOut]:
    comment = comments.update_comment(db, caller_id, comment_id, body.text)
    return ApiResponse[CommentOut](
        message="Comment updated successfully", data=CommentOut.model_validate(comment)
    )


@router.put("/reply/{reply_id}", response_model=ApiResponse[ReplyOut])
def update_reply(
    reply_id: uuid.UUID, body: UpdateTextRequest, caller_id: CurrentUserId, db: DbSession
) -> ApiResponse[ReplyOut]:
    reply = comments.update_reply(db, caller_id, reply_id, body.text)
    return ApiResponse[ReplyOut](
        message="Comment reply updated successfully", data=ReplyOut.model_validate(reply)
    )


@router.delete("/{comment_id}", response_model=ApiResponse[None])
def delete_comment(
    comment_id: uuid.UUID, caller_id: CurrentUserId, db: DbSession
) -> ApiResponse[None]:
    comments.delete_comment(db, caller_id, comment_id)
    return ApiResponse[None](message="Comment deleted successfully")


@router.delete("/reply/{reply_id}", response_model=ApiResponse[None])
def delete_reply(
    reply_id: uuid.UUID, caller_id: CurrentUserId, db: DbSession
) -> ApiResponse[None]:
    comments.delete_reply(db, caller_id, reply_id)
    return ApiResponse[None](message="Comment reply deleted successfully")
