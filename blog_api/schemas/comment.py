"""Request/response schemas for comments and replies."""

import uuid
from datetime import datetime
from typing import Any

from pydantic import BaseModel

from blog_api.schemas.auth import UserPublic


class ReplyOut(BaseModel):
    id: uuid.UUID
    text: str
    comment_id: uuid.UUID
    user: UserPublic
    created_at: datetime | None = None
    updated_at: datetime | None = None

    class Config:
        from_attributes = True


class CommentOut(BaseModel):
    id: uuid.UUID
    text: str
    post_id: uuid.UUID
    user: UserPublic
    replies: list[ReplyOut] = []
    created_at: datetime | None = None
    updated_at: datetime | None = None

    class Config:
        from_attributes = True


class CreateCommentRequest(BaseModel):
    text: str | None = None
    post_id: uuid.UUID | None = None


class CreateReplyRequest(BaseModel):
    text: str | None = None
    comment_id: uuid.UUID | None = None


class UpdateTextRequest(BaseModel):
    """Any JSON value; type is checked after ownership."""

    text: Any = None
