"""Request/response schemas for posts and categories."""

import uuid
from datetime import datetime
from typing import Any

from pydantic import BaseModel, Field

from blog_api.schemas.auth import UserPublic


class CategoryOut(BaseModel):
    id: uuid.UUID
    name: str

    class Config:
        from_attributes = True


class PostSummary(BaseModel):
    """Post as listed: everything except the content body."""

    id: uuid.UUID
    title: str
    subtitle: str
    image: str
    slug: str
    author: UserPublic
    category: CategoryOut
    created_at: datetime | None = None
    updated_at: datetime | None = None

    class Config:
        from_attributes = True


class PostDetail(PostSummary):
    content: Any


class CreatePostRequest(BaseModel):
    title: str | None = Field(default=None, description="3-100 chars")
    subtitle: str | None = Field(default=None, description="3-100 chars")
    content: Any = Field(default=None, description="Rich-text document (any JSON)")
    image: str | None = Field(default=None, description="Image URL from POST /images")
    category: str | None = Field(default=None, description="Category name")


# Update bodies take any JSON value; the service checks types after ownership.


class UpdateTitleRequest(BaseModel):
    title: Any = None


class UpdateContentAndSubtitleRequest(BaseModel):
    subtitle: Any = None
    content: Any = None


class UpdatePostImageRequest(BaseModel):
    image: Any = None


class UpdatePostCategoryRequest(BaseModel):
    category: Any = None
