"""Pydantic request/response schemas."""

from blog_api.schemas.auth import LoginRequest, RegisterRequest, UserPublic
from blog_api.schemas.comment import CommentOut, ReplyOut
from blog_api.schemas.common import ApiResponse, ErrorResponse
from blog_api.schemas.health import HealthResponse
from blog_api.schemas.image import ImageDeleteRequest, ImageUploadResponse
from blog_api.schemas.post import CategoryOut, PostDetail, PostSummary

__all__ = [
    "ApiResponse",
    "CategoryOut",
    "CommentOut",
    "ErrorResponse",
    "HealthResponse",
    "ImageDeleteRequest",
    "ImageUploadResponse",
    "LoginRequest",
    "PostDetail",
    "PostSummary",
    "RegisterRequest",
    "ReplyOut",
    "UserPublic",
]
