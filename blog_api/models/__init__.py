"""SQLAlchemy ORM models."""

from blog_api.models.base import Base
from blog_api.models.comment import Comment, CommentReply
from blog_api.models.post import CATEGORY_NAMES, Category, Post
from blog_api.models.user import USER_ROLES, User

__all__ = [
    "Base",
    "CATEGORY_NAMES",
    "Category",
    "Comment",
    "CommentReply",
    "Post",
    "USER_ROLES",
    "User",
]
