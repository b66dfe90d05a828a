"""ORM model for user accounts: credentials, profile and the single-slot refresh token."""

from sqlalchemy import Column, String, Text
from sqlalchemy.orm import relationship

from blog_api.models.base import Base, TimestampMixin, uuid_pk

USER_ROLES = ("user", "admin")


class User(TimestampMixin, Base):
    """
    User account for cookie-based JWT authentication.

    role: 'admin' or 'user'
    refresh_token: the only live refresh token for this user, or None when logged out.
    A new login overwrites it, which invalidates any other session.
    """

    __tablename__ = "users"

    id = uuid_pk()
    name = Column(String(20), nullable=False, unique=True, index=True)
    email = Column(String(255), nullable=False, unique=True, index=True)
    password_hash = Column(String(255), nullable=False)
    image = Column(String(2048), nullable=False, default="")
    bio = Column(Text, nullable=False, default="")
    role = Column(String(32), nullable=False, default="user")
    refresh_token = Column(Text, nullable=True)

    posts = relationship("Post", back_populates="author", cascade="all, delete-orphan")
    comments = relationship("Comment", back_populates="user", cascade="all, delete-orphan")
    replies = relationship("CommentReply", back_populates="user", cascade="all, delete-orphan")
