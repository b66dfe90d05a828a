"""ORM models for blog posts and their categories."""

from sqlalchemy import JSON, Column, ForeignKey, String, Uuid
from sqlalchemy.orm import relationship

from blog_api.models.base import Base, TimestampMixin, uuid_pk

CATEGORY_NAMES = (
    "Lifestyle",
    "Hoby",
    "Technology",
    "Fashion",
    "Gaming",
    "Health",
    "Business",
    "Education",
    "Philosophy",
    "Other",
)


class Category(Base):
    __tablename__ = "categories"

    id = uuid_pk()
    name = Column(String(64), nullable=False, unique=True)


class Post(TimestampMixin, Base):
    """
    Blog post. author_id is the owner checked before any mutation.

    slug is derived from the title and unique across posts.
    """

    __tablename__ = "posts"

    id = uuid_pk()
    title = Column(String(100), nullable=False)
    subtitle = Column(String(100), nullable=False)
    content = Column(JSON, nullable=False)
    image = Column(String(2048), nullable=False)
    slug = Column(String(255), nullable=False, unique=True, index=True)
    author_id = Column(
        Uuid, ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True
    )
    category_id = Column(Uuid, ForeignKey("categories.id"), nullable=False)

    author = relationship("User", back_populates="posts")
    category = relationship("Category", lazy="joined")
    comments = relationship(
        "Comment",
        back_populates="post",
        cascade="all, delete-orphan",
        order_by="Comment.created_at",
    )
