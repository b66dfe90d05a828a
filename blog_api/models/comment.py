"""ORM models for comments on posts and replies to comments."""

from sqlalchemy import Column, ForeignKey, Text, Uuid
from sqlalchemy.orm import relationship

from blog_api.models.base import Base, TimestampMixin, uuid_pk


class Comment(TimestampMixin, Base):
    __tablename__ = "comments"

    id = uuid_pk()
    text = Column(Text, nullable=False)
    user_id = Column(
        Uuid, ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True
    )
    post_id = Column(
        Uuid, ForeignKey("posts.id", ondelete="CASCADE"), nullable=False, index=True
    )

    user = relationship("User", back_populates="comments")
    post = relationship("Post", back_populates="comments")
    replies = relationship(
        "CommentReply",
        back_populates="comment",
        cascade="all, delete-orphan",
        order_by="CommentReply.created_at",
    )


class CommentReply(TimestampMixin, Base):
    __tablename__ = "comment_replies"

    id = uuid_pk()
    text = Column(Text, nullable=False)
    user_id = Column(
        Uuid, ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True
    )
    comment_id = Column(
        Uuid, ForeignKey("comments.id", ondelete="CASCADE"), nullable=False, index=True
    )

    user = relationship("User", back_populates="replies")
    comment = relationship("Comment", back_populates="replies")
