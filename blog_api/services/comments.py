"""Comment and reply operations; only the author may edit or delete."""

import uuid

from sqlalchemy.orm import Session

from blog_api.core.errors import NotFoundError
from blog_api.models import Comment, CommentReply, Post
from blog_api.services.authorization import ensure_owner
from blog_api.services.sessions import get_user_or_404, require_fields


def get_comment_or_404(db: Session, comment_id: uuid.UUID) -> Comment:
    comment = db.get(Comment, comment_id)
    if comment is None:
        raise NotFoundError("Comment not found")
    return comment


def get_reply_or_404(db: Session, reply_id: uuid.UUID) -> CommentReply:
    reply = db.get(CommentReply, reply_id)
    if reply is None:
        raise NotFoundError("Comment reply not found")
    return reply


def create_comment(
    db: Session, caller_id: uuid.UUID, text: str | None, post_id: uuid.UUID | None
) -> Comment:
    user = get_user_or_404(db, caller_id)
    require_fields(text=text, post_id=post_id)
    if db.get(Post, post_id) is None:
        raise NotFoundError("Post not found")

    comment = Comment(id=uuid.uuid4(), text=text.strip(), user_id=user.id, post_id=post_id)
    db.add(comment)
    db.commit()
    db.refresh(comment)
    return comment


def create_reply(
    db: Session, caller_id: uuid.UUID, text: str | None, comment_id: uuid.UUID | None
) -> CommentReply:
    user = get_user_or_404(db, caller_id)
    require_fields(text=text, comment_id=comment_id)
    comment = get_comment_or_404(db, comment_id)

    reply = CommentReply(
        id=uuid.uuid4(), text=text.strip(), user_id=user.id, comment_id=comment.id
    )
    db.add(reply)
    db.commit()
    db.refresh(reply)
    return reply


def update_comment(
    db: Session, caller_id: uuid.UUID, comment_id: uuid.UUID, text: str | None
) -> Comment:
    comment = get_comment_or_404(db, comment_id)
    ensure_owner(caller_id, comment.user_id, "You are not authorized to update this comment")
    require_fields(text=text)

    comment.text = text.strip()
    db.commit()
    db.refresh(comment)
    return comment


def update_reply(
    db: Session, caller_id: uuid.UUID, reply_id: uuid.UUID, text: str | None
) -> CommentReply:
    reply = get_reply_or_404(db, reply_id)
    ensure_owner(
        caller_id, reply.user_id, "You are not authorized to update this comment reply"
    )
    require_fields(text=text)

    reply.text = text.strip()
    db.commit()
    db.refresh(reply)
    return reply


def delete_comment(db: Session, caller_id: uuid.UUID, comment_id: uuid.UUID) -> None:
    comment = get_comment_or_404(db, comment_id)
    ensure_owner(caller_id, comment.user_id, "You are not authorized to delete this comment")
    db.delete(comment)
    db.commit()


def delete_reply(db: Session, caller_id: uuid.UUID, reply_id: uuid.UUID) -> None:
    reply = get_reply_or_404(db, reply_id)
    ensure_owner(
        caller_id, reply.user_id, "You are not authorized to delete this comment reply"
    )
    db.delete(reply)
    db.commit()
