"""
Post operations.

Mutations follow one order: load the post (404), check the caller is its author
(403), then validate fields (400), then write.
"""

import logging
import uuid
from typing import Any

from sqlalchemy.orm import Session, selectinload

from blog_api.core.errors import InvalidInputError, NotFoundError
from blog_api.models import Category, Comment, Post
from blog_api.services.authorization import ensure_owner
from blog_api.services.sessions import get_user_or_404, require_fields
from blog_api.services.slugs import unique_slug

logger = logging.getLogger(__name__)

TITLE_MIN_LEN = 3
TITLE_MAX_LEN = 100


def _validate_length(field: str, value: str) -> None:
    if not (TITLE_MIN_LEN <= len(value) <= TITLE_MAX_LEN):
        raise InvalidInputError(
            f"{field} must be between {TITLE_MIN_LEN} and {TITLE_MAX_LEN} characters"
        )


def _is_blank(value: Any) -> bool:
    return value is None or value == "" or value == {} or value == []


def get_category_by_name(db: Session, name: str) -> Category:
    category = db.query(Category).filter(Category.name == name.strip()).first()
    if category is None:
        raise NotFoundError("Category not found")
    return category


def get_post_or_404(db: Session, post_id: uuid.UUID) -> Post:
    post = db.get(Post, post_id)
    if post is None:
        raise NotFoundError("Post not found")
    return post


def _load_own_post(db: Session, caller_id: uuid.UUID, post_id: uuid.UUID, action: str) -> Post:
    post = get_post_or_404(db, post_id)
    ensure_owner(caller_id, post.author_id, f"You are not authorized to {action} this post")
    return post


def list_posts(db: Session) -> list[Post]:
    return db.query(Post).order_by(Post.created_at.desc()).all()


def get_post_by_slug(db: Session, slug: str) -> Post:
    post = db.query(Post).filter(Post.slug == slug).first()
    if post is None:
        raise NotFoundError("Post not found")
    return post


def get_post_comments_by_slug(db: Session, slug: str) -> list[Comment]:
    post = get_post_by_slug(db, slug)
    return (
        db.query(Comment)
        .options(selectinload(Comment.replies), selectinload(Comment.user))
        .filter(Comment.post_id == post.id)
        .order_by(Comment.created_at)
        .all()
    )


def create_post(
    db: Session,
    caller_id: uuid.UUID,
    title: str | None,
    subtitle: str | None,
    content: Any,
    image: str | None,
    category: str | None,
) -> Post:
    author = get_user_or_404(db, caller_id)
    require_fields(title=title, subtitle=subtitle, image=image, category=category)
    if _is_blank(content):
        raise InvalidInputError("All fields are required", ["content is required"])
    title = title.strip()
    subtitle = subtitle.strip()
    _validate_length("Title", title)
    _validate_length("Subtitle", subtitle)
    found_category = get_category_by_name(db, category)

    post = Post(
        id=uuid.uuid4(),
        title=title,
        subtitle=subtitle,
        content=content,
        image=image.strip(),
        slug=unique_slug(db, title),
        author_id=author.id,
        category_id=found_category.id,
    )
    db.add(post)
    db.commit()
    db.refresh(post)
    logger.info("Post created: post_id=%s author_id=%s", post.id, author.id)
    return post


def update_title(db: Session, caller_id: uuid.UUID, post_id: uuid.UUID, title: str | None) -> Post:
    """Change the title and regenerate the slug."""
    post = _load_own_post(db, caller_id, post_id, "update")
    require_fields(title=title)
    title = title.strip()
    _validate_length("Title", title)

    post.title = title
    post.slug = unique_slug(db, title, exclude_id=post.id)
    db.commit()
    db.refresh(post)
    return post


def update_content_and_subtitle(
    db: Session,
    caller_id: uuid.UUID,
    post_id: uuid.UUID,
    subtitle: str | None,
    content: Any,
) -> Post:
    """Update subtitle and/or content; at least one must be given."""
    post = _load_own_post(db, caller_id, post_id, "update")
    if subtitle is not None and not isinstance(subtitle, str):
        raise InvalidInputError("Invalid field type", ["subtitle must be a string"])
    if (subtitle is None or not subtitle.strip()) and _is_blank(content):
        raise InvalidInputError(
            "At least one field is required", ["subtitle or content is required"]
        )

    if subtitle is not None and subtitle.strip():
        subtitle = subtitle.strip()
        _validate_length("Subtitle", subtitle)
        post.subtitle = subtitle
    if not _is_blank(content):
        post.content = content
    db.commit()
    db.refresh(post)
    return post


def update_image(
    db: Session, caller_id: uuid.UUID, post_id: uuid.UUID, image: str | None
) -> tuple[Post, str]:
    """Point the post at a new image; returns the post and the replaced image URL."""
    post = _load_own_post(db, caller_id, post_id, "update")
    require_fields(image=image)

    old_image = post.image
    post.image = image.strip()
    db.commit()
    db.refresh(post)
    return post, old_image


def update_category(
    db: Session, caller_id: uuid.UUID, post_id: uuid.UUID, category: str | None
) -> Post:
    post = _load_own_post(db, caller_id, post_id, "update")
    require_fields(category=category)
    found_category = get_category_by_name(db, category)

    post.category_id = found_category.id
    db.commit()
    db.refresh(post)
    return post


def delete_post(db: Session, caller_id: uuid.UUID, post_id: uuid.UUID) -> None:
    """Delete a post (and its comments). Ownership is checked before anything is removed."""
    post = _load_own_post(db, caller_id, post_id, "delete")
    db.delete(post)
    db.commit()
    logger.info("Post deleted: post_id=%s", post_id)
