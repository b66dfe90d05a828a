"""
User profile operations.

For profile endpoints the owner of the resource is the path id itself, so the
ownership check runs before the lookup: a caller gets 403 for someone else's id
whether or not that user exists. Order: ownership, existence, fields, password.
"""

from __future__ import annotations

import logging
import uuid
from typing import TYPE_CHECKING

from sqlalchemy.orm import Session

from blog_api.core.errors import InvalidInputError
from blog_api.core.security import hash_password, verify_password
from blog_api.models import Post, User
from blog_api.services.authorization import ensure_owner
from blog_api.services.sessions import (
    get_user_or_404,
    require_fields,
    validate_name_length,
    validate_password_length,
)

if TYPE_CHECKING:
    from blog_api.core.config import Settings

logger = logging.getLogger(__name__)

NOT_YOUR_ACCOUNT = "You are not authorized to update this user"


def _load_own_user(db: Session, caller_id: uuid.UUID, user_id: uuid.UUID) -> User:
    ensure_owner(caller_id, user_id, NOT_YOUR_ACCOUNT)
    return get_user_or_404(db, user_id)


def _check_password(user: User, password: str) -> None:
    if not verify_password(password, user.password_hash):
        raise InvalidInputError("Invalid password")


def list_users(db: Session) -> list[User]:
    return db.query(User).order_by(User.created_at, User.name).all()


def get_user(db: Session, user_id: uuid.UUID) -> User:
    return get_user_or_404(db, user_id)


def get_user_posts(db: Session, user_id: uuid.UUID) -> list[Post]:
    return (
        db.query(Post)
        .filter(Post.author_id == user_id)
        .order_by(Post.created_at.desc())
        .all()
    )


def update_name(
    db: Session, caller_id: uuid.UUID, user_id: uuid.UUID, name: str | None, password: str | None
) -> User:
    user = _load_own_user(db, caller_id, user_id)
    require_fields(name=name, password=password)
    name = name.strip()
    validate_name_length(name)
    _check_password(user, password)

    taken = db.query(User).filter(User.name == name, User.id != user.id).first()
    if taken is not None:
        raise InvalidInputError("Name already taken")
    user.name = name
    db.commit()
    db.refresh(user)
    return user


def update_email(
    db: Session, caller_id: uuid.UUID, user_id: uuid.UUID, email: str | None, password: str | None
) -> User:
    user = _load_own_user(db, caller_id, user_id)
    require_fields(email=email, password=password)
    email = email.strip()
    _check_password(user, password)

    taken = db.query(User).filter(User.email == email, User.id != user.id).first()
    if taken is not None:
        raise InvalidInputError("Email already taken")
    user.email = email
    db.commit()
    db.refresh(user)
    return user


def update_password(
    db: Session,
    caller_id: uuid.UUID,
    user_id: uuid.UUID,
    password: str | None,
    new_password: str | None,
    settings: Settings,
) -> User:
    """Replace the password hash. The current session stays valid."""
    user = _load_own_user(db, caller_id, user_id)
    require_fields(password=password, new_password=new_password)
    validate_password_length(new_password, field="New password")
    _check_password(user, password)

    user.password_hash = hash_password(new_password, settings.BCRYPT_ROUNDS)
    db.commit()
    db.refresh(user)
    logger.info("Password changed: user_id=%s", user.id)
    return user


def update_profile_picture(
    db: Session, caller_id: uuid.UUID, user_id: uuid.UUID, image: str | None
) -> User:
    user = _load_own_user(db, caller_id, user_id)
    require_fields(image=image)
    user.image = image.strip()
    db.commit()
    db.refresh(user)
    return user


def update_bio(db: Session, caller_id: uuid.UUID, user_id: uuid.UUID, bio: str | None) -> User:
    user = _load_own_user(db, caller_id, user_id)
    require_fields(bio=bio)
    user.bio = bio.strip()
    db.commit()
    db.refresh(user)
    return user


def delete_user(
    db: Session, caller_id: uuid.UUID, user_id: uuid.UUID, password: str | None
) -> None:
    """Delete the account together with its posts, comments and replies."""
    user = _load_own_user(db, caller_id, user_id)
    require_fields(password=password)
    _check_password(user, password)

    db.delete(user)
    db.commit()
    logger.info("User deleted: user_id=%s", user_id)
