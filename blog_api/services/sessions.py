"""
Session lifecycle: register, login, refresh and logout.

Each user has a single refresh-token slot. Login overwrites it (ending any other
session), logout clears it, and refresh only succeeds while the presented token
still equals the stored value.
"""

from __future__ import annotations

import logging
import uuid
from dataclasses import dataclass
from typing import TYPE_CHECKING

from sqlalchemy import or_
from sqlalchemy.orm import Session

from blog_api.core.errors import AuthError, InvalidInputError, NotFoundError, UnauthorizedError
from blog_api.core.security import (
    NAME_MAX_LEN,
    NAME_MIN_LEN,
    PASSWORD_MIN_LEN,
    hash_password,
    verify_password,
)
from blog_api.models import User
from blog_api.services.tokens import (
    issue_access_token,
    issue_refresh_token,
    map_token_error,
    verify_refresh_token,
)

if TYPE_CHECKING:
    from blog_api.core.config import Settings

logger = logging.getLogger(__name__)

INVALID_CREDENTIALS = "Invalid email or password"


@dataclass
class SessionResult:
    """A freshly authenticated user with the token pair to hand to the client."""

    user: User
    access_token: str
    refresh_token: str


def require_fields(**fields: object) -> None:
    """
    Raise InvalidInputError naming every field that is missing or blank, then every
    field that is not text. Identifiers already parsed to UUIDs pass.
    """
    missing = [
        name
        for name, value in fields.items()
        if value is None or (isinstance(value, str) and not value.strip())
    ]
    if missing:
        raise InvalidInputError(
            "All fields are required",
            [f"{name} is required" for name in missing],
        )
    wrong_type = [
        name for name, value in fields.items() if not isinstance(value, (str, uuid.UUID))
    ]
    if wrong_type:
        raise InvalidInputError(
            "Invalid field type",
            [f"{name} must be a string" for name in wrong_type],
        )


def validate_password_length(password: str, field: str = "Password") -> None:
    if len(password) < PASSWORD_MIN_LEN:
        raise InvalidInputError(f"{field} must be at least {PASSWORD_MIN_LEN} characters")


def validate_name_length(name: str) -> None:
    if not (NAME_MIN_LEN <= len(name) <= NAME_MAX_LEN):
        raise InvalidInputError(
            f"Name must be between {NAME_MIN_LEN} and {NAME_MAX_LEN} characters"
        )


def get_user_or_404(db: Session, user_id: uuid.UUID) -> User:
    user = db.get(User, user_id)
    if user is None:
        raise NotFoundError("User not found")
    return user


def register(
    db: Session,
    name: str | None,
    email: str | None,
    password: str | None,
    password_confirmation: str | None,
    settings: Settings,
) -> SessionResult:
    """
    Create a user and log them in.

    All validation happens before storage is touched. The record, its password hash
    and its refresh token are persisted in one commit; nothing is returned unless
    that commit succeeds.
    """
    require_fields(
        name=name,
        email=email,
        password=password,
        password_confirmation=password_confirmation,
    )
    name = name.strip()
    email = email.strip()
    validate_password_length(password)
    if password != password_confirmation:
        raise InvalidInputError("Passwords do not match")
    validate_name_length(name)

    existing = db.query(User).filter(or_(User.email == email, User.name == name)).first()
    if existing is not None:
        raise InvalidInputError("User already exists")

    user = User(
        id=uuid.uuid4(),
        name=name,
        email=email,
        password_hash=hash_password(password, settings.BCRYPT_ROUNDS),
        role="user",
    )
    access_token = issue_access_token(user.id, settings)
    refresh_token = issue_refresh_token(user.id, settings)
    user.refresh_token = refresh_token
    db.add(user)
    db.commit()
    db.refresh(user)

    logger.info("User registered: user_id=%s", user.id)
    return SessionResult(user=user, access_token=access_token, refresh_token=refresh_token)


def login(
    db: Session,
    email: str | None,
    password: str | None,
    settings: Settings,
) -> SessionResult:
    """Authenticate by email and password; overwrite the stored refresh token."""
    require_fields(email=email, password=password)

    user = db.query(User).filter(User.email == email.strip()).first()
    if user is None or not verify_password(password, user.password_hash):
        if user is None:
            logger.warning("Failed login attempt for unknown account")
        else:
            logger.warning("Failed login attempt for user_id=%s", user.id)
        raise AuthError(INVALID_CREDENTIALS)

    access_token = issue_access_token(user.id, settings)
    refresh_token = issue_refresh_token(user.id, settings)
    user.refresh_token = refresh_token
    db.commit()
    db.refresh(user)

    logger.info("User logged in: user_id=%s", user.id)
    return SessionResult(user=user, access_token=access_token, refresh_token=refresh_token)


def refresh(db: Session, incoming_refresh_token: str | None, settings: Settings) -> str:
    """
    Exchange a live refresh token for a new access token.

    The refresh token itself is not rotated. It is rejected once it no longer
    matches the stored value (after a newer login or a logout), even if unexpired.
    """
    if not incoming_refresh_token:
        raise UnauthorizedError("Unauthorized")

    try:
        claims = verify_refresh_token(incoming_refresh_token, settings)
    except Exception as e:
        raise map_token_error(e) from e

    user = get_user_or_404(db, claims.user_id)
    if user.refresh_token != incoming_refresh_token:
        logger.warning("Refresh token mismatch for user_id=%s", user.id)
        raise UnauthorizedError("Unauthorized")

    return issue_access_token(user.id, settings)


def logout(db: Session, user_id: uuid.UUID) -> None:
    """Clear the stored refresh token. A second logout fails instead of succeeding silently."""
    user = get_user_or_404(db, user_id)
    if not user.refresh_token:
        raise UnauthorizedError("Unauthorized, no refresh token found")

    user.refresh_token = None
    db.commit()
    logger.info("User logged out: user_id=%s", user.id)


def get_profile(db: Session, user_id: uuid.UUID) -> User:
    return get_user_or_404(db, user_id)
