"""Issue and verify signed, time-limited access and refresh tokens (JWT)."""

from __future__ import annotations

import uuid
from dataclasses import dataclass
from datetime import UTC, datetime, timedelta
from typing import TYPE_CHECKING, Any

import jwt

from blog_api.core.errors import ApiError, InternalError, UnauthorizedError

if TYPE_CHECKING:
    from blog_api.core.config import Settings


class TokenExpiredError(Exception):
    """Raised when a token's exp claim has passed at verification time."""


class TokenInvalidError(Exception):
    """Raised when a token's signature, structure or subject does not validate."""


@dataclass(frozen=True)
class TokenClaims:
    user_id: uuid.UUID
    expires_at: datetime


def issue_token(
    user_id: uuid.UUID | str,
    secret: str,
    expires_in: timedelta,
    algorithm: str = "HS256",
) -> str:
    """
    Create a signed JWT with sub (user id), iat, exp and a random jti.

    The jti makes two tokens issued for the same user in the same second distinct,
    which the stored-refresh-token comparison relies on.
    """
    now = datetime.now(UTC)
    payload: dict[str, Any] = {
        "sub": str(user_id),
        "iat": now,
        "exp": now + expires_in,
        "jti": uuid.uuid4().hex,
    }
    return jwt.encode(payload, secret, algorithm=algorithm)


def issue_access_token(user_id: uuid.UUID | str, settings: Settings) -> str:
    return issue_token(
        user_id,
        settings.JWT_ACCESS_TOKEN_SECRET.get_secret_value(),
        settings.access_token_ttl,
        settings.JWT_ALGORITHM,
    )


def issue_refresh_token(user_id: uuid.UUID | str, settings: Settings) -> str:
    return issue_token(
        user_id,
        settings.JWT_REFRESH_TOKEN_SECRET.get_secret_value(),
        settings.refresh_token_ttl,
        settings.JWT_ALGORITHM,
    )


def verify_token(token: str, secret: str, algorithm: str = "HS256") -> TokenClaims:
    """
    Verify signature and expiry and return the decoded claims.

    Raises TokenExpiredError or TokenInvalidError; anything else propagates unchanged.
    """
    try:
        payload = jwt.decode(
            token,
            secret,
            algorithms=[algorithm],
            options={"require": ["sub", "exp"]},
        )
    except jwt.ExpiredSignatureError as e:
        raise TokenExpiredError("Token has expired") from e
    except jwt.InvalidTokenError as e:
        raise TokenInvalidError(str(e)) from e

    try:
        user_id = uuid.UUID(str(payload["sub"]))
    except (TypeError, ValueError) as e:
        raise TokenInvalidError("Token subject is not a valid user id") from e
    return TokenClaims(
        user_id=user_id,
        expires_at=datetime.fromtimestamp(payload["exp"], tz=UTC),
    )


def verify_access_token(token: str, settings: Settings) -> TokenClaims:
    return verify_token(
        token, settings.JWT_ACCESS_TOKEN_SECRET.get_secret_value(), settings.JWT_ALGORITHM
    )


def verify_refresh_token(token: str, settings: Settings) -> TokenClaims:
    return verify_token(
        token, settings.JWT_REFRESH_TOKEN_SECRET.get_secret_value(), settings.JWT_ALGORITHM
    )


def map_token_error(exc: Exception) -> ApiError:
    """Translate a verification failure into the error the client sees."""
    if isinstance(exc, TokenExpiredError):
        return UnauthorizedError("Token has expired.")
    if isinstance(exc, TokenInvalidError):
        return UnauthorizedError("Invalid token.")
    return InternalError("Internal server error.")
