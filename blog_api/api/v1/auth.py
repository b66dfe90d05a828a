"""Cookie-based JWT auth routes and auth dependencies (get_current_user_id, require_admin)."""

import uuid
from typing import Annotated

from fastapi import APIRouter, Depends, Request, Response, status
from sqlalchemy.orm import Session

from blog_api.api.cookies import clear_auth_cookies, set_access_cookie, set_auth_cookies
from blog_api.core.config import Settings, get_settings
from blog_api.core.database import get_db
from blog_api.core.errors import ForbiddenError, UnauthorizedError
from blog_api.models import User
from blog_api.schemas.auth import LoginRequest, RegisterRequest, UserPublic
from blog_api.schemas.common import ApiResponse
from blog_api.services import sessions
from blog_api.services.tokens import map_token_error, verify_access_token

router = APIRouter()


def get_current_user_id(
    request: Request,
    settings: Annotated[Settings, Depends(get_settings)],
) -> uuid.UUID:
    """
    Dependency: require a valid access-token cookie and return the caller's id.

    Stateless: the database is not consulted here. Ownership is checked per resource.
    """
    token = request.cookies.get(settings.JWT_ACCESS_TOKEN_NAME)
    if not token:
        raise UnauthorizedError("Access denied. No token provided.")
    try:
        claims = verify_access_token(token, settings)
    except Exception as e:
        raise map_token_error(e) from e
    return claims.user_id


CurrentUserId = Annotated[uuid.UUID, Depends(get_current_user_id)]


def require_admin(
    user_id: CurrentUserId,
    db: Annotated[Session, Depends(get_db)],
) -> User:
    """Dependency: require an authenticated user with role 'admin'. Raises 403 for non-admin."""
    user = db.get(User, user_id)
    if user is None or user.role != "admin":
        raise ForbiddenError("Admin access required")
    return user


@router.post(
    "/register",
    response_model=ApiResponse[UserPublic],
    status_code=status.HTTP_201_CREATED,
)
def register(
    body: RegisterRequest,
    response: Response,
    db: Annotated[Session, Depends(get_db)],
    settings: Annotated[Settings, Depends(get_settings)],
) -> ApiResponse[UserPublic]:
    """Create an account; sets both token cookies so the client is logged in."""
    result = sessions.register(
        db,
        body.name,
        body.email,
        body.password,
        body.password_confirmation,
        settings,
    )
    set_auth_cookies(response, result.access_token, result.refresh_token, settings)
    return ApiResponse[UserPublic](
        message="User registered successfully",
        data=UserPublic.model_validate(result.user),
    )


@router.post("/login", response_model=ApiResponse[UserPublic])
def login(
    body: LoginRequest,
    response: Response,
    db: Annotated[Session, Depends(get_db)],
    settings: Annotated[Settings, Depends(get_settings)],
) -> ApiResponse[UserPublic]:
    """
    Authenticate with email and password. Any previous session of this user ends,
    because the stored refresh token is overwritten.
    """
    result = sessions.login(db, body.email, body.password, settings)
    set_auth_cookies(response, result.access_token, result.refresh_token, settings)
    return ApiResponse[UserPublic](
        message="User logged in successfully",
        data=UserPublic.model_validate(result.user),
    )


@router.get("/refresh-token", response_model=ApiResponse[None])
def refresh_token(
    request: Request,
    response: Response,
    db: Annotated[Session, Depends(get_db)],
    settings: Annotated[Settings, Depends(get_settings)],
) -> ApiResponse[None]:
    """Exchange the refresh-token cookie for a new access-token cookie."""
    incoming = request.cookies.get(settings.JWT_REFRESH_TOKEN_NAME)
    access_token = sessions.refresh(db, incoming, settings)
    set_access_cookie(response, access_token, settings)
    return ApiResponse[None](message="Success")


@router.delete("/logout", response_model=ApiResponse[None])
def logout(
    user_id: CurrentUserId,
    response: Response,
    db: Annotated[Session, Depends(get_db)],
    settings: Annotated[Settings, Depends(get_settings)],
) -> ApiResponse[None]:
    sessions.logout(db, user_id)
    clear_auth_cookies(response, settings)
    return ApiResponse[None](message="User logged out successfully")


@router.get("/me", response_model=ApiResponse[UserPublic])
def me(
    user_id: CurrentUserId,
    db: Annotated[Session, Depends(get_db)],
) -> ApiResponse[UserPublic]:
    user = sessions.get_profile(db, user_id)
    return ApiResponse[UserPublic](
        message="User data retrieved successfully",
        data=UserPublic.model_validate(user),
    )
