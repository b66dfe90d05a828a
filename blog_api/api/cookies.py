"""Set and clear the access/refresh token cookies."""

from fastapi import Response

from blog_api.core.config import Settings


def _common(settings: Settings) -> dict:
    return {
        "httponly": True,
        "secure": settings.secure_cookies,
        "samesite": settings.COOKIE_SAMESITE,
    }


def set_access_cookie(response: Response, access_token: str, settings: Settings) -> None:
    response.set_cookie(
        settings.JWT_ACCESS_TOKEN_NAME,
        access_token,
        max_age=int(settings.access_token_ttl.total_seconds()),
        path="/",
        **_common(settings),
    )


def set_refresh_cookie(response: Response, refresh_token: str, settings: Settings) -> None:
    # Only sent back to the refresh endpoint.
    response.set_cookie(
        settings.JWT_REFRESH_TOKEN_NAME,
        refresh_token,
        max_age=int(settings.refresh_token_ttl.total_seconds()),
        path=settings.REFRESH_COOKIE_PATH,
        **_common(settings),
    )


def set_auth_cookies(
    response: Response, access_token: str, refresh_token: str, settings: Settings
) -> None:
    set_refresh_cookie(response, refresh_token, settings)
    set_access_cookie(response, access_token, settings)


def clear_auth_cookies(response: Response, settings: Settings) -> None:
    response.delete_cookie(
        settings.JWT_REFRESH_TOKEN_NAME, path=settings.REFRESH_COOKIE_PATH, **_common(settings)
    )
    response.delete_cookie(settings.JWT_ACCESS_TOKEN_NAME, path="/", **_common(settings))
