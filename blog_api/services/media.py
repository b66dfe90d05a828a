"""Image hosting on Cloudinary: signed upload and destroy over the REST API."""

from __future__ import annotations

import hashlib
import logging
import time
from typing import TYPE_CHECKING, Any
from urllib.parse import urlparse

import httpx

if TYPE_CHECKING:
    from blog_api.core.config import Settings

logger = logging.getLogger(__name__)

# Crop/resize applied to every upload, stored as jpg.
UPLOAD_TRANSFORMATION = "c_fill,g_auto,h_1000,w_800"
UPLOAD_FORMAT = "jpg"

ALLOWED_IMAGE_CONTENT_TYPES = frozenset(
    {"image/jpeg", "image/png", "image/gif", "image/webp"}
)


class MediaHostError(Exception):
    """Raised when the media host cannot complete an upload or delete."""

    def __init__(self, message: str, status_code: int | None = None) -> None:
        self.message = message
        self.status_code = status_code
        super().__init__(message)


def sign_params(params: dict[str, Any], api_secret: str) -> str:
    """
    Cloudinary request signature: sha1 over "k1=v1&k2=v2..." (keys sorted, empty
    values skipped) with the API secret appended.
    """
    to_sign = "&".join(
        f"{key}={params[key]}"
        for key in sorted(params)
        if params[key] is not None and params[key] != ""
    )
    return hashlib.sha1(f"{to_sign}{api_secret}".encode("utf-8")).hexdigest()


def public_id_from_url(image_url: str) -> str | None:
    """
    Extract "<folder>/<name>" from a delivery URL such as
    https://res.cloudinary.com/<cloud>/image/upload/v123/blog-api/abc.jpg
    """
    if not image_url or not image_url.strip():
        return None
    path = urlparse(image_url.strip()).path
    parts = [p for p in path.split("/") if p]
    if len(parts) < 2:
        return None
    name = parts[-1].rsplit(".", 1)[0]
    if not name:
        return None
    return f"{parts[-2]}/{name}"


def _endpoint(settings: Settings, action: str) -> str:
    base = settings.CLOUDINARY_BASE_URL.rstrip("/")
    return f"{base}/{settings.CLOUDINARY_CLOUD_NAME}/image/{action}"


def _signed_form(params: dict[str, Any], settings: Settings) -> dict[str, Any]:
    params = {**params, "timestamp": int(time.time())}
    signature = sign_params(params, settings.CLOUDINARY_API_SECRET.get_secret_value())
    return {**params, "api_key": settings.CLOUDINARY_API_KEY, "signature": signature}


def _error_message(response: httpx.Response) -> str:
    try:
        body = response.json()
    except ValueError:
        return response.text[:200] or f"HTTP {response.status_code}"
    if isinstance(body, dict) and isinstance(body.get("error"), dict):
        return str(body["error"].get("message", body["error"]))
    return str(body)[:200]


async def upload_image(
    data: bytes,
    filename: str,
    content_type: str,
    settings: Settings,
    client: httpx.AsyncClient | None = None,
) -> str:
    """Upload image bytes and return the secure (https) delivery URL."""
    form = _signed_form(
        {
            "folder": settings.CLOUDINARY_FOLDER,
            "transformation": UPLOAD_TRANSFORMATION,
            "format": UPLOAD_FORMAT,
        },
        settings,
    )
    files = {"file": (filename or "upload", data, content_type)}
    timeout = httpx.Timeout(settings.MEDIA_REQUEST_TIMEOUT_SEC)

    try:
        if client is None:
            async with httpx.AsyncClient(timeout=timeout) as own_client:
                response = await own_client.post(
                    _endpoint(settings, "upload"), data=form, files=files
                )
        else:
            response = await client.post(_endpoint(settings, "upload"), data=form, files=files)
    except httpx.HTTPError as e:
        logger.error("Media host unreachable during upload: %s", e)
        raise MediaHostError(f"Media host unreachable: {e!s}") from e

    if response.status_code >= 400:
        message = _error_message(response)
        logger.error("Media host rejected upload (%s): %s", response.status_code, message)
        raise MediaHostError(message, status_code=response.status_code)

    secure_url = response.json().get("secure_url")
    if not secure_url:
        raise MediaHostError("Media host response did not include secure_url")
    return secure_url


async def delete_image(
    image_url: str,
    settings: Settings,
    client: httpx.AsyncClient | None = None,
) -> bool:
    """Destroy the image behind a delivery URL. Returns True when the host removed it."""
    public_id = public_id_from_url(image_url)
    if public_id is None:
        raise MediaHostError("Image URL does not identify a stored image")

    form = _signed_form({"public_id": public_id}, settings)
    timeout = httpx.Timeout(settings.MEDIA_REQUEST_TIMEOUT_SEC)

    try:
        if client is None:
            async with httpx.AsyncClient(timeout=timeout) as own_client:
                response = await own_client.post(_endpoint(settings, "destroy"), data=form)
        else:
            response = await client.post(_endpoint(settings, "destroy"), data=form)
    except httpx.HTTPError as e:
        logger.error("Media host unreachable during delete: %s", e)
        raise MediaHostError(f"Media host unreachable: {e!s}") from e

    if response.status_code >= 400:
        message = _error_message(response)
        logger.error("Media host rejected delete (%s): %s", response.status_code, message)
        raise MediaHostError(message, status_code=response.status_code)

    result = response.json().get("result")
    if result != "ok":
        raise MediaHostError(f"Media host did not delete {public_id}: {result}")
    return True
