"""Image upload/delete routes backed by the media host."""

import logging
from typing import Annotated

from fastapi import APIRouter, Depends, File, UploadFile

from blog_api.api.v1.auth import CurrentUserId
from blog_api.core.config import Settings, get_settings
from blog_api.core.errors import InternalError, InvalidInputError
from blog_api.schemas.common import ApiResponse
from blog_api.schemas.image import ImageDeleteRequest, ImageUploadResponse
from blog_api.services import media

logger = logging.getLogger(__name__)

router = APIRouter()


async def read_limited(upload: UploadFile, max_bytes: int) -> bytes:
    """Read at most max_bytes + 1 bytes; anything longer is rejected without buffering the rest."""
    data = await upload.read(max_bytes + 1)
    if len(data) > max_bytes:
        raise InvalidInputError(
            f"File size must not exceed {max_bytes // (1024 * 1024)} MB."
        )
    return data


@router.post("", response_model=ApiResponse[ImageUploadResponse])
async def upload_image(
    _caller_id: CurrentUserId,
    settings: Annotated[Settings, Depends(get_settings)],
    image: Annotated[UploadFile | None, File()] = None,
) -> ApiResponse[ImageUploadResponse]:
    """
    Upload an image (multipart field `image`, at most MAX_IMAGE_BYTES).
    Returns the hosted URL to use in posts or profile pictures.
    """
    if image is None:
        raise InvalidInputError("No file uploaded")
    content_type = (image.content_type or "").split(";")[0].strip().lower()
    if content_type not in media.ALLOWED_IMAGE_CONTENT_TYPES:
        raise InvalidInputError(
            "Unsupported image type",
            f"Allowed types: {', '.join(sorted(media.ALLOWED_IMAGE_CONTENT_TYPES))}",
        )
    data = await read_limited(image, settings.MAX_IMAGE_BYTES)
    if not data:
        raise InvalidInputError("No file uploaded")

    try:
        image_url = await media.upload_image(data, image.filename or "upload", content_type, settings)
    except media.MediaHostError as e:
        raise InternalError("Image upload failed", e.message) from e
    return ApiResponse[ImageUploadResponse](
        message="File uploaded successfully",
        data=ImageUploadResponse(image_url=image_url),
    )


@router.delete("", response_model=ApiResponse[None])
async def delete_image(
    body: ImageDeleteRequest,
    _caller_id: CurrentUserId,
    settings: Annotated[Settings, Depends(get_settings)],
) -> ApiResponse[None]:
    if not body.image_url or not body.image_url.strip():
        raise InvalidInputError("No image url provided")
    try:
        await media.delete_image(body.image_url, settings)
    except media.MediaHostError as e:
        logger.warning("Image delete failed: %s", e.message)
        raise InvalidInputError("Failed to delete image", e.message) from e
    return ApiResponse[None](message="Image deleted successfully")
