"""Schemas for image upload/delete via the media host."""

from pydantic import BaseModel, Field


class ImageUploadResponse(BaseModel):
    image_url: str = Field(..., description="HTTPS URL of the stored image")


class ImageDeleteRequest(BaseModel):
    image_url: str | None = Field(default=None, description="URL returned by POST /images")
