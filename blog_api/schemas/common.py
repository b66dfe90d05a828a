"""Response envelopes shared by every endpoint."""

from typing import Generic, TypeVar

from pydantic import BaseModel, Field

T = TypeVar("T")


class ApiResponse(BaseModel, Generic[T]):
    """Success envelope: success flag, human-readable message and optional payload."""

    success: bool = Field(default=True, description="Always true for 2xx responses")
    message: str = Field(..., description="Human-readable outcome")
    data: T | None = Field(default=None, description="Response payload, if any")


class ErrorResponse(BaseModel):
    """Uniform error body for 4xx/5xx responses."""

    success: bool = False
    message: str
    errors: list[str] | None = None
