"""Health check payload."""

from typing import Literal

from pydantic import BaseModel, Field


class HealthResponse(BaseModel):
    status: Literal["ok"] = "ok"
    version: str = Field(description="Deployed API version")
    environment: Literal["dev", "prod"]
    database: Literal["connected", "disconnected"] = Field(
        description="Result of a trivial query against the blog database"
    )
