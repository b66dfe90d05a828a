"""Application configuration loaded from environment variables."""

import logging
import re
import sys
from datetime import timedelta
from functools import lru_cache
from typing import Literal

from pydantic import SecretStr, ValidationError, field_validator, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

logger = logging.getLogger(__name__)

# Allowed URL schemes for DATABASE_URL (module-level so validators can use it).
VALID_DATABASE_URL_PREFIXES = (
    "postgresql://",
    "postgresql+psycopg2://",
    "postgres://",
    "postgres+psycopg2://",
)

# Duration strings such as "15m", "7d" or "3600" (bare number = seconds).
_DURATION_RE = re.compile(r"^\s*(\d+)\s*(ms|s|m|h|d|w|y)?\s*$", re.IGNORECASE)

_DURATION_UNITS = {
    "ms": timedelta(milliseconds=1),
    "s": timedelta(seconds=1),
    "m": timedelta(minutes=1),
    "h": timedelta(hours=1),
    "d": timedelta(days=1),
    "w": timedelta(weeks=1),
    "y": timedelta(days=365.25),
}


def parse_duration(value: str) -> timedelta:
    """Parse a duration string ("15m", "7d", "900") into a timedelta."""
    match = _DURATION_RE.match(value or "")
    if match is None:
        raise ValueError(
            f"Invalid duration {value!r}; expected e.g. '15m', '1h', '7d'"
        )
    amount, unit = match.groups()
    return int(amount) * _DURATION_UNITS[(unit or "s").lower()]


class Settings(BaseSettings):
    """Validated application settings from env and optional .env file."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        case_sensitive=False,
    )

    APP_ENV: Literal["dev", "prod"] = "dev"
    APP_VERSION: str = "0.1.0"
    DEBUG: bool = False
    LOG_LEVEL: str = "INFO"
    API_V1_PREFIX: str = "/api/v1"

    DATABASE_URL: str

    # JWT: separate secrets and lifetimes for access and refresh tokens
    JWT_ACCESS_TOKEN_SECRET: SecretStr
    JWT_REFRESH_TOKEN_SECRET: SecretStr
    JWT_ACCESS_TOKEN_EXPIRY: str
    JWT_REFRESH_TOKEN_EXPIRY: str
    JWT_ACCESS_TOKEN_NAME: str
    JWT_REFRESH_TOKEN_NAME: str
    JWT_ALGORITHM: str = "HS256"

    # Cookies
    COOKIE_SAMESITE: Literal["lax", "strict", "none"] = "lax"
    REFRESH_COOKIE_PATH: str = "/api/v1/auth/refresh-token"

    BCRYPT_ROUNDS: int = 12

    # Cloudinary (image hosting)
    CLOUDINARY_CLOUD_NAME: str
    CLOUDINARY_API_KEY: str
    CLOUDINARY_API_SECRET: SecretStr
    CLOUDINARY_FOLDER: str = "blog-api"
    CLOUDINARY_BASE_URL: str = "https://api.cloudinary.com/v1_1"
    MEDIA_REQUEST_TIMEOUT_SEC: float = 30.0
    MAX_IMAGE_BYTES: int = 2 * 1024 * 1024

    @field_validator("DATABASE_URL")
    @classmethod
    def validate_database_url(cls, v: str) -> str:
        if not v or not v.strip():
            raise ValueError("DATABASE_URL must be set and non-empty")
        if not any(v.startswith(prefix) for prefix in VALID_DATABASE_URL_PREFIXES):
            raise ValueError(
                "DATABASE_URL must be a PostgreSQL URL (e.g. postgresql:// or postgresql+psycopg2://)"
            )
        return v.strip()

    @field_validator("JWT_ACCESS_TOKEN_SECRET", "JWT_REFRESH_TOKEN_SECRET")
    @classmethod
    def validate_jwt_secret(cls, v: SecretStr) -> SecretStr:
        if not v.get_secret_value() or not v.get_secret_value().strip():
            raise ValueError("JWT secrets must be set and non-empty")
        return v

    @field_validator("JWT_ACCESS_TOKEN_EXPIRY", "JWT_REFRESH_TOKEN_EXPIRY")
    @classmethod
    def validate_expiry(cls, v: str) -> str:
        if parse_duration(v) <= timedelta(0):
            raise ValueError("Token expiry must be greater than zero")
        return v.strip()

    @field_validator(
        "JWT_ACCESS_TOKEN_NAME",
        "JWT_REFRESH_TOKEN_NAME",
        "CLOUDINARY_CLOUD_NAME",
        "CLOUDINARY_API_KEY",
    )
    @classmethod
    def validate_non_empty(cls, v: str) -> str:
        if not v or not v.strip():
            raise ValueError("must be set and non-empty")
        return v.strip()

    @field_validator("JWT_ALGORITHM")
    @classmethod
    def validate_jwt_algorithm(cls, v: str) -> str:
        if not v or not v.strip():
            raise ValueError("JWT_ALGORITHM must be set and non-empty")
        return v.strip()

    @field_validator("BCRYPT_ROUNDS")
    @classmethod
    def validate_bcrypt_rounds(cls, v: int) -> int:
        if v < 4 or v > 16:
            raise ValueError("BCRYPT_ROUNDS must be between 4 and 16")
        return v

    @field_validator("MEDIA_REQUEST_TIMEOUT_SEC")
    @classmethod
    def validate_media_timeout(cls, v: float) -> float:
        if v <= 0 or v > 120:
            raise ValueError(
                "MEDIA_REQUEST_TIMEOUT_SEC must be greater than 0 and at most 120"
            )
        return v

    @field_validator("REFRESH_COOKIE_PATH")
    @classmethod
    def validate_cookie_path(cls, v: str) -> str:
        if not v.startswith("/"):
            raise ValueError("REFRESH_COOKIE_PATH must start with '/'")
        return v

    @model_validator(mode="after")
    def validate_token_pairs(self) -> "Settings":
        if (
            self.JWT_ACCESS_TOKEN_SECRET.get_secret_value()
            == self.JWT_REFRESH_TOKEN_SECRET.get_secret_value()
        ):
            raise ValueError(
                "JWT_ACCESS_TOKEN_SECRET and JWT_REFRESH_TOKEN_SECRET must differ"
            )
        if self.JWT_ACCESS_TOKEN_NAME == self.JWT_REFRESH_TOKEN_NAME:
            raise ValueError(
                "JWT_ACCESS_TOKEN_NAME and JWT_REFRESH_TOKEN_NAME must differ"
            )
        return self

    @property
    def access_token_ttl(self) -> timedelta:
        return parse_duration(self.JWT_ACCESS_TOKEN_EXPIRY)

    @property
    def refresh_token_ttl(self) -> timedelta:
        return parse_duration(self.JWT_REFRESH_TOKEN_EXPIRY)

    @property
    def secure_cookies(self) -> bool:
        return self.APP_ENV == "prod"


@lru_cache
def get_settings() -> Settings:
    """Return cached settings instance (safe to call from dependencies)."""
    return Settings()


def load_settings() -> Settings:
    """
    Load settings once at startup; exit with a diagnostic if any are missing or invalid.
    """
    try:
        return get_settings()
    except ValidationError as e:
        for error in e.errors():
            name = ".".join(str(part) for part in error["loc"]) or "settings"
            logger.error("%s: %s", name, error["msg"])
        logger.critical(
            "Configuration invalid; refusing to start (%s error(s))", e.error_count()
        )
        sys.exit(1)


settings = load_settings()
