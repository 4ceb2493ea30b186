"""Environment configuration using pydantic-settings."""

import os
from typing import Literal, Optional
from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from .constants import (
    DEFAULT_SERVER,
    DEFAULT_PROTOCOL,
    DEFAULT_TIMEOUT,
    DEFAULT_RETRY_COUNT,
    DEFAULT_PERMISSIONS,
)


class Settings(BaseSettings):
    """Default request options loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_prefix="S3ITEM_",
        env_file=os.getenv("S3ITEM_ENV_FILE", ".env"),
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Endpoint Configuration
    server: str = Field(default=DEFAULT_SERVER, min_length=1, description="S3 host (without bucket)")
    protocol: Literal["http", "https"] = Field(default=DEFAULT_PROTOCOL, description="URL scheme")

    # Request Configuration
    timeout: float = Field(default=DEFAULT_TIMEOUT, gt=0, description="Per-attempt timeout in seconds")
    retry_count: int = Field(default=DEFAULT_RETRY_COUNT, ge=0, description="Retries after a transient error")
    permissions: str = Field(default=DEFAULT_PERMISSIONS, description="Canned ACL sent on PUT")

    # Credentials
    aws_access_key_id: Optional[str] = Field(default=None, description="Access key ID used for signing")
    aws_secret_access_key: Optional[str] = Field(default=None, description="Secret access key used for signing")


# Global settings instance
settings = Settings()
