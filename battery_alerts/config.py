"""Application configuration settings."""

from __future__ import annotations

from functools import lru_cache

from pydantic import Field, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

ENV_FILE = ".env"
ENV_FILE_ENCODING = "utf-8"


class Settings(BaseSettings):
    """Application configuration values loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=ENV_FILE, env_file_encoding=ENV_FILE_ENCODING, extra="ignore"
    )

    database_url: str = Field(
        description="Database connection URL used by SQLAlchemy for the analytics store",
        min_length=1,
    )
    aws_region: str = Field(
        default="us-east-1", description="AWS region hosting the lock registry"
    )
    aws_access_key_id: str | None = Field(
        default=None, description="AWS access key used to reach DynamoDB"
    )
    aws_secret_access_key: str | None = Field(
        default=None, description="AWS secret key paired with AWS_ACCESS_KEY_ID"
    )
    locks_table_name: str = Field(
        default="locks", description="DynamoDB table holding lock health state"
    )
    firebase_base64: str | None = Field(
        default=None,
        description="Base64 encoded Firebase service account JSON used for push delivery",
    )
    campaign_name: str = Field(
        default="battery_low_alert",
        description="Campaign tag attached to battery alert notifications",
        min_length=1,
    )
    stale_after_days: int = Field(
        default=30,
        description="Days without a battery check before a lock is considered stale",
        gt=0,
    )
    push_timeout_seconds: float = Field(
        default=10.0, description="HTTP timeout for a single push send", gt=0
    )
    registry_timeout_seconds: float = Field(
        default=10.0, description="Connect/read timeout for DynamoDB calls", gt=0
    )
    app_timezone: str = Field(
        default="UTC", description="Timezone used when rendering report timestamps"
    )
    log_level: str = Field(default="INFO", description="Root logging level")

    @model_validator(mode="after")
    def _validate_aws_pair(self) -> "Settings":
        if bool(self.aws_access_key_id) ^ bool(self.aws_secret_access_key):
            raise ValueError(
                "AWS_ACCESS_KEY_ID and AWS_SECRET_ACCESS_KEY must both be provided"
            )
        return self


@lru_cache
def get_settings() -> Settings:
    """Return cached application settings instance."""

    return Settings()


def reset_settings_cache() -> None:
    """Clear the settings cache to force reloading from the environment."""

    get_settings.cache_clear()


__all__ = ["Settings", "get_settings", "reset_settings_cache"]
