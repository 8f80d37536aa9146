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
        default="sqlite:///./notifyhub.db",
        description="Database connection URL used by SQLAlchemy to connect to the DB",
        min_length=1,
    )
    secret_key: str = Field(
        description="Secret key used to verify JWT bearer tokens", min_length=1
    )
    access_token_expire_minutes: int = Field(
        default=60,
        description="Number of minutes before access tokens expire",
        gt=0,
    )
    app_timezone: str = Field(
        default="UTC", description="Timezone used for persisted timestamps"
    )
    log_level: str = Field(default="INFO", description="Root logging level")
    page_size: int = Field(
        default=20, description="Number of items returned per page", gt=0
    )
    cors_origins: list[str] = Field(
        default_factory=lambda: ["http://localhost:3000"],
        description="Origins allowed to call the API from a browser",
    )

    celery_broker_url: str = Field(
        default="redis://localhost:6379/0", description="Broker used by Celery"
    )
    celery_result_backend: str | None = Field(
        default=None, description="Optional Celery result backend"
    )
    celery_task_always_eager: bool = Field(
        default=False,
        description="Execute queued tasks synchronously (local runs and tests)",
    )
    push_queue: str = Field(
        default="notifications", description="Celery queue for push delivery tasks"
    )
    push_max_attempts: int = Field(
        default=3, description="Total delivery attempts for a push task", ge=1
    )
    push_retry_backoff_seconds: int = Field(
        default=30, description="Seconds to wait between push attempts", ge=0
    )

    firebase_credentials: str | None = Field(
        default=None,
        description="Path to the Firebase service account JSON file",
    )
    firebase_project_id: str | None = Field(
        default=None, description="Firebase project id (read from the credentials when unset)"
    )
    fcm_ttl_seconds: int = Field(
        default=2_419_200, description="Time-to-live for push messages", ge=0
    )
    fcm_android_priority: str = Field(default="high")
    fcm_android_channel_id: str = Field(default="notifications")
    fcm_apns_sound: str = Field(default="default")
    fcm_apns_priority: str = Field(default="10")
    fcm_apns_badge: int = Field(default=1, ge=0)

    @model_validator(mode="after")
    def _validate_android_priority(self) -> "Settings":
        if self.fcm_android_priority not in {"high", "normal"}:
            raise ValueError("FCM_ANDROID_PRIORITY must be either 'high' or 'normal'")
        return self


@lru_cache
def get_settings() -> Settings:
    """Return cached application settings instance."""

    return Settings()


def reset_settings_cache() -> None:
    """Clear the settings cache to force reloading from the environment."""

    get_settings.cache_clear()


__all__ = ["Settings", "get_settings", "reset_settings_cache"]
