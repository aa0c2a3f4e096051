"""Central runtime configuration for votehook."""

from __future__ import annotations

from functools import lru_cache

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    env: str = "development"
    log_level: str = "INFO"
    app_name: str = "votehook"
    app_version: str = "0.1.0"
    vote_webhook_path: str = "/webhooks/votes"
    vote_webhook_password: str = ""
    vote_webhook_auth_header: str = "Authorization"
    vote_webhook_require_auth: bool = True
    sentry_dsn: str = ""
    sentry_traces_sample_rate: float = 0.0
    metrics_enabled: bool = True

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )


def _validate(settings: Settings) -> Settings:
    is_production = settings.env.lower() in {"prod", "production"}
    if is_production and settings.vote_webhook_require_auth and not settings.vote_webhook_password.strip():
        raise ValueError("Missing required production secrets/config: VOTE_WEBHOOK_PASSWORD.")
    if not settings.vote_webhook_path.startswith("/"):
        raise ValueError("VOTE_WEBHOOK_PATH must start with '/'.")
    if not settings.vote_webhook_auth_header.strip():
        raise ValueError("VOTE_WEBHOOK_AUTH_HEADER must not be empty.")
    if settings.sentry_traces_sample_rate < 0 or settings.sentry_traces_sample_rate > 1:
        raise ValueError("SENTRY_TRACES_SAMPLE_RATE must be between 0 and 1.")
    return settings


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Return validated settings as a cached singleton."""

    return _validate(Settings())
