"""
cf_sdk.tier0_core.config
─────────────────────────
Typed SDK settings with env layering. Reads from .env → environment
variables. All fields are typed via Pydantic; credentials are SecretStr so
they never appear in logs or reprs.

Minimal stack: pydantic-settings + python-dotenv
All env vars are prefixed with CF_.
"""
from __future__ import annotations

from functools import lru_cache

from pydantic import Field, SecretStr, field_validator, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class SdkSettings(BaseSettings):
    """
    Endpoints, credentials and policy knobs for the client and the
    operations layer.
    """

    model_config = SettingsConfigDict(
        env_prefix="CF_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # ── Endpoints ─────────────────────────────────────────────────────────────
    api_url: str = "https://api.local.pcfdev.io"
    uaa_url: str | None = None
    log_cache_url: str | None = None

    # ── Credentials ───────────────────────────────────────────────────────────
    token: SecretStr | None = None
    client_id: str = "cf"
    client_secret: SecretStr = Field(default=SecretStr(""))

    # ── Transport ─────────────────────────────────────────────────────────────
    skip_ssl_validation: bool = False
    request_timeout: float = 30.0
    max_attempts: int = 3

    # ── Job polling ───────────────────────────────────────────────────────────
    job_poll_min_wait: float = 1.0
    job_poll_max_wait: float = 15.0
    job_completion_timeout: float = 300.0

    # ── Logging ───────────────────────────────────────────────────────────────
    log_level: str = "INFO"
    log_format: str = "json"

    # ── Error reporting ───────────────────────────────────────────────────────
    error_backend: str = "none"

    @field_validator("api_url", "uaa_url", "log_cache_url")
    @classmethod
    def strip_trailing_slash(cls, v: str | None) -> str | None:
        return v.rstrip("/") if v else v

    @field_validator("log_format")
    @classmethod
    def validate_log_format(cls, v: str) -> str:
        allowed = {"json", "console"}
        if v.lower() not in allowed:
            raise ValueError(f"log_format must be one of {allowed}, got {v!r}")
        return v.lower()

    @model_validator(mode="after")
    def check_poll_window(self) -> "SdkSettings":
        if self.job_poll_min_wait > self.job_poll_max_wait:
            raise ValueError("job_poll_min_wait must not exceed job_poll_max_wait")
        return self

    @property
    def resolved_uaa_url(self) -> str:
        """UAA endpoint; defaults to the conventional uaa.<system domain> host."""
        if self.uaa_url:
            return self.uaa_url
        return _sibling_host(self.api_url, "uaa")

    @property
    def resolved_log_cache_url(self) -> str:
        if self.log_cache_url:
            return self.log_cache_url
        return _sibling_host(self.api_url, "log-cache")


def _sibling_host(api_url: str, prefix: str) -> str:
    scheme, _, host = api_url.partition("://")
    if host.startswith("api."):
        host = host[len("api."):]
    return f"{scheme}://{prefix}.{host}"


@lru_cache(maxsize=1)
def get_settings() -> SdkSettings:
    """
    Return the singleton SDK settings. Cached after first call.
    Call _reset_settings() in tests to pick up new env vars.
    """
    return SdkSettings()


def _reset_settings() -> None:
    """For tests — clear the settings cache."""
    get_settings.cache_clear()


__all__ = ["SdkSettings", "get_settings"]
