"""Application configuration using Pydantic Settings."""

from functools import lru_cache
from urllib.parse import urlparse

from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Client settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
    )

    # App settings
    app_name: str = "NuSong Client"
    debug: bool = False

    # Backend
    api_base_url: str = "http://localhost:5000"
    request_timeout: float = 30.0

    # Generation polling
    music_poll_interval: float = 3.0
    image_poll_interval: float = 2.0
    poll_max_attempts: int = 30  # 0 or negative disables the ceiling

    # Auth redirects
    login_path: str = "/auth"
    admin_login_path: str = "/admin/login"
    auth_redirect_delay: float = 0.5

    @field_validator("api_base_url")
    @classmethod
    def validate_api_base_url(cls, v: str) -> str:
        """Validate that the backend URL is an absolute http(s) URL."""
        v = v.strip()
        if not v:
            raise ValueError("API_BASE_URL is required")

        parsed = urlparse(v)
        if parsed.scheme not in ("http", "https") or not parsed.netloc:
            raise ValueError("API_BASE_URL must be an absolute http(s) URL")

        return v.rstrip("/")

    @field_validator("music_poll_interval", "image_poll_interval")
    @classmethod
    def validate_poll_interval(cls, v: float) -> float:
        """Poll intervals must be positive."""
        if v <= 0:
            raise ValueError("Poll intervals must be greater than zero")
        return v

    @property
    def poll_ceiling(self) -> int | None:
        """Attempt ceiling for pollers, or None when polling is unbounded."""
        return self.poll_max_attempts if self.poll_max_attempts > 0 else None

    def validate_runtime_config(self) -> list[str]:
        """Validate runtime configuration and return warnings."""
        warnings = []

        if self.poll_ceiling is None:
            warnings.append(
                "POLL_MAX_ATTEMPTS is disabled - generation polling will run until cancelled"
            )

        parsed = urlparse(self.api_base_url)
        if parsed.scheme == "http" and parsed.hostname not in ("localhost", "127.0.0.1"):
            warnings.append("API_BASE_URL uses plain HTTP - session cookies are sent unencrypted")

        # Warn about debug mode in production
        if self.debug:
            warnings.append("DEBUG mode is enabled - should be disabled in production")

        return warnings


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
