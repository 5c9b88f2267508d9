"""jwtdemo Configuration - environment-driven settings."""

import secrets
from functools import lru_cache
from typing import Literal

from pydantic import Field, PrivateAttr, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables (or a .env file)."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    app_name: str = "jwtdemo"
    app_version: str = "0.1.0"
    debug: bool = False

    log_level: str = "INFO"
    log_format: Literal["structured", "dev"] = "dev"

    # Token signing
    jwt_secret_key: str | None = None
    jwt_algorithm: str = "HS256"
    jwt_access_token_expire_minutes: int = Field(3, ge=1)

    # Routes
    api_prefix: str = "/api"

    # Login throttling (failed attempts per client IP)
    login_rate_limit_attempts: int = Field(5, ge=1)
    login_rate_limit_window_seconds: int = Field(60, ge=1)

    # Client session manager
    client_base_url: str = "http://localhost:3000"
    client_sweep_interval_seconds: float = Field(60.0, gt=0)
    client_token_file: str | None = None

    _generated_secret: str = PrivateAttr(default_factory=lambda: secrets.token_hex(32))

    @field_validator("jwt_secret_key")
    @classmethod
    def validate_jwt_secret_key(cls, v: str | None) -> str | None:
        """HMAC secrets shorter than 32 characters are rejected."""
        if v is not None and len(v) < 32:
            raise ValueError(
                "JWT_SECRET_KEY must be at least 32 characters. "
                'Generate one with: python -c "import secrets; print(secrets.token_hex(32))"'
            )
        return v

    @field_validator("api_prefix")
    @classmethod
    def normalize_api_prefix(cls, v: str) -> str:
        v = v.strip().rstrip("/")
        if v and not v.startswith("/"):
            v = "/" + v
        return v

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        level = v.upper()
        if level not in {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}:
            raise ValueError(f"Invalid log level: {v}")
        return level

    @property
    def effective_jwt_secret_key(self) -> str:
        """Configured secret, or a random one that lives as long as this process."""
        return self.jwt_secret_key or self._generated_secret

    @property
    def access_token_ttl_seconds(self) -> int:
        return self.jwt_access_token_expire_minutes * 60

    def check_security_configuration(self) -> list[str]:
        """Return human-readable warnings about risky configuration."""
        warnings: list[str] = []
        if self.jwt_secret_key is None:
            warnings.append(
                "JWT_SECRET_KEY is not set; using an ephemeral secret. "
                "Issued tokens will not survive a restart."
            )
        if self.debug:
            warnings.append("DEBUG is enabled; API docs are exposed.")
        return warnings


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()


settings = get_settings()
