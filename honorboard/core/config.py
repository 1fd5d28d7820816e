"""
Application configuration via environment variables.

Uses pydantic-settings to load and validate configuration from .env files.
All sensitive values should be set via environment variables, never committed.
"""

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """
    Application settings loaded from environment variables.

    Settings are grouped by feature area. The honor board still serves demo
    data when Supabase is not configured.
    """

    # =========================================================================
    # General
    # =========================================================================
    ENV: str = Field(default="development")
    LOG_LEVEL: str = Field(default="INFO")

    # =========================================================================
    # Supabase Database
    # =========================================================================
    SUPABASE_URL: str | None = None
    SUPABASE_ANON_KEY: str | None = None
    SUPABASE_SERVICE_ROLE_KEY: str | None = None

    # =========================================================================
    # Honor Board
    # =========================================================================
    # Simulated latency of the demo path, in seconds
    DEMO_DELAY_SECONDS: float = 0.8

    # Reward shown on every board; a policy constant, not computed per user
    TOTAL_REWARD: int = 9_999_999

    # Optional per-query timeout; unset means wait for the store indefinitely
    QUERY_TIMEOUT_SECONDS: float | None = None

    DEMO_AVATAR_URL: str = "/lovable-avatar.jpg"

    # =========================================================================
    # Session Guard
    # =========================================================================
    LOGIN_PATH: str = "/auth"

    # =========================================================================
    # Validators
    # =========================================================================

    @field_validator("QUERY_TIMEOUT_SECONDS", mode="before")
    @classmethod
    def _blank_to_none_float(cls, v):
        """Convert blank string to None for optional float fields."""
        if v is None or (isinstance(v, str) and not v.strip()):
            return None
        return v

    @field_validator("DEMO_DELAY_SECONDS", mode="before")
    @classmethod
    def _demo_delay(cls, v):
        """Use default delay for blank values and clamp negatives to zero."""
        if v is None or (isinstance(v, str) and not v.strip()):
            return 0.8
        try:
            fv = float(v)
        except Exception:
            return 0.8
        return max(0.0, fv)

    @field_validator("TOTAL_REWARD", mode="before")
    @classmethod
    def _total_reward(cls, v):
        """Use default reward for blank values; reward is never negative."""
        if v is None or (isinstance(v, str) and not v.strip()):
            return 9_999_999
        try:
            iv = int(v)
        except Exception:
            return 9_999_999
        return max(0, iv)

    @field_validator("LOGIN_PATH", "DEMO_AVATAR_URL", mode="before")
    @classmethod
    def _blank_path_default(cls, v, info):
        """Use the field default for blank path values."""
        if v is None or (isinstance(v, str) and not v.strip()):
            return {"LOGIN_PATH": "/auth", "DEMO_AVATAR_URL": "/lovable-avatar.jpg"}[info.field_name]
        return v

    @field_validator(
        "SUPABASE_URL",
        "SUPABASE_ANON_KEY",
        "SUPABASE_SERVICE_ROLE_KEY",
        mode="before",
    )
    @classmethod
    def _blank_to_none_str(cls, v):
        """Convert blank strings to None for optional string fields."""
        if v is None or (isinstance(v, str) and not v.strip()):
            return None
        return v

    # =========================================================================
    # Model Configuration
    # =========================================================================
    model_config = SettingsConfigDict(env_file=".env", extra="ignore")


settings = Settings()
