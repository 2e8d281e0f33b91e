"""Configuration management for exprkit.

This module uses Pydantic Settings to load and validate configuration from
environment variables and .env files. Settings are read once and cached;
evaluators capture the values they need when they are constructed.
"""

import json
from functools import lru_cache
from typing import Annotated, Literal

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, NoDecode, SettingsConfigDict


class Settings(BaseSettings):
    """Engine configuration settings.

    Settings are loaded from environment variables prefixed with
    ``EXPRKIT_`` and from a local .env file.
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        env_prefix="EXPRKIT_",
        case_sensitive=False,
        extra="ignore",
    )

    # Application Settings
    app_name: str = "exprkit"
    environment: Literal["development", "production", "testing"] = "development"

    # Logging Settings
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = "INFO"
    log_format: Literal["json", "console"] = "json"

    # Evaluator Settings
    max_depth: int = Field(
        default=50,
        description="Maximum nesting depth of an expression tree during evaluation",
    )
    eager_logic: bool = Field(
        default=False,
        description="Evaluate every argument of and/or/if instead of short-circuiting",
    )

    # Sandbox Settings
    sandbox_max_depth: int = 10
    sandbox_max_operations: int = 100
    sandbox_timeout_ms: int = 100
    sandbox_allowed_operations: Annotated[list[str] | None, NoDecode] = Field(
        default=None,
        description="Operation names a sandboxed evaluation may call (None = all)",
    )

    @field_validator("max_depth", "sandbox_max_depth", "sandbox_max_operations", "sandbox_timeout_ms")
    @classmethod
    def validate_positive(cls, v: int) -> int:
        """Reject limits that would make every evaluation fail."""
        if v <= 0:
            raise ValueError("must be a positive integer")
        return v

    @field_validator("sandbox_allowed_operations", mode="before")
    @classmethod
    def parse_allowed_operations(cls, v: str | list[str] | None) -> list[str] | None:
        """Parse allowed operations from a comma-separated string or list."""
        if isinstance(v, str):
            if v.strip().startswith("["):
                return json.loads(v)
            return [name.strip() for name in v.split(",") if name.strip()]
        return v

    @property
    def is_production(self) -> bool:
        """Check if running in production environment."""
        return self.environment == "production"

    @property
    def is_development(self) -> bool:
        """Check if running in development environment."""
        return self.environment == "development"

    @property
    def is_testing(self) -> bool:
        """Check if running in testing environment."""
        return self.environment == "testing"


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance.

    Returns:
        Settings: Cached settings instance.
    """
    return Settings()
