"""
Centralized settings management using pydantic-settings.

All environment variables and configuration values are defined here.
Use get_settings() to access the singleton settings instance.
"""

import os
from functools import lru_cache
from pathlib import Path
from typing import List, Optional

from pydantic import AliasChoices, Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """
    Application settings loaded from environment variables.

    Required for analysis requests:
        - OPENAI_API_KEY (or API_KEY): credential for the vision model

    Optional environment variables:
        - HOST: Server host (default: 0.0.0.0)
        - PORT: Server port (default: 8080)
        - ANALYSIS_MODEL: Vision model name (default: gpt-4o-mini)
        - ANALYSIS_TIMEOUT_SECONDS: Timeout for one analysis call
        - DEFAULT_LANGUAGE: uk, en or ru (default: uk)
        - ENVIRONMENT: Environment name (development, staging, production)
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
        populate_by_name=True,
    )

    # ==========================================================================
    # Environment
    # ==========================================================================
    environment: str = Field(default="development", description="Environment name")
    debug: bool = Field(default=False, description="Debug mode")

    @property
    def is_development(self) -> bool:
        return self.environment.lower() in ("development", "dev", "local")

    @property
    def is_production(self) -> bool:
        return self.environment.lower() in ("production", "prod")

    # ==========================================================================
    # Server Configuration
    # ==========================================================================
    host: str = Field(default="0.0.0.0", description="Server host")
    port: int = Field(default=8080, description="Server port")

    cors_origins: List[str] = Field(
        default=[
            "http://localhost:3000",
            "http://localhost:5173",
            "http://127.0.0.1:3000",
            "http://127.0.0.1:5173",
        ],
        description="Allowed CORS origins"
    )

    @field_validator("cors_origins", mode="before")
    @classmethod
    def parse_cors_origins(cls, v):
        if isinstance(v, str):
            return [origin.strip() for origin in v.split(",") if origin.strip()]
        return v

    # ==========================================================================
    # Vision Model (size analysis)
    # ==========================================================================
    openai_api_key: str = Field(
        default="",
        validation_alias=AliasChoices("openai_api_key", "api_key"),
        description="API key for the vision model. Analysis refuses to run without it."
    )
    analysis_model: str = Field(
        default="gpt-4o-mini",
        description="Vision-capable chat model used for size analysis"
    )
    analysis_temperature: float = Field(
        default=0.4,
        ge=0.0,
        le=2.0,
        description="Sampling temperature for the analysis call"
    )
    analysis_max_tokens: int = Field(
        default=800,
        description="Upper bound on tokens in the structured answer"
    )
    analysis_timeout_seconds: Optional[float] = Field(
        default=60.0,
        description="Timeout for one analysis call (seconds). No retries are made."
    )

    @property
    def has_api_key(self) -> bool:
        return bool(self.openai_api_key.strip())

    # ==========================================================================
    # Application
    # ==========================================================================
    default_language: str = Field(
        default="uk",
        description="Initial UI / reasoning language (uk, en, ru)"
    )

    @field_validator("default_language", mode="before")
    @classmethod
    def parse_default_language(cls, v):
        if isinstance(v, str):
            v = v.strip().lower()
            if v not in ("uk", "en", "ru"):
                raise ValueError(f"Unsupported language: {v}")
        return v

    session_ttl_seconds: int = Field(
        default=86400,
        description="Idle sessions are dropped after this many seconds (24 hours)"
    )


@lru_cache
def get_settings() -> Settings:
    """
    Get the application settings singleton.

    Uses lru_cache to ensure only one instance is created.
    Settings are loaded from environment variables and .env file.

    Returns:
        Settings: The application settings instance
    """
    # Try to find .env file in project root
    env_file = Path(__file__).parent.parent.parent / ".env"
    if env_file.exists():
        os.environ.setdefault("ENV_FILE", str(env_file))

    return Settings(_env_file=env_file if env_file.exists() else None)


def get_settings_for_testing(**overrides) -> Settings:
    """
    Create a settings instance for testing with optional overrides.

    This bypasses the cache to allow different settings in tests.

    Args:
        **overrides: Setting values to override

    Returns:
        Settings: A new settings instance with overrides applied
    """
    test_defaults = {
        "openai_api_key": "test-key",
        "environment": "testing",
        "debug": True,
    }
    test_defaults.update(overrides)

    return Settings(_env_file=None, **test_defaults)
