"""Configuration management for clidax."""

from typing import Literal

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from clidax.schema import WILDCARD


class Settings(BaseSettings):
    """Settings for the command-line front end."""

    model_config = SettingsConfigDict(
        env_prefix="CLIDAX_",
        case_sensitive=False,
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # Logging Configuration
    log_level: str = Field(default="WARNING", description="Log level")
    log_profile: Literal["default", "rich"] = Field(default="default", description="Log sink profile")

    # Parsing Configuration
    wildcard: str = Field(default=WILDCARD, description="Schema name treated as the catch-all option in schema files")


def get_settings() -> Settings:
    """Get application settings.

    Returns:
        Settings instance
    """
    return Settings()
