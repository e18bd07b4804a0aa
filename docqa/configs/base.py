"""
Shared settings base for docqa.

Every settings class inherits from here so all of them read the same
``.env`` file next to the process working directory; each subclass only
adds its own ``env_prefix``.

Dependencies: pydantic_settings
System role: Foundation for all configuration classes
"""

from pydantic import Field
from pydantic_settings import BaseSettings as PydanticBaseSettings, SettingsConfigDict

ENV_FILE = ".env"


def settings_config(env_prefix: str = "") -> SettingsConfigDict:
    """Config dict shared by every settings class, differing only by prefix."""
    return SettingsConfigDict(
        env_file=ENV_FILE,
        env_file_encoding="utf-8",
        env_prefix=env_prefix,
        case_sensitive=False,
        extra="ignore",
    )


class BaseSettings(PydanticBaseSettings):
    """Process-level settings shared by the application."""

    model_config = settings_config()

    environment: str = Field(
        default="development",
        description="Deployment environment name, reported in startup logs",
    )
    debug: bool = Field(
        default=False,
        description="FastAPI debug mode (tracebacks in 500 responses)",
    )
    log_level: str = Field(
        default="INFO",
        description="Root log level passed to configure_logging",
    )
