"""
Language model configuration settings.

Dependencies: pydantic, pydantic_settings
System role: Chat completion backend configuration
"""

from typing import Literal

from pydantic import Field

from docqa.configs.base import BaseSettings, settings_config


class LLMSettings(BaseSettings):
    """Chat model configuration."""

    model_config = settings_config("LLM_")

    provider: Literal["ollama", "google"] = Field(
        default="ollama",
        description="Chat model provider",
    )
    model: str = Field(default="llama2", description="Chat model identifier")
    base_url: str = Field(
        default="http://localhost:11434",
        description="Base URL for the ollama provider",
    )
    temperature: float = Field(default=0.2, ge=0.0, le=2.0)
    timeout_seconds: float = Field(
        default=60.0,
        gt=0,
        description="Upper bound for a single answer generation",
    )
