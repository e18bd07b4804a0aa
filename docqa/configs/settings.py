"""
Unified application settings.

Aggregates all configuration modules into a single Settings class.
Provides a cached factory used once at process start.

Dependencies: All config modules
System role: Central configuration aggregator for the application
"""

from functools import lru_cache

from pydantic import Field

from docqa.configs.base import BaseSettings
from docqa.configs.database import DatabaseSettings
from docqa.configs.embedding import EmbeddingSettings
from docqa.configs.llm import LLMSettings
from docqa.configs.retrieval import RetrievalSettings
from docqa.configs.vector_store import VectorStoreSettings


class Settings(BaseSettings):
    """Unified application settings aggregating all config modules."""

    database: DatabaseSettings = Field(default_factory=DatabaseSettings)
    vector_store: VectorStoreSettings = Field(default_factory=VectorStoreSettings)
    embedding: EmbeddingSettings = Field(default_factory=EmbeddingSettings)
    llm: LLMSettings = Field(default_factory=LLMSettings)
    retrieval: RetrievalSettings = Field(default_factory=RetrievalSettings)


@lru_cache
def get_settings() -> Settings:
    """
    Get application settings singleton.

    Environment variables are loaded once; the result is handed to
    ServiceContainer.from_settings() at startup.

    Returns:
        Settings: Application settings instance

    Usage:
        from docqa.configs import get_settings
        settings = get_settings()
    """
    return Settings()
