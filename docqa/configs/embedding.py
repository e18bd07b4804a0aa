"""
Embedding backend configuration settings.

Settings for the local model backend (Ollama-compatible HTTP API) that the
embedding cascade calls, plus the hashing fallback parameters.

Dependencies: pydantic, pydantic_settings
System role: Embedding provider configuration
"""

from pydantic import Field

from docqa.configs.base import BaseSettings, settings_config


class EmbeddingSettings(BaseSettings):
    """Embedding provider configuration."""

    model_config = settings_config("EMBEDDING_")

    base_url: str = Field(
        default="http://localhost:11434",
        description="Base URL of the local model backend",
    )
    model: str = Field(default="llama2", description="Model used for embeddings")
    timeout_seconds: float = Field(
        default=120.0,
        gt=0,
        description="Per-request timeout for embedding calls",
    )
    max_attempts: int = Field(
        default=2,
        ge=1,
        description="Attempts per strategy on transport errors",
    )
    llm_vector_length: int = Field(
        default=64,
        gt=0,
        description="Length of the float array requested from chat/generate endpoints",
    )
    hash_top_words: int = Field(
        default=100,
        gt=0,
        description="Most frequent words kept by the hashing fallback",
    )
    hash_positions_per_word: int = Field(
        default=16,
        gt=0,
        description="Vector positions each word contributes to in the hashing fallback",
    )
