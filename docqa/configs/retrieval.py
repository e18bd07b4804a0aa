"""
Retrieval and ingestion configuration settings.

Dependencies: pydantic, pydantic_settings
System role: Tunables for chunking, tier-1 lookup and vector fallback search
"""

from pydantic import Field, model_validator

from docqa.configs.base import BaseSettings, settings_config


class RetrievalSettings(BaseSettings):
    """Retriever and ingestion tunables."""

    model_config = settings_config("RETRIEVAL_")

    default_top_k: int = Field(default=5, ge=1, le=100)
    tier1_row_limit: int = Field(
        default=100,
        ge=1,
        description="Maximum rows fetched by the direct metadata lookup",
    )
    similarity_threshold: float = Field(
        default=0.1,
        ge=-1.0,
        le=1.0,
        description="Minimum cosine similarity for fallback vector search",
    )

    chunk_size: int = Field(default=1000, gt=0, description="Maximum chunk size in characters")
    chunk_overlap: int = Field(default=200, ge=0, description="Overlap between consecutive chunks")
    embedding_concurrency: int = Field(
        default=1,
        ge=1,
        description="Chunks embedded concurrently during ingestion (1 = sequential)",
    )

    @model_validator(mode="after")
    def check_overlap(self) -> "RetrievalSettings":
        if self.chunk_overlap >= self.chunk_size:
            raise ValueError("chunk_overlap must be smaller than chunk_size")
        return self
