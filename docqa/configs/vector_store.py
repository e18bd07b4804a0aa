"""
Vector store configuration settings.

Manages the pgvector chunk table: its name, the store-wide embedding
dimensionality and index tuning.

Dependencies: pydantic, pydantic_settings
System role: Chunk store configuration for RAG retrieval
"""

import re

from pydantic import Field, field_validator

from docqa.configs.base import BaseSettings, settings_config

_IDENTIFIER = re.compile(r"^[A-Za-z_][A-Za-z0-9_]{0,62}$")


class VectorStoreSettings(BaseSettings):
    """pgvector chunk store configuration."""

    model_config = settings_config("VECTOR_STORE_")

    table_name: str = Field(
        default="documents",
        description="Table holding (id, content, metadata, embedding) chunk rows",
    )
    embedding_dimension: int = Field(
        default=1536,
        gt=0,
        description="Store-wide embedding dimensionality (resize target for every backend)",
    )
    ivfflat_lists: int = Field(
        default=100,
        gt=0,
        description="Number of lists for the ivfflat cosine index",
    )

    @field_validator("table_name")
    @classmethod
    def validate_table_name(cls, value: str) -> str:
        """Table and index names derive from this; only plain SQL identifiers are accepted."""
        if not _IDENTIFIER.match(value):
            raise ValueError(f"Invalid table name: {value!r}")
        return value
