"""
Chunk store schemas.

Pydantic models for rows read from and written to the pgvector chunk
table, plus status reports for schema sync and setup checks.

Dependencies: pydantic
System role: Type definitions for chunk store operations
"""

import json
from typing import Any

from pydantic import BaseModel, Field, field_validator


def coerce_metadata(value: Any) -> dict[str, Any]:
    """
    Coerce stored metadata into a dict.

    Rows may carry metadata as a JSON string depending on driver and
    query shape. Anything that does not decode to an object becomes {}.
    """
    if isinstance(value, dict):
        return value
    if isinstance(value, (str, bytes)):
        try:
            decoded = json.loads(value)
        except ValueError:
            return {}
        return decoded if isinstance(decoded, dict) else {}
    return {}


class ChunkMatch(BaseModel):
    """Chunk as returned to callers and exposed as an answer source."""

    content: str = Field(description="Chunk text content")
    metadata: dict[str, Any] = Field(default_factory=dict, description="Chunk metadata tags")

    @field_validator("metadata", mode="before")
    @classmethod
    def validate_metadata(cls, value: Any) -> dict[str, Any]:
        return coerce_metadata(value)


class ChunkRecord(ChunkMatch):
    """Stored chunk row."""

    id: int = Field(description="Row id (BIGSERIAL)")

    def to_match(self) -> ChunkMatch:
        return ChunkMatch(content=self.content, metadata=self.metadata)


class ScoredChunk(ChunkRecord):
    """Row returned by vector similarity search."""

    similarity: float = Field(description="Cosine similarity, 1 - cosine distance")


class TableStats(BaseModel):
    """Chunk table statistics."""

    total_chunks: int = 0
    distinct_documents: int = 0
    null_vector_chunks: int = Field(
        default=0,
        description="Rows whose embedding has zero norm (stored after total embedding failure)",
    )


class SchemaSyncResult(BaseModel):
    """Outcome of an idempotent schema sync; failures are reported, not raised."""

    ok: bool = True
    steps_completed: list[str] = Field(default_factory=list)
    warnings: list[str] = Field(default_factory=list)


class StoreSetupStatus(BaseModel):
    """Readiness of the chunk store."""

    connected: bool = False
    vector_extension: bool = False
    table_exists: bool = False
    missing_columns: list[str] = Field(default_factory=list)
    error: str | None = None

    @property
    def ready(self) -> bool:
        return (
            self.connected
            and self.vector_extension
            and self.table_exists
            and not self.missing_columns
            and self.error is None
        )
