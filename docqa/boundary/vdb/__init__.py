"""
Vector database boundary module.

pgvector-backed chunk store and its schemas.
"""

from docqa.boundary.vdb.chunk_store import PgVectorChunkStore, build_chunk_table
from docqa.boundary.vdb.vector_schemas import (
    ChunkMatch,
    ChunkRecord,
    SchemaSyncResult,
    ScoredChunk,
    StoreSetupStatus,
    TableStats,
    coerce_metadata,
)

__all__ = [
    "ChunkMatch",
    "ChunkRecord",
    "PgVectorChunkStore",
    "SchemaSyncResult",
    "ScoredChunk",
    "StoreSetupStatus",
    "TableStats",
    "build_chunk_table",
    "coerce_metadata",
]
