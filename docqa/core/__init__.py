"""
Core business logic module.

Embedding cascade, retrieval, answer synthesis and ingestion, plus the
exception hierarchy they share.
"""

from docqa.core.exceptions import (
    DocQAException,
    DocumentNotFoundError,
    DocumentNotVectorizedError,
    EmbeddingError,
    EmbeddingParseError,
    IngestionError,
    NoChunksFoundError,
    VectorStoreError,
)

__all__ = [
    "DocQAException",
    "DocumentNotFoundError",
    "DocumentNotVectorizedError",
    "EmbeddingError",
    "EmbeddingParseError",
    "IngestionError",
    "NoChunksFoundError",
    "VectorStoreError",
]
