"""
Embedding cascade.

Exports the provider plus the pure helpers (resizing, null-vector check,
hashing fallback) used by retrieval and tests.
"""

from docqa.core.embeddings.hashing import pseudo_embedding, string_hash
from docqa.core.embeddings.provider import EmbeddingProvider
from docqa.core.embeddings.resize import is_null_vector, resize_embedding
from docqa.core.embeddings.response_parser import (
    EmbeddingResponseParser,
    extract_vector_from_text,
)

__all__ = [
    "EmbeddingProvider",
    "EmbeddingResponseParser",
    "extract_vector_from_text",
    "is_null_vector",
    "pseudo_embedding",
    "resize_embedding",
    "string_hash",
]
