"""
Relevance retrieval: direct metadata lookup with vector-search fallback.
"""

from docqa.core.retrieval.retriever import RelevanceRetriever
from docqa.core.retrieval.scoring import (
    coerce_metadata,
    loosely_matches_document,
    metadata_matches_document,
    query_terms,
    score_chunks,
)

__all__ = [
    "RelevanceRetriever",
    "coerce_metadata",
    "loosely_matches_document",
    "metadata_matches_document",
    "query_terms",
    "score_chunks",
]
