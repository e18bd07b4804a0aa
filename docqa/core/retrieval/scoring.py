"""
Term-frequency relevance scoring and metadata matching.

Pure functions shared by the retriever and the answer synthesizer's
last-resort path.

Dependencies: None
System role: Ranking and document-tag matching for retrieved chunks
"""

import re
from collections.abc import Sequence
from typing import Any, TypeVar

from docqa.boundary.vdb.chunk_store import DOCUMENT_ID_KEYS
from docqa.boundary.vdb.vector_schemas import ChunkMatch, coerce_metadata

ChunkT = TypeVar("ChunkT", bound=ChunkMatch)

MIN_TERM_LENGTH = 3
_WORD = re.compile(r"\w+")

__all__ = [
    "coerce_metadata",
    "loosely_matches_document",
    "metadata_matches_document",
    "query_terms",
    "score_chunks",
    "score_content",
]


def query_terms(question: str) -> list[str]:
    """Lowercased words of at least three characters; punctuation is not part of a term."""
    return [word for word in _WORD.findall(question.lower()) if len(word) >= MIN_TERM_LENGTH]


def score_content(content: str, terms: Sequence[str]) -> int:
    """Sum of non-overlapping occurrences of each term in the lowercased content."""
    lowered = content.lower()
    return sum(len(re.findall(re.escape(term), lowered)) for term in terms)


def score_chunks(chunks: Sequence[ChunkT], question: str, top_k: int) -> list[ChunkT]:
    """
    Rank chunks by query-term frequency.

    Sort is stable, so equal scores keep retrieval order. With no
    qualifying terms the first top_k chunks are returned unscored.

    Args:
        chunks: Candidate chunks in retrieval order
        question: User question
        top_k: Maximum chunks returned

    Returns:
        list: At most top_k chunks, highest score first
    """
    terms = query_terms(question)
    if not terms:
        return list(chunks[:top_k])

    scored = [(score_content(chunk.content, terms), chunk) for chunk in chunks]
    scored.sort(key=lambda pair: pair[0], reverse=True)
    return [chunk for _, chunk in scored[:top_k]]


def metadata_matches_document(metadata: Any, document_id: str) -> bool:
    """True when any document-id alias in the metadata equals the id."""
    meta = coerce_metadata(metadata)
    return any(
        meta.get(key) is not None and str(meta.get(key)) == document_id
        for key in DOCUMENT_ID_KEYS
    )


def loosely_matches_document(metadata: Any, document_id: str) -> bool:
    """Alias equality, or documentId containing the id as a substring."""
    if metadata_matches_document(metadata, document_id):
        return True
    tagged = coerce_metadata(metadata).get("documentId")
    return tagged is not None and document_id in str(tagged)
