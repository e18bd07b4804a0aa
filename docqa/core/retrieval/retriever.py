"""
Relevance retriever.

Two tiers. Tier 1 reads every chunk tagged with the document id and ranks
them by query-term frequency; when it finds anything, vector search is
skipped. Tier 2 embeds the question and runs a cosine-similarity search,
post-filtering rows to the document. Metadata tagging has changed over
time, so both tiers accept documentId, document_id and id.

Dependencies: docqa.boundary.vdb, docqa.boundary.db, docqa.core.embeddings
System role: Question-to-chunks resolution for answer generation
"""

import logging
import time
from typing import Protocol

from docqa.boundary.db.registry import DocumentRegistry
from docqa.boundary.vdb.vector_schemas import ChunkMatch, ChunkRecord, ScoredChunk
from docqa.core.embeddings.resize import is_null_vector
from docqa.core.exceptions import (
    DocumentNotFoundError,
    DocumentNotVectorizedError,
    NoChunksFoundError,
    VectorStoreError,
)
from docqa.core.retrieval.scoring import metadata_matches_document, score_chunks
from docqa.observability.log_utils import log_retrieval_event

logger = logging.getLogger(__name__)

TIER_DIRECT = "direct_lookup"
TIER_VECTOR = "vector_search"


class RetrievalChunkStore(Protocol):
    async def find_by_document_id(self, document_id: str, limit: int = 100) -> list[ChunkRecord]: ...

    async def similarity_search(
        self,
        query_vector: list[float],
        k: int,
        threshold: float = 0.0,
        metadata_filter: dict | None = None,
    ) -> list[ScoredChunk]: ...


class QuestionEmbedder(Protocol):
    async def embed_one(self, text: str) -> list[float]: ...


class RelevanceRetriever:
    """Resolves a question against one document's chunks."""

    def __init__(
        self,
        store: RetrievalChunkStore,
        registry: DocumentRegistry,
        embedder: QuestionEmbedder,
        tier1_row_limit: int = 100,
        similarity_threshold: float = 0.1,
    ) -> None:
        """
        Initialize retriever.

        Args:
            store: Chunk store
            registry: Document registry for existence/vectorized checks
            embedder: Embedding provider used by the vector fallback
            tier1_row_limit: Maximum rows read by the direct lookup
            similarity_threshold: Minimum cosine similarity for the fallback
        """
        self._store = store
        self._registry = registry
        self._embedder = embedder
        self._tier1_row_limit = tier1_row_limit
        self._similarity_threshold = similarity_threshold

    async def find_relevant(
        self,
        document_id: str,
        question: str,
        top_k: int = 5,
    ) -> list[ChunkMatch]:
        """
        Return the most relevant chunks of a document for a question.

        Args:
            document_id: Registry document id
            question: User question
            top_k: Maximum chunks returned

        Returns:
            list[ChunkMatch]: 1..top_k chunks

        Raises:
            DocumentNotFoundError: Unknown document
            DocumentNotVectorizedError: Ingestion has not completed
            NoChunksFoundError: Both tiers found nothing
        """
        started = time.perf_counter()

        document = await self._registry.get_by_id(document_id)
        if document is None:
            raise DocumentNotFoundError(document_id)
        if not document.vectorized:
            raise DocumentNotVectorizedError(document_id)

        rows = await self._direct_lookup(document_id)
        if rows:
            ranked = score_chunks(rows, question, top_k)
            log_retrieval_event(
                logger, document_id, TIER_DIRECT, len(rows), len(ranked),
                (time.perf_counter() - started) * 1000,
            )
            return [row.to_match() for row in ranked]

        logger.info(
            f"{__name__}:find_relevant - No tagged chunks for {document_id}, "
            "falling back to vector search"
        )
        matches = await self._vector_fallback(document_id, question, top_k)
        log_retrieval_event(
            logger, document_id, TIER_VECTOR, len(matches), len(matches),
            (time.perf_counter() - started) * 1000,
        )
        return matches

    async def _direct_lookup(self, document_id: str) -> list[ChunkRecord]:
        try:
            return await self._store.find_by_document_id(document_id, limit=self._tier1_row_limit)
        except VectorStoreError as e:
            logger.warning(f"{__name__}:_direct_lookup - Direct lookup failed, treating as empty: {e}")
            return []

    async def _vector_fallback(
        self,
        document_id: str,
        question: str,
        top_k: int,
    ) -> list[ChunkMatch]:
        query_vector = await self._embedder.embed_one(question)
        if is_null_vector(query_vector):
            raise NoChunksFoundError(document_id, reason="question embedding unavailable")

        try:
            rows = await self._store.similarity_search(
                query_vector,
                k=top_k * 2,
                threshold=self._similarity_threshold,
            )
        except VectorStoreError as e:
            logger.error(f"{__name__}:_vector_fallback - Similarity search failed: {e}")
            raise NoChunksFoundError(document_id, reason="similarity search failed") from e

        matches = [
            row.to_match()
            for row in rows
            if metadata_matches_document(row.metadata, document_id)
        ][:top_k]

        if not matches:
            raise NoChunksFoundError(document_id, reason="no similar chunks for document")
        return matches
