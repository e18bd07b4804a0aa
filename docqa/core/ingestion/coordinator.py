"""
Ingestion coordinator.

Chunk, embed, store, then mark the document vectorized. The flag flips
only after every chunk row is committed, so a partially ingested
document is never offered for questions. Rows written before a failure
are left in place and reported through IngestionError.chunk_count.

Dependencies: docqa.core.ingestion.chunking, docqa.core.embeddings, docqa.boundary
System role: Document ingestion pipeline orchestrator
"""

import asyncio
import logging
import time
from collections.abc import Sequence
from typing import Protocol

from pydantic import BaseModel

from docqa.boundary.db.registry import DocumentRegistry
from docqa.boundary.vdb.vector_schemas import SchemaSyncResult
from docqa.core.exceptions import DocumentNotFoundError, IngestionError
from docqa.core.ingestion.chunking import ChunkingTask

logger = logging.getLogger(__name__)


class IngestionResult(BaseModel):
    """Outcome of a completed ingestion."""

    document_id: str
    chunk_count: int
    processing_time_ms: float


class IngestionChunkStore(Protocol):
    async def insert(self, content: str, metadata: dict, embedding: Sequence[float]) -> int: ...

    async def sync_schema(self) -> SchemaSyncResult: ...


class ChunkEmbedder(Protocol):
    async def embed_one(self, text: str) -> list[float]: ...

    async def embed_many(self, texts: Sequence[str], concurrency: int = 1) -> list[list[float]]: ...


class IngestionCoordinator:
    """
    Runs the ingestion pipeline for one document at a time.

    The chunk table schema is synced once per process, before the first
    ingestion, under an asyncio.Lock.
    """

    def __init__(
        self,
        store: IngestionChunkStore,
        registry: DocumentRegistry,
        embedder: ChunkEmbedder,
        chunker: ChunkingTask | None = None,
        embedding_concurrency: int = 1,
    ) -> None:
        """
        Initialize coordinator.

        Args:
            store: Chunk store
            registry: Document registry
            embedder: Embedding provider
            chunker: Text splitter (defaults to 1000/200)
            embedding_concurrency: Chunks embedded concurrently; 1 embeds
                each chunk right before inserting it
        """
        self._store = store
        self._registry = registry
        self._embedder = embedder
        self._chunker = chunker or ChunkingTask()
        self._embedding_concurrency = max(1, embedding_concurrency)
        self._schema_lock = asyncio.Lock()
        self._schema_synced = False

    async def ensure_schema(self) -> None:
        """Sync the chunk table schema once per process; failures are warnings only."""
        if self._schema_synced:
            return
        async with self._schema_lock:
            if self._schema_synced:
                return
            result = await self._store.sync_schema()
            for warning in result.warnings:
                logger.warning(f"{__name__}:ensure_schema - {warning}")
            self._schema_synced = True

    async def ingest(self, document_id: str, raw_text: str) -> IngestionResult:
        """
        Ingest a document's extracted text.

        Args:
            document_id: Registry document id
            raw_text: Extracted text

        Returns:
            IngestionResult: Chunk count and elapsed time

        Raises:
            DocumentNotFoundError: Unknown document
            IngestionError: No chunks, or insert k failed (chunk_count = k-1)
        """
        started = time.perf_counter()

        document = await self._registry.get_by_id(document_id)
        if document is None:
            raise DocumentNotFoundError(document_id)

        await self.ensure_schema()

        chunks = self._chunker.chunk(raw_text, document_id, document.original_name)
        if not chunks:
            raise IngestionError(
                "Document text produced no chunks",
                document_id=document_id,
                chunk_count=0,
            )

        logger.info(f"{__name__}:ingest - Ingesting {len(chunks)} chunks for {document_id}")

        texts = [chunk.page_content for chunk in chunks]
        precomputed: list[list[float]] | None = None
        if self._embedding_concurrency > 1:
            precomputed = await self._embedder.embed_many(texts, concurrency=self._embedding_concurrency)

        stored = 0
        for index, chunk in enumerate(chunks):
            if precomputed is not None:
                embedding = precomputed[index]
            else:
                embedding = await self._embedder.embed_one(chunk.page_content)

            try:
                await self._store.insert(chunk.page_content, chunk.metadata, embedding)
            except Exception as e:
                logger.error(
                    f"{__name__}:ingest - Insert of chunk {index + 1}/{len(chunks)} failed "
                    f"for {document_id}; {stored} chunks stored: {e}"
                )
                raise IngestionError(
                    f"Failed to store chunk {index + 1} of {len(chunks)}: {e}",
                    document_id=document_id,
                    chunk_count=stored,
                ) from e
            stored += 1

        await self._registry.mark_vectorized(document_id)

        elapsed_ms = (time.perf_counter() - started) * 1000
        logger.info(
            f"{__name__}:ingest - Document {document_id} vectorized: "
            f"{stored} chunks in {elapsed_ms:.0f}ms"
        )
        return IngestionResult(
            document_id=document_id,
            chunk_count=stored,
            processing_time_ms=round(elapsed_ms, 2),
        )
