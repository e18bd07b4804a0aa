"""
Document management service.

Lists, describes and deletes registered documents. Deletion removes the
document's chunks from the store before the registry row.

Dependencies: docqa.boundary.db, docqa.boundary.vdb
System role: Document lifecycle operations behind the documents API
"""

import logging
from collections.abc import Sequence
from typing import Any, Protocol

from docqa.boundary.db.registry import DocumentRecord, DocumentRegistry
from docqa.boundary.vdb.vector_schemas import ChunkRecord
from docqa.core.exceptions import DocumentNotFoundError

logger = logging.getLogger(__name__)

DELETE_BATCH_SIZE = 500
CHUNK_COUNT_LIMIT = 10_000


class DocumentChunkStore(Protocol):
    async def find_by_document_id(self, document_id: str, limit: int = 100) -> list[ChunkRecord]: ...

    async def find_by_metadata_filter(
        self, metadata_filter: dict[str, Any], limit: int = 100
    ) -> list[ChunkRecord]: ...

    async def delete_by_ids(self, ids: Sequence[int]) -> int: ...


class DocumentService:
    """Registry and chunk store operations for whole documents."""

    def __init__(self, registry: DocumentRegistry, store: DocumentChunkStore) -> None:
        self._registry = registry
        self._store = store

    async def list_documents(self) -> list[DocumentRecord]:
        return await self._registry.list_documents()

    async def get_document(self, document_id: str) -> tuple[DocumentRecord, int]:
        """
        Look a document up with the number of chunks stored for it.

        Returns:
            tuple: (record, chunk_count); chunk_count is capped at CHUNK_COUNT_LIMIT

        Raises:
            DocumentNotFoundError: Unknown document id
        """
        record = await self._registry.get_by_id(document_id)
        if record is None:
            raise DocumentNotFoundError(document_id)

        chunks = await self._store.find_by_metadata_filter(
            {"documentId": document_id}, limit=CHUNK_COUNT_LIMIT
        )
        return record, len(chunks)

    async def delete_document(self, document_id: str) -> int:
        """
        Delete a document's chunks, then its registry row.

        Steps:
        1. Validate document exists
        2. Delete its chunks in batches until none remain
        3. Delete the registry row

        Returns:
            int: Number of chunks deleted

        Raises:
            DocumentNotFoundError: Unknown document id
            VectorStoreError: Chunk lookup or delete failed; the registry row is kept
        """
        record = await self._registry.get_by_id(document_id)
        if record is None:
            raise DocumentNotFoundError(document_id)

        deleted = 0
        while True:
            batch = await self._store.find_by_document_id(document_id, limit=DELETE_BATCH_SIZE)
            if not batch:
                break
            removed = await self._store.delete_by_ids([chunk.id for chunk in batch])
            deleted += removed
            if removed == 0:
                logger.warning(
                    f"{__name__}:delete_document - No rows removed for {document_id}; stopping"
                )
                break

        await self._registry.delete(document_id)
        logger.info(f"{__name__}:delete_document - Deleted {document_id} with {deleted} chunks")
        return deleted
