"""
Document registry.

The core depends only on the DocumentRegistry protocol: look a document
up, flip its vectorized flag, register, list or delete one. SqlDocumentRegistry is
the SQLAlchemy-backed implementation, opening one session per call.

Dependencies: sqlalchemy, pydantic, docqa.boundary.db.CRUD
System role: Document existence and ingestion-state lookups
"""

import logging
from datetime import datetime
from typing import Protocol, runtime_checkable

from pydantic import BaseModel, ConfigDict
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from docqa.boundary.db.CRUD.document_crud import DocumentCRUD

logger = logging.getLogger(__name__)


class DocumentRecord(BaseModel):
    """Registry view of a document."""

    model_config = ConfigDict(from_attributes=True)

    id: str
    original_name: str
    file_type: str
    vectorized: bool = False
    created_at: datetime | None = None
    updated_at: datetime | None = None


@runtime_checkable
class DocumentRegistry(Protocol):
    """Consumed interface for document records."""

    async def get_by_id(self, document_id: str) -> DocumentRecord | None: ...

    async def mark_vectorized(self, document_id: str) -> bool: ...

    async def create(self, original_name: str, file_type: str) -> DocumentRecord: ...

    async def list_documents(self) -> list[DocumentRecord]: ...

    async def delete(self, document_id: str) -> bool: ...


class SqlDocumentRegistry:
    """DocumentRegistry over the uploaded_documents table."""

    def __init__(
        self,
        session_factory: async_sessionmaker[AsyncSession],
        crud: DocumentCRUD | None = None,
    ) -> None:
        self._session_factory = session_factory
        self._crud = crud or DocumentCRUD()

    async def get_by_id(self, document_id: str) -> DocumentRecord | None:
        async with self._session_factory() as session:
            model = await self._crud.get_by_id(session, document_id)
            return DocumentRecord.model_validate(model) if model else None

    async def mark_vectorized(self, document_id: str) -> bool:
        """
        Flip the vectorized flag and commit.

        Returns:
            True if the document exists
        """
        async with self._session_factory() as session:
            found = await self._crud.mark_vectorized(session, document_id)
            await session.commit()

        if found:
            logger.info(f"{__name__}:mark_vectorized - Document {document_id} marked vectorized")
        else:
            logger.warning(f"{__name__}:mark_vectorized - Document {document_id} not found")
        return found

    async def create(self, original_name: str, file_type: str) -> DocumentRecord:
        async with self._session_factory() as session:
            model = await self._crud.create(
                session,
                original_name=original_name,
                file_type=file_type,
                vectorized=False,
            )
            await session.commit()
            record = DocumentRecord.model_validate(model)

        logger.info(f"{__name__}:create - Registered document {record.id} ({original_name})")
        return record

    async def list_documents(self) -> list[DocumentRecord]:
        """All registered documents, newest first."""
        async with self._session_factory() as session:
            models = await self._crud.list_newest_first(session)
            return [DocumentRecord.model_validate(model) for model in models]

    async def delete(self, document_id: str) -> bool:
        """
        Remove the registry row and commit. Chunks are the caller's concern.

        Returns:
            True if the document existed
        """
        async with self._session_factory() as session:
            deleted = await self._crud.delete_by_id(session, document_id)
            await session.commit()

        if deleted:
            logger.info(f"{__name__}:delete - Document {document_id} deleted")
        return deleted
