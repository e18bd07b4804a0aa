"""
Document CRUD operations.

Dependencies: sqlalchemy, docqa.boundary.db.document_model
System role: Document registry persistence operations
"""

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from docqa.boundary.db.CRUD.base_crud import BaseCRUD
from docqa.boundary.db.document_model import DocumentModel


class DocumentCRUD(BaseCRUD[DocumentModel]):
    """CRUD operations for DocumentModel with the vectorized flag transition."""

    def __init__(self) -> None:
        super().__init__(DocumentModel)

    async def mark_vectorized(self, session: AsyncSession, document_id: str) -> bool:
        """
        Set vectorized=True. Idempotent: an already-set flag is rewritten.

        Args:
            session: Async database session
            document_id: Document primary key

        Returns:
            True if the document exists, False otherwise
        """
        updated = await self.update_by_id(session, document_id, vectorized=True)
        return updated > 0

    async def list_newest_first(
        self,
        session: AsyncSession,
        limit: int | None = None,
    ) -> list[DocumentModel]:
        """Documents ordered by registration time, most recent first."""
        stmt = select(DocumentModel).order_by(DocumentModel.created_at.desc(), DocumentModel.id)
        if limit is not None:
            stmt = stmt.limit(limit)
        result = await session.execute(stmt)
        return list(result.scalars().all())


document_crud = DocumentCRUD()
