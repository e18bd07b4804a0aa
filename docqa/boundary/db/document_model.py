"""
Document ORM model.

Registry row for an uploaded document. The vectorized flag is the only
ingestion state: false on creation, true once every chunk is stored.

Dependencies: sqlalchemy, docqa.boundary.db.base
System role: Document registry persistence
"""

from sqlalchemy import Boolean, String
from sqlalchemy.orm import Mapped, mapped_column

from docqa.boundary.db.base import Base, StringIdMixin, TimestampMixin


class DocumentModel(Base, StringIdMixin, TimestampMixin):
    """
    Uploaded document registry entry.

    Attributes:
        id: Opaque document id (string primary key)
        original_name: Uploaded file name, copied into chunk metadata as source
        file_type: Extension or MIME hint (pdf, docx, xlsx, txt)
        vectorized: True only after all chunks are durably written
        created_at: Registration timestamp (UTC)
        updated_at: Last change timestamp (UTC)
    """

    __tablename__ = "uploaded_documents"

    original_name: Mapped[str] = mapped_column(String(255), nullable=False)
    file_type: Mapped[str] = mapped_column(String(64), nullable=False, default="txt")
    vectorized: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)

    def __repr__(self) -> str:
        return (
            f"<DocumentModel(id={self.id}, name={self.original_name}, "
            f"vectorized={self.vectorized})>"
        )
