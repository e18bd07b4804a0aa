"""
Document and question-answering API schemas.

Dependencies: pydantic
System role: Documents API contracts
"""

from datetime import datetime
from typing import Any

from pydantic import BaseModel, Field


class CreateDocumentRequest(BaseModel):
    """Register a document whose text will be supplied to /process."""

    original_name: str = Field(min_length=1, max_length=255, description="Uploaded file name")
    file_type: str = Field(default="txt", max_length=64, description="pdf, docx, xlsx or txt")


class DocumentResponse(BaseModel):
    """Registry entry."""

    id: str
    original_name: str
    file_type: str
    vectorized: bool
    created_at: datetime | None = None


class ProcessRequest(BaseModel):
    """Extracted text to ingest."""

    text: str = Field(description="Document text extracted by the upload layer")


class ProcessResponse(BaseModel):
    """Ingestion outcome."""

    document_id: str
    chunk_count: int = Field(description="Chunks written to the store")
    processing_time_ms: float


class AskRequest(BaseModel):
    """Question about one document."""

    question: str = Field(min_length=1, description="Natural-language question")
    top_k: int = Field(default=5, ge=1, le=50, description="Maximum source chunks")


class SourceChunk(BaseModel):
    """Chunk the answer was drawn from."""

    content: str
    metadata: dict[str, Any] = Field(default_factory=dict)


class AskResponse(BaseModel):
    """Answer with its sources; failures are expressed in the answer text."""

    answer: str
    sources: list[SourceChunk] = Field(default_factory=list)


class DocumentDetailResponse(DocumentResponse):
    """Registry entry with the number of stored chunks."""

    updated_at: datetime | None = None
    chunk_count: int = Field(description="Chunks currently stored for the document")


class DeleteDocumentResponse(BaseModel):
    """Deletion outcome."""

    document_id: str
    chunks_deleted: int
