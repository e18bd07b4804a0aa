"""
Document API endpoints.

Routes: POST /documents, GET /documents, GET /documents/{id}, DELETE /documents/{id},
POST /documents/{id}/process, POST /documents/{id}/ask

Dependencies: docqa.core.ingestion, docqa.core.answering, docqa.models
System role: Document ingestion and question-answering HTTP API
"""

import logging

from fastapi import APIRouter, Depends, HTTPException, status
from fastapi.responses import JSONResponse

from docqa.api.deps import get_coordinator, get_document_service, get_registry, get_synthesizer
from docqa.application.services.document_service import DocumentService
from docqa.boundary.db.registry import DocumentRegistry
from docqa.core.answering.synthesizer import AnswerSynthesizer
from docqa.core.exceptions import DocumentNotFoundError, IngestionError
from docqa.core.ingestion.coordinator import IngestionCoordinator
from docqa.models.qa import (
    AskRequest,
    AskResponse,
    CreateDocumentRequest,
    DeleteDocumentResponse,
    DocumentDetailResponse,
    DocumentResponse,
    ProcessRequest,
    ProcessResponse,
    SourceChunk,
)

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/documents", tags=["documents"])


@router.post("", response_model=DocumentResponse, status_code=status.HTTP_201_CREATED)
async def create_document(
    request: CreateDocumentRequest,
    registry: DocumentRegistry = Depends(get_registry),
) -> DocumentResponse:
    """Register a document; it stays unvectorized until processed."""
    record = await registry.create(request.original_name, request.file_type)
    return DocumentResponse(**record.model_dump())


@router.get("", response_model=list[DocumentResponse])
async def list_documents(
    service: DocumentService = Depends(get_document_service),
) -> list[DocumentResponse]:
    """Registered documents, newest first."""
    records = await service.list_documents()
    return [DocumentResponse(**record.model_dump()) for record in records]


@router.get("/{document_id}", response_model=DocumentDetailResponse)
async def get_document(
    document_id: str,
    service: DocumentService = Depends(get_document_service),
) -> DocumentDetailResponse:
    try:
        record, chunk_count = await service.get_document(document_id)
    except DocumentNotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=e.message)

    return DocumentDetailResponse(**record.model_dump(), chunk_count=chunk_count)


@router.delete("/{document_id}", response_model=DeleteDocumentResponse)
async def delete_document(
    document_id: str,
    service: DocumentService = Depends(get_document_service),
) -> DeleteDocumentResponse:
    """
    Delete a document and every chunk stored for it.

    Returns:
        DeleteDocumentResponse with the number of chunks removed; 404 for
        unknown documents
    """
    try:
        chunks_deleted = await service.delete_document(document_id)
    except DocumentNotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=e.message)

    return DeleteDocumentResponse(document_id=document_id, chunks_deleted=chunks_deleted)


@router.post("/{document_id}/process", response_model=ProcessResponse)
async def process_document(
    document_id: str,
    request: ProcessRequest,
    coordinator: IngestionCoordinator = Depends(get_coordinator),
):
    """
    Chunk, embed and store a document's extracted text.

    Returns:
        ProcessResponse on success; 404 for unknown documents; 500 with
        the number of chunks stored before the failure otherwise
    """
    try:
        result = await coordinator.ingest(document_id, request.text)
    except DocumentNotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=e.message)
    except IngestionError as e:
        logger.error(f"{__name__}:process_document - Ingestion failed: {e}")
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content={
                "detail": e.message,
                "document_id": document_id,
                "chunk_count": e.chunk_count,
            },
        )

    return ProcessResponse(**result.model_dump())


@router.post("/{document_id}/ask", response_model=AskResponse)
async def ask_question(
    document_id: str,
    request: AskRequest,
    synthesizer: AnswerSynthesizer = Depends(get_synthesizer),
) -> AskResponse:
    """Answer a question about a document. Always 200; problems are in the answer text."""
    result = await synthesizer.answer(document_id, request.question, request.top_k)
    return AskResponse(
        answer=result.answer,
        sources=[SourceChunk(content=s.content, metadata=s.metadata) for s in result.sources],
    )
