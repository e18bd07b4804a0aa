"""
Exception hierarchy for the document Q&A core.

Structural failures (missing document, unfinished ingestion, partially
durable ingestion) cross component boundaries as these exceptions.
Backend-unavailable errors are absorbed inside their owning component.

Dependencies: None (pure domain layer)
System role: Centralized exception taxonomy across the application
"""

from typing import Any


class DocQAException(Exception):
    """Base exception for all document Q&A errors."""

    def __init__(self, message: str, details: dict[str, Any] | None = None) -> None:
        """
        Initialize base exception with message and optional context.

        Args:
            message: Human-readable error message
            details: Optional dictionary of additional context for debugging
        """
        self.message = message
        self.details = details or {}
        super().__init__(message)

    def __str__(self) -> str:
        """Return string representation including details."""
        if self.details:
            return f"{self.message} | Details: {self.details}"
        return self.message


class DocumentNotFoundError(DocQAException):
    """Raised when a document id is unknown to the registry."""

    def __init__(self, document_id: str, details: dict[str, Any] | None = None) -> None:
        details = details or {}
        details["document_id"] = document_id
        self.document_id = document_id
        super().__init__(f"Document not found: {document_id}", details)


class DocumentNotVectorizedError(DocQAException):
    """Raised when a document exists but its ingestion has not completed."""

    def __init__(self, document_id: str, details: dict[str, Any] | None = None) -> None:
        details = details or {}
        details["document_id"] = document_id
        self.document_id = document_id
        super().__init__(f"Document has not been vectorized: {document_id}", details)


class NoChunksFoundError(DocQAException):
    """Raised when both retrieval tiers are exhausted for a document."""

    def __init__(
        self,
        document_id: str,
        reason: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        """
        Initialize no-chunks error.

        Args:
            document_id: Document that produced no chunks
            reason: Which tier gave up and why
            details: Additional context
        """
        details = details or {}
        details["document_id"] = document_id
        if reason:
            details["reason"] = reason
        self.document_id = document_id
        super().__init__(f"No chunks found for document: {document_id}", details)


class IngestionError(DocQAException):
    """
    Raised when chunk embedding or storage fails mid-document.

    Attributes:
        document_id: Document being ingested
        chunk_count: Number of chunks durably written before the failure
    """

    def __init__(
        self,
        message: str,
        document_id: str,
        chunk_count: int,
        details: dict[str, Any] | None = None,
    ) -> None:
        details = details or {}
        details["document_id"] = document_id
        details["chunk_count"] = chunk_count
        self.document_id = document_id
        self.chunk_count = chunk_count
        super().__init__(message, details)


class VectorStoreError(DocQAException):
    """Raised when chunk store operations fail."""

    def __init__(
        self,
        message: str,
        operation: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        """
        Initialize vector store error.

        Args:
            message: Error message
            operation: Operation that failed (insert, query, delete, sync)
            details: Additional context
        """
        details = details or {}
        if operation:
            details["operation"] = operation
        self.operation = operation
        super().__init__(message, details)


class EmbeddingError(DocQAException):
    """Raised by a single embedding strategy; never leaves the provider."""

    pass


class EmbeddingParseError(EmbeddingError):
    """Raised when an upstream response carries no usable vector."""

    pass
