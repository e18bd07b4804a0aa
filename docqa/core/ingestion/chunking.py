"""
Text chunking using RecursiveCharacterTextSplitter.

Splits extracted document text into overlapping chunks and attaches the
document tags every chunk row must carry.

Dependencies: langchain_text_splitters, langchain_core
System role: First stage of document ingestion
"""

from langchain_core.documents import Document
from langchain_text_splitters import RecursiveCharacterTextSplitter


def chunk_metadata(document_id: str, source: str, chunk_index: int) -> dict:
    """Metadata written with each chunk; documentId plus its legacy aliases."""
    return {
        "documentId": document_id,
        "document_id": document_id,
        "id": document_id,
        "source": source,
        "chunkIndex": chunk_index,
    }


class ChunkingTask:
    """Split raw text into tagged chunks."""

    def __init__(
        self,
        chunk_size: int = 1000,
        chunk_overlap: int = 200,
    ) -> None:
        """
        Initialize chunking task with splitter configuration.

        Args:
            chunk_size: Maximum chunk size in characters
            chunk_overlap: Overlap between consecutive chunks
        """
        self._splitter = RecursiveCharacterTextSplitter(
            chunk_size=chunk_size,
            chunk_overlap=chunk_overlap,
            length_function=len,
        )

    def chunk(self, text: str, document_id: str, source: str) -> list[Document]:
        """
        Split text into chunks carrying document metadata.

        Args:
            text: Extracted document text
            document_id: Registry document id
            source: Original file name

        Returns:
            list[Document]: Chunks in document order; empty for blank text
        """
        pieces = [piece for piece in self._splitter.split_text(text) if piece.strip()]
        return [
            Document(page_content=piece, metadata=chunk_metadata(document_id, source, index))
            for index, piece in enumerate(pieces)
        ]
