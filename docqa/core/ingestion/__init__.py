"""
Document ingestion: chunking, embedding and storage.
"""

from docqa.core.ingestion.chunking import ChunkingTask, chunk_metadata
from docqa.core.ingestion.coordinator import IngestionCoordinator, IngestionResult

__all__ = [
    "ChunkingTask",
    "IngestionCoordinator",
    "IngestionResult",
    "chunk_metadata",
]
