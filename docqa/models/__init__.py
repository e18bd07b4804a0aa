"""
API request and response schemas.
"""

from docqa.models.qa import (
    AskRequest,
    AskResponse,
    CreateDocumentRequest,
    DocumentResponse,
    ProcessRequest,
    ProcessResponse,
    SourceChunk,
)
from docqa.models.setup import SetupStatus

__all__ = [
    "AskRequest",
    "AskResponse",
    "CreateDocumentRequest",
    "DocumentResponse",
    "ProcessRequest",
    "ProcessResponse",
    "SetupStatus",
    "SourceChunk",
]
