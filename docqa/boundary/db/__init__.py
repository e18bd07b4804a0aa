"""
Database boundary module.

Exposes the registry ORM model, connection factories and the
DocumentRegistry protocol with its SQL implementation.
"""

from docqa.boundary.db.base import Base
from docqa.boundary.db.connection import create_engine_from_settings, create_session_factory
from docqa.boundary.db.document_model import DocumentModel
from docqa.boundary.db.registry import DocumentRecord, DocumentRegistry, SqlDocumentRegistry

__all__ = [
    "Base",
    "DocumentModel",
    "DocumentRecord",
    "DocumentRegistry",
    "SqlDocumentRegistry",
    "create_engine_from_settings",
    "create_session_factory",
]
