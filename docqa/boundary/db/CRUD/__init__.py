"""
CRUD operations module.
"""

from docqa.boundary.db.CRUD.base_crud import BaseCRUD
from docqa.boundary.db.CRUD.document_crud import DocumentCRUD, document_crud

__all__ = [
    "BaseCRUD",
    "DocumentCRUD",
    "document_crud",
]
