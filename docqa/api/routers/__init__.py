"""
API routers module.
"""

from docqa.api.routers.documents import router as documents_router
from docqa.api.routers.health import router as health_router
from docqa.api.routers.setup import router as setup_router

__all__ = [
    "documents_router",
    "health_router",
    "setup_router",
]
