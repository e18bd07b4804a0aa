"""
FastAPI dependencies.

Route handlers receive services from the ServiceContainer stored on
app.state by the lifespan. Tests override these with fakes through
app.dependency_overrides.

Dependencies: fastapi, docqa.application
System role: Request-scoped access to wired services
"""

from fastapi import Depends, Request

from docqa.application.container import ServiceContainer
from docqa.application.services.document_service import DocumentService
from docqa.application.services.setup_service import SetupService
from docqa.boundary.db.registry import DocumentRegistry
from docqa.core.answering.synthesizer import AnswerSynthesizer
from docqa.core.ingestion.coordinator import IngestionCoordinator


def get_container(request: Request) -> ServiceContainer:
    """Get the container created at startup."""
    return request.app.state.container


def get_registry(container: ServiceContainer = Depends(get_container)) -> DocumentRegistry:
    return container.registry


def get_synthesizer(container: ServiceContainer = Depends(get_container)) -> AnswerSynthesizer:
    return container.synthesizer


def get_coordinator(container: ServiceContainer = Depends(get_container)) -> IngestionCoordinator:
    return container.coordinator


def get_setup_service(container: ServiceContainer = Depends(get_container)) -> SetupService:
    return container.setup_service


def get_document_service(container: ServiceContainer = Depends(get_container)) -> DocumentService:
    return container.document_service
