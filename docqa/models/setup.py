"""
Setup status schema.

Dependencies: pydantic
System role: Setup diagnostics API contract
"""

from pydantic import BaseModel

from docqa.boundary.llm.ollama_probe import ModelBackendStatus
from docqa.boundary.vdb.vector_schemas import StoreSetupStatus, TableStats


class SetupStatus(BaseModel):
    """Combined readiness of the chunk store and the model backend."""

    ready: bool
    store: StoreSetupStatus
    model_backend: ModelBackendStatus
    store_stats: TableStats | None = None
