"""
Test suite for SetupService.

System role: Verification of combined readiness reporting
"""

from unittest.mock import AsyncMock

import pytest

from docqa.application.services.setup_service import SetupService
from docqa.boundary.llm.ollama_probe import ModelBackendStatus
from docqa.boundary.vdb.vector_schemas import StoreSetupStatus, TableStats


def ready_probe() -> AsyncMock:
    probe = AsyncMock()
    probe.probe.return_value = ModelBackendStatus(reachable=True, models=["llama2"], model_available=True)
    return probe


class TestSetupService:
    """Test SetupService.status aggregation."""

    @pytest.mark.asyncio
    async def test_all_checks_pass(self, chunk_store):
        status = await SetupService(chunk_store, ready_probe()).status()

        assert status.ready is True

    @pytest.mark.asyncio
    async def test_missing_columns_not_ready(self):
        store = AsyncMock()
        store.check_setup.return_value = StoreSetupStatus(
            connected=True, vector_extension=True, table_exists=True, missing_columns=["embedding"]
        )
        store.table_stats.return_value = TableStats(total_chunks=3, distinct_documents=1)

        status = await SetupService(store, ready_probe()).status()

        assert status.ready is False
        assert status.store.missing_columns == ["embedding"]

    @pytest.mark.asyncio
    async def test_raising_checks_become_errors(self):
        store = AsyncMock()
        store.check_setup.side_effect = RuntimeError("pool exhausted")
        probe = AsyncMock()
        probe.probe.side_effect = RuntimeError("client closed")

        status = await SetupService(store, probe).status()

        assert status.ready is False
        assert "pool exhausted" in status.store.error
        assert "client closed" in status.model_backend.error

    @pytest.mark.asyncio
    async def test_backend_unreachable(self, chunk_store):
        probe = AsyncMock()
        probe.probe.return_value = ModelBackendStatus(error="Model backend unreachable")

        status = await SetupService(chunk_store, probe).status()

        assert status.ready is False
        assert status.store.ready is True

    @pytest.mark.asyncio
    async def test_missing_chat_model_not_ready(self, chunk_store):
        probe = AsyncMock()
        probe.probe.return_value = ModelBackendStatus(
            reachable=True, models=["nomic-embed-text"], model_available=True, chat_model_available=False
        )

        status = await SetupService(chunk_store, probe).status()

        assert status.ready is False
        assert status.model_backend.chat_model_available is False


class TestSetupStoreStats:
    """Test suite for chunk table statistics in the setup report."""

    @pytest.mark.asyncio
    async def test_stats_reported_when_table_exists(self, chunk_store):
        chunk_store.add_chunk("a", {"documentId": "doc-1"}, [1.0] * 64)
        chunk_store.add_chunk("b", {"documentId": "doc-1"})
        chunk_store.add_chunk("c", {"documentId": "doc-2"}, [1.0] * 64)

        status = await SetupService(chunk_store, ready_probe()).status()

        assert status.store_stats == TableStats(total_chunks=3, distinct_documents=2, null_vector_chunks=1)

    @pytest.mark.asyncio
    async def test_stats_skipped_when_table_missing(self):
        store = AsyncMock()
        store.check_setup.return_value = StoreSetupStatus(connected=True, vector_extension=True)

        status = await SetupService(store, ready_probe()).status()

        assert status.store_stats is None
        store.table_stats.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_stats_failure_does_not_fail_status(self, chunk_store):
        chunk_store.table_stats = AsyncMock(side_effect=RuntimeError("stats timeout"))

        status = await SetupService(chunk_store, ready_probe()).status()

        assert status.ready is True
        assert status.store_stats is None
