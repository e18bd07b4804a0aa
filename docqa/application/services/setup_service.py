"""
Setup status service.

Aggregates chunk store readiness, chunk table statistics and model
backend capabilities into one report. Unknown or failed checks count as not ready.

Dependencies: docqa.boundary.vdb, docqa.boundary.llm
System role: Deployment diagnostics
"""

import logging
from typing import Protocol

from docqa.boundary.llm.ollama_probe import ModelBackendStatus
from docqa.boundary.vdb.vector_schemas import StoreSetupStatus, TableStats
from docqa.models.setup import SetupStatus

logger = logging.getLogger(__name__)


class SetupCheckStore(Protocol):
    async def check_setup(self) -> StoreSetupStatus: ...

    async def table_stats(self) -> TableStats: ...


class BackendProbe(Protocol):
    async def probe(self) -> ModelBackendStatus: ...


class SetupService:
    """Combines store and model backend checks."""

    def __init__(self, store: SetupCheckStore, probe: BackendProbe) -> None:
        self._store = store
        self._probe = probe

    async def status(self) -> SetupStatus:
        """
        Run all checks.

        Returns:
            SetupStatus: ready is True only when every check passed
        """
        try:
            store_status = await self._store.check_setup()
        except Exception as e:
            logger.error(f"{__name__}:status - Store check raised: {e}")
            store_status = StoreSetupStatus(error=f"{type(e).__name__}: {e}")

        try:
            backend_status = await self._probe.probe()
        except Exception as e:
            logger.error(f"{__name__}:status - Model backend probe raised: {e}")
            backend_status = ModelBackendStatus(error=f"{type(e).__name__}: {e}")

        store_stats = None
        if store_status.connected and store_status.table_exists:
            try:
                store_stats = await self._store.table_stats()
            except Exception as e:
                logger.error(f"{__name__}:status - Table stats raised: {e}")

        ready = store_status.ready and backend_status.ready
        if not ready:
            logger.warning(
                f"{__name__}:status - Not ready (store={store_status.ready}, "
                f"model_backend={backend_status.ready})"
            )
        return SetupStatus(
            ready=ready,
            store=store_status,
            model_backend=backend_status,
            store_stats=store_stats,
        )
