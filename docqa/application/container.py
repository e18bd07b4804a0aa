"""
Service container.

Builds every long-lived component exactly once at process start and
hands them out explicitly; request handlers receive services from here
through FastAPI dependencies rather than from module-level singletons.

Dependencies: docqa.configs, docqa.boundary, docqa.core
System role: Explicit dependency injection root
"""

import logging
from dataclasses import dataclass

import httpx
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker

from docqa.application.services.document_service import DocumentService
from docqa.application.services.setup_service import SetupService
from docqa.boundary.db.base import Base
from docqa.boundary.db.connection import create_engine_from_settings, create_session_factory
from docqa.boundary.db.registry import DocumentRegistry, SqlDocumentRegistry
from docqa.boundary.llm.chat_backend import ChatBackend, LangChainChatBackend, build_chat_model
from docqa.boundary.llm.ollama_probe import OllamaProbe
from docqa.boundary.vdb.chunk_store import PgVectorChunkStore
from docqa.configs.settings import Settings
from docqa.core.answering.prompt import ANSWER_PROMPT
from docqa.core.answering.synthesizer import AnswerSynthesizer
from docqa.core.embeddings.provider import EmbeddingProvider
from docqa.core.ingestion.chunking import ChunkingTask
from docqa.core.ingestion.coordinator import IngestionCoordinator
from docqa.core.retrieval.retriever import RelevanceRetriever

logger = logging.getLogger(__name__)


@dataclass
class ServiceContainer:
    """Holds the wired application services."""

    settings: Settings
    engine: AsyncEngine
    session_factory: async_sessionmaker[AsyncSession]
    store: PgVectorChunkStore
    registry: DocumentRegistry
    embedder: EmbeddingProvider
    chat_backend: ChatBackend
    retriever: RelevanceRetriever
    synthesizer: AnswerSynthesizer
    coordinator: IngestionCoordinator
    probe_client: httpx.AsyncClient
    setup_service: SetupService
    document_service: DocumentService

    @classmethod
    def from_settings(cls, settings: Settings) -> "ServiceContainer":
        """
        Wire all services from settings.

        Creates connections lazily: the engine connects on first use and
        HTTP clients on first request.

        Args:
            settings: Application settings

        Returns:
            ServiceContainer: Fully wired container
        """
        engine = create_engine_from_settings(settings.database)
        session_factory = create_session_factory(engine)

        store = PgVectorChunkStore(
            engine,
            table_name=settings.vector_store.table_name,
            dimension=settings.vector_store.embedding_dimension,
            ivfflat_lists=settings.vector_store.ivfflat_lists,
        )
        registry = SqlDocumentRegistry(session_factory)
        embedder = EmbeddingProvider(
            settings.embedding,
            dimension=settings.vector_store.embedding_dimension,
        )
        chat_backend = LangChainChatBackend(
            build_chat_model(settings.llm),
            ANSWER_PROMPT,
            timeout_seconds=settings.llm.timeout_seconds,
        )

        retrieval = settings.retrieval
        retriever = RelevanceRetriever(
            store,
            registry,
            embedder,
            tier1_row_limit=retrieval.tier1_row_limit,
            similarity_threshold=retrieval.similarity_threshold,
        )
        synthesizer = AnswerSynthesizer(
            retriever,
            store,
            chat_backend,
            fallback_row_limit=retrieval.tier1_row_limit,
        )
        coordinator = IngestionCoordinator(
            store,
            registry,
            embedder,
            chunker=ChunkingTask(retrieval.chunk_size, retrieval.chunk_overlap),
            embedding_concurrency=retrieval.embedding_concurrency,
        )

        probe_client = httpx.AsyncClient(base_url=settings.embedding.base_url, timeout=10.0)
        chat_model = settings.llm.model if settings.llm.provider == "ollama" else None
        setup_service = SetupService(
            store,
            OllamaProbe(probe_client, settings.embedding.model, chat_model=chat_model),
        )

        logger.info(
            f"{__name__}:from_settings - Services wired (environment={settings.environment}, "
            f"llm={settings.llm.provider}/{settings.llm.model}, "
            f"dimension={settings.vector_store.embedding_dimension})"
        )
        return cls(
            settings=settings,
            engine=engine,
            session_factory=session_factory,
            store=store,
            registry=registry,
            embedder=embedder,
            chat_backend=chat_backend,
            retriever=retriever,
            synthesizer=synthesizer,
            coordinator=coordinator,
            probe_client=probe_client,
            setup_service=setup_service,
            document_service=DocumentService(registry, store),
        )

    async def startup(self) -> None:
        """
        Create the registry table and sync the chunk store schema.

        Failures are logged as warnings; the application still starts so
        the setup status endpoint can report what is missing.
        """
        try:
            async with self.engine.begin() as conn:
                await conn.run_sync(Base.metadata.create_all)
        except Exception as e:
            logger.warning(f"{__name__}:startup - Registry table creation failed: {e}")

        await self.coordinator.ensure_schema()

    async def aclose(self) -> None:
        """Close HTTP clients and dispose the engine."""
        await self.embedder.aclose()
        await self.probe_client.aclose()
        await self.engine.dispose()
        logger.info(f"{__name__}:aclose - Resources released")
