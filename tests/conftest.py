"""
Shared test fixtures and configuration for entire test suite.

Provides: in-memory chunk store, document registry, chat backend and
embedder fakes, plus an aiosqlite-backed session factory for ORM tests.
Dependencies: pytest, sqlalchemy, aiosqlite
System role: Test infrastructure and fixture management
"""

import json
import math
from collections.abc import Sequence
from datetime import datetime, timezone
from typing import Any

import pytest
import pytest_asyncio

from docqa.boundary.db.registry import DocumentRecord
from docqa.boundary.vdb.vector_schemas import (
    ChunkRecord,
    SchemaSyncResult,
    ScoredChunk,
    StoreSetupStatus,
    TableStats,
)
from docqa.core.embeddings.hashing import pseudo_embedding
from docqa.core.exceptions import VectorStoreError

TEST_DIMENSION = 64


def _cosine(a: Sequence[float], b: Sequence[float]) -> float:
    dot = sum(x * y for x, y in zip(a, b))
    norm = math.sqrt(sum(x * x for x in a)) * math.sqrt(sum(y * y for y in b))
    return dot / norm if norm else 0.0


class FakeChunkStore:
    """In-memory chunk store with the PgVectorChunkStore call surface."""

    def __init__(self, dimension: int = TEST_DIMENSION) -> None:
        self.dimension = dimension
        self.rows: list[dict[str, Any]] = []
        self.fail_on_insert: int | None = None
        self.fail_reads = False
        self.insert_calls = 0
        self.sync_calls = 0
        self.similarity_calls = 0

    def add_chunk(
        self,
        content: str,
        metadata: dict[str, Any],
        embedding: Sequence[float] | None = None,
    ) -> int:
        row_id = len(self.rows) + 1
        self.rows.append({
            "id": row_id,
            "content": content,
            "metadata": metadata,
            "embedding": list(embedding) if embedding is not None else [0.0] * self.dimension,
        })
        return row_id

    def _records(self, rows: list[dict[str, Any]]) -> list[ChunkRecord]:
        return [ChunkRecord(id=r["id"], content=r["content"], metadata=r["metadata"]) for r in rows]

    def _check_reads(self, operation: str) -> None:
        if self.fail_reads:
            raise VectorStoreError("store unavailable", operation=operation)

    async def insert(self, content: str, metadata: dict, embedding: Sequence[float]) -> int:
        self.insert_calls += 1
        if self.fail_on_insert == self.insert_calls:
            raise VectorStoreError("insert failed", operation="insert")
        if len(embedding) != self.dimension:
            raise VectorStoreError("dimension mismatch", operation="insert")
        return self.add_chunk(content, metadata, embedding)

    async def find_by_document_id(self, document_id: str, limit: int = 100) -> list[ChunkRecord]:
        self._check_reads("find_by_document_id")
        matching = [
            r for r in self.rows
            if any(
                isinstance(r["metadata"], dict) and r["metadata"].get(key) == document_id
                for key in ("documentId", "document_id", "id")
            )
        ]
        return self._records(matching[:limit])

    async def find_by_metadata_filter(self, metadata_filter: dict, limit: int = 100) -> list[ChunkRecord]:
        self._check_reads("find_by_metadata_filter")
        matching = [
            r for r in self.rows
            if isinstance(r["metadata"], dict)
            and all(r["metadata"].get(key) == value for key, value in metadata_filter.items())
        ]
        return self._records(matching[:limit])

    async def find_by_metadata_text(self, fragment: str, limit: int = 100) -> list[ChunkRecord]:
        self._check_reads("find_by_metadata_text")
        matching = [r for r in self.rows if fragment in json.dumps(r["metadata"])]
        return self._records(matching[:limit])

    async def similarity_search(
        self,
        query_vector: Sequence[float],
        k: int,
        threshold: float = 0.0,
        metadata_filter: dict | None = None,
    ) -> list[ScoredChunk]:
        self.similarity_calls += 1
        self._check_reads("similarity_search")
        scored = [(_cosine(query_vector, r["embedding"]), r) for r in self.rows]
        scored = [(s, r) for s, r in scored if s > threshold]
        scored.sort(key=lambda pair: pair[0], reverse=True)
        return [
            ScoredChunk(id=r["id"], content=r["content"], metadata=r["metadata"], similarity=s)
            for s, r in scored[:k]
        ]

    async def delete_by_ids(self, ids: Sequence[int]) -> int:
        wanted = set(ids)
        before = len(self.rows)
        self.rows = [r for r in self.rows if r["id"] not in wanted]
        return before - len(self.rows)

    async def table_stats(self) -> TableStats:
        self._check_reads("table_stats")
        return TableStats(
            total_chunks=len(self.rows),
            distinct_documents=len({r["metadata"].get("documentId") for r in self.rows}),
            null_vector_chunks=sum(1 for r in self.rows if not any(r["embedding"])),
        )

    async def sync_schema(self) -> SchemaSyncResult:
        self.sync_calls += 1
        return SchemaSyncResult(steps_completed=["vector_extension", "table"])

    async def check_setup(self) -> StoreSetupStatus:
        return StoreSetupStatus(connected=True, vector_extension=True, table_exists=True)


class FakeRegistry:
    """In-memory DocumentRegistry."""

    def __init__(self) -> None:
        self.documents: dict[str, DocumentRecord] = {}
        self.mark_calls: list[str] = []

    def add(self, document_id: str, vectorized: bool = False, original_name: str = "report.pdf") -> DocumentRecord:
        record = DocumentRecord(
            id=document_id,
            original_name=original_name,
            file_type="pdf",
            vectorized=vectorized,
            created_at=datetime.now(timezone.utc),
        )
        self.documents[document_id] = record
        return record

    async def get_by_id(self, document_id: str) -> DocumentRecord | None:
        return self.documents.get(document_id)

    async def mark_vectorized(self, document_id: str) -> bool:
        self.mark_calls.append(document_id)
        record = self.documents.get(document_id)
        if record is None:
            return False
        self.documents[document_id] = record.model_copy(update={"vectorized": True})
        return True

    async def create(self, original_name: str, file_type: str) -> DocumentRecord:
        record = self.add(f"doc-{len(self.documents) + 1}", original_name=original_name)
        record = record.model_copy(update={"file_type": file_type})
        self.documents[record.id] = record
        return record

    async def list_documents(self) -> list[DocumentRecord]:
        return sorted(self.documents.values(), key=lambda r: r.created_at, reverse=True)

    async def delete(self, document_id: str) -> bool:
        return self.documents.pop(document_id, None) is not None


class FakeChatBackend:
    """ChatBackend returning a canned answer or raising a canned error."""

    def __init__(self, answer: str = "The total is $500.", error: Exception | None = None) -> None:
        self.answer = answer
        self.error = error
        self.calls: list[dict[str, str]] = []

    async def generate(self, system_prompt: str, context: str, question: str) -> str:
        self.calls.append({"system_prompt": system_prompt, "context": context, "question": question})
        if self.error is not None:
            raise self.error
        return self.answer


class FakeEmbedder:
    """Deterministic embedder built on the hashing fallback; optionally all zeros."""

    def __init__(self, dimension: int = TEST_DIMENSION, null: bool = False) -> None:
        self.dimension = dimension
        self.null = null
        self.calls: list[str] = []

    async def embed_one(self, text: str) -> list[float]:
        self.calls.append(text)
        if self.null:
            return [0.0] * self.dimension
        return pseudo_embedding(text, self.dimension)

    async def embed_many(self, texts: Sequence[str], concurrency: int = 1) -> list[list[float]]:
        return [await self.embed_one(text) for text in texts]


@pytest.fixture
def chunk_store() -> FakeChunkStore:
    return FakeChunkStore()


@pytest.fixture
def registry() -> FakeRegistry:
    return FakeRegistry()


@pytest.fixture
def chat_backend() -> FakeChatBackend:
    return FakeChatBackend()


@pytest.fixture
def embedder() -> FakeEmbedder:
    return FakeEmbedder()


@pytest_asyncio.fixture
async def session_factory():
    """
    In-memory SQLite async session factory with registry tables created.

    Yields:
        async_sessionmaker: Factory bound to a fresh database
    """
    from sqlalchemy.ext.asyncio import async_sessionmaker, create_async_engine
    from sqlalchemy.pool import StaticPool

    from docqa.boundary.db.base import Base

    engine = create_async_engine(
        "sqlite+aiosqlite:///:memory:",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    yield async_sessionmaker(engine, expire_on_commit=False, autoflush=False)

    await engine.dispose()
