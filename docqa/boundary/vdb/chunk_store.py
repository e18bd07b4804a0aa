"""
pgvector chunk store.

Persists (content, metadata, embedding) chunk rows in PostgreSQL and
serves the two retrieval shapes the system needs: exact metadata lookup
by document id and cosine-similarity search. Nearest-neighbour search is
delegated to pgvector's ``<=>`` operator.

Reads use ``engine.connect()``; writes use ``engine.begin()`` so every
insert commits on its own. SQLAlchemy errors are wrapped into
VectorStoreError with the failing operation name.

Dependencies: sqlalchemy, pgvector, docqa.boundary.vdb.vector_schemas
System role: Chunk persistence and similarity search backend
"""

import logging
from collections.abc import Sequence
from typing import Any

from pgvector.sqlalchemy import Vector
from sqlalchemy import (
    BigInteger,
    Column,
    DateTime,
    Index,
    MetaData,
    Table,
    Text,
    cast,
    delete,
    distinct,
    func,
    insert,
    or_,
    select,
    text,
)
from sqlalchemy.dialects.postgresql import JSONB
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncEngine

from docqa.boundary.vdb.vector_schemas import (
    ChunkRecord,
    SchemaSyncResult,
    ScoredChunk,
    StoreSetupStatus,
    TableStats,
)
from docqa.core.exceptions import VectorStoreError

logger = logging.getLogger(__name__)

DOCUMENT_ID_KEYS = ("documentId", "document_id", "id")
REQUIRED_COLUMNS = ("id", "content", "metadata", "embedding")


def build_chunk_table(table_name: str, dimension: int, ivfflat_lists: int = 100) -> Table:
    """
    Define the chunk table and its indexes on a private MetaData.

    Args:
        table_name: Validated SQL identifier
        dimension: Embedding dimension D
        ivfflat_lists: Lists for the ivfflat cosine index

    Returns:
        Table: SQLAlchemy Core table with indexes attached
    """
    table = Table(
        table_name,
        MetaData(),
        Column("id", BigInteger, primary_key=True, autoincrement=True),
        Column("content", Text, nullable=False),
        Column("metadata", JSONB, nullable=True),
        Column("embedding", Vector(dimension), nullable=True),
        Column("created_at", DateTime(timezone=True), server_default=func.now()),
        Column("updated_at", DateTime(timezone=True), server_default=func.now()),
    )
    Index(
        f"{table_name}_embedding_idx",
        table.c.embedding,
        postgresql_using="ivfflat",
        postgresql_with={"lists": ivfflat_lists},
        postgresql_ops={"embedding": "vector_cosine_ops"},
    )
    Index(f"{table_name}_metadata_idx", table.c["metadata"], postgresql_using="gin")
    Index(f"{table_name}_created_at_idx", table.c.created_at)
    return table


def escape_like(fragment: str) -> str:
    """Escape LIKE wildcards so the fragment matches literally (escape char '\\')."""
    return fragment.replace("\\", "\\\\").replace("%", "\\%").replace("_", "\\_")


class PgVectorChunkStore:
    """
    Chunk store over an async SQLAlchemy engine.

    The engine is owned by the service container; the store never
    disposes it.
    """

    def __init__(
        self,
        engine: AsyncEngine,
        table_name: str = "documents",
        dimension: int = 1536,
        ivfflat_lists: int = 100,
    ) -> None:
        """
        Initialize chunk store.

        Args:
            engine: Async engine (asyncpg)
            table_name: Chunk table name
            dimension: Store-wide embedding dimension D
            ivfflat_lists: Lists for the ivfflat index created by sync_schema
        """
        self._engine = engine
        self._dimension = dimension
        self._table = build_chunk_table(table_name, dimension, ivfflat_lists)

    @property
    def table(self) -> Table:
        return self._table

    @property
    def dimension(self) -> int:
        return self._dimension

    @property
    def _metadata_col(self):
        return self._table.c["metadata"]

    def _chunk_columns(self) -> list:
        return [self._table.c.id, self._table.c.content, self._metadata_col]

    async def _fetch(self, stmt, operation: str) -> list[dict[str, Any]]:
        try:
            async with self._engine.connect() as conn:
                result = await conn.execute(stmt)
                return [dict(row) for row in result.mappings().all()]
        except SQLAlchemyError as e:
            logger.error(f"{__name__}:{operation} - Query failed: {e}")
            raise VectorStoreError(f"Chunk store {operation} failed: {e}", operation=operation) from e

    async def insert(
        self,
        content: str,
        metadata: dict[str, Any],
        embedding: Sequence[float],
    ) -> int:
        """
        Insert one chunk row in its own transaction.

        Args:
            content: Chunk text
            metadata: Metadata tags (must carry documentId)
            embedding: Vector of exactly D floats

        Returns:
            int: New row id

        Raises:
            VectorStoreError: Dimension mismatch or database failure
        """
        if len(embedding) != self._dimension:
            raise VectorStoreError(
                f"Embedding has {len(embedding)} dimensions, store expects {self._dimension}",
                operation="insert",
                details={"expected": self._dimension, "actual": len(embedding)},
            )

        stmt = (
            insert(self._table)
            .values(content=content, metadata=metadata, embedding=list(embedding))
            .returning(self._table.c.id)
        )
        try:
            async with self._engine.begin() as conn:
                result = await conn.execute(stmt)
                row_id = result.scalar_one()
        except SQLAlchemyError as e:
            logger.error(f"{__name__}:insert - Insert failed: {e}")
            raise VectorStoreError(f"Chunk insert failed: {e}", operation="insert") from e

        logger.debug(f"{__name__}:insert - Inserted chunk id={row_id}")
        return row_id

    async def find_by_document_id(self, document_id: str, limit: int = 100) -> list[ChunkRecord]:
        """
        Fetch chunks tagged with a document id under any alias key.

        Matches metadata documentId, document_id or id, ordered by row id.

        Args:
            document_id: Document identifier
            limit: Maximum rows

        Returns:
            list[ChunkRecord]: Matching rows in insertion order

        Raises:
            VectorStoreError: Database failure
        """
        meta = self._metadata_col
        stmt = (
            select(*self._chunk_columns())
            .where(or_(*(meta[key].astext == document_id for key in DOCUMENT_ID_KEYS)))
            .order_by(self._table.c.id)
            .limit(limit)
        )
        rows = await self._fetch(stmt, "find_by_document_id")
        return [ChunkRecord(**row) for row in rows]

    async def find_by_metadata_filter(
        self,
        metadata_filter: dict[str, Any],
        limit: int = 100,
    ) -> list[ChunkRecord]:
        """Fetch chunks whose metadata contains the filter object (JSONB @>)."""
        stmt = (
            select(*self._chunk_columns())
            .where(self._metadata_col.contains(metadata_filter))
            .order_by(self._table.c.id)
            .limit(limit)
        )
        rows = await self._fetch(stmt, "find_by_metadata_filter")
        return [ChunkRecord(**row) for row in rows]

    async def find_by_metadata_text(self, fragment: str, limit: int = 100) -> list[ChunkRecord]:
        """
        Fetch chunks whose serialized metadata contains a substring.

        Loose matching for the last-resort answer path; callers filter
        the result further.
        """
        pattern = f"%{escape_like(fragment)}%"
        stmt = (
            select(*self._chunk_columns())
            .where(cast(self._metadata_col, Text).like(pattern, escape="\\"))
            .order_by(self._table.c.id)
            .limit(limit)
        )
        rows = await self._fetch(stmt, "find_by_metadata_text")
        return [ChunkRecord(**row) for row in rows]

    async def similarity_search(
        self,
        query_vector: Sequence[float],
        k: int,
        threshold: float = 0.0,
        metadata_filter: dict[str, Any] | None = None,
    ) -> list[ScoredChunk]:
        """
        Cosine-similarity search.

        Args:
            query_vector: Vector of D floats
            k: Maximum rows
            threshold: Rows must have similarity strictly above this
            metadata_filter: Optional JSONB containment filter

        Returns:
            list[ScoredChunk]: Rows ordered by ascending cosine distance

        Raises:
            VectorStoreError: Database failure
        """
        distance = self._table.c.embedding.cosine_distance(list(query_vector))
        similarity = (1 - distance).label("similarity")

        stmt = select(*self._chunk_columns(), similarity).where(1 - distance > threshold)
        if metadata_filter:
            stmt = stmt.where(self._metadata_col.contains(metadata_filter))
        stmt = stmt.order_by(distance).limit(k)

        rows = await self._fetch(stmt, "similarity_search")
        logger.debug(f"{__name__}:similarity_search - {len(rows)} rows above {threshold}")
        return [ScoredChunk(**row) for row in rows]

    async def delete_by_ids(self, ids: Sequence[int]) -> int:
        """Delete rows by id. Returns the number of rows removed."""
        if not ids:
            return 0

        stmt = delete(self._table).where(self._table.c.id.in_(list(ids)))
        try:
            async with self._engine.begin() as conn:
                result = await conn.execute(stmt)
        except SQLAlchemyError as e:
            logger.error(f"{__name__}:delete_by_ids - Delete failed: {e}")
            raise VectorStoreError(f"Chunk delete failed: {e}", operation="delete") from e

        logger.info(f"{__name__}:delete_by_ids - Deleted {result.rowcount} chunks")
        return result.rowcount

    async def table_stats(self) -> TableStats:
        """
        Count chunks, distinct documents and null-vector rows.

        Raises:
            VectorStoreError: Database failure
        """
        embedding = self._table.c.embedding
        stmt = select(
            func.count().label("total_chunks"),
            func.count(distinct(self._metadata_col["documentId"].astext)).label("distinct_documents"),
            func.count().filter(func.vector_norm(embedding) == 0).label("null_vector_chunks"),
        ).select_from(self._table)

        rows = await self._fetch(stmt, "table_stats")
        return TableStats(**rows[0]) if rows else TableStats()

    async def sync_schema(self) -> SchemaSyncResult:
        """
        Idempotently create the extension, table and indexes.

        Each step runs in its own transaction so a failing index does not
        undo the table. Never raises.

        Returns:
            SchemaSyncResult: Completed steps and warnings
        """
        result = SchemaSyncResult()

        steps: list[tuple[str, Any]] = [
            ("vector_extension", lambda conn: conn.execute(text("CREATE EXTENSION IF NOT EXISTS vector"))),
            ("table", lambda conn: conn.run_sync(self._table.create, checkfirst=True)),
        ]
        for index in sorted(self._table.indexes, key=lambda ix: ix.name):
            steps.append(
                (f"index:{index.name}", lambda conn, ix=index: conn.run_sync(ix.create, checkfirst=True))
            )

        for name, step in steps:
            try:
                async with self._engine.begin() as conn:
                    await step(conn)
                result.steps_completed.append(name)
            except Exception as e:
                result.ok = False
                result.warnings.append(f"{name}: {e}")
                logger.warning(f"{__name__}:sync_schema - Step '{name}' failed: {e}")

        logger.info(
            f"{__name__}:sync_schema - Completed {len(result.steps_completed)}/{len(steps)} steps "
            f"for table '{self._table.name}'"
        )
        return result

    async def check_setup(self) -> StoreSetupStatus:
        """
        Report connection, extension and table readiness.

        Never raises; the first failure is reported in ``error``.
        """
        status = StoreSetupStatus()
        try:
            async with self._engine.connect() as conn:
                await conn.execute(text("SELECT 1"))
                status.connected = True

                ext = await conn.execute(
                    text("SELECT 1 FROM pg_extension WHERE extname = 'vector'")
                )
                status.vector_extension = ext.first() is not None

                cols = await conn.execute(
                    text(
                        "SELECT column_name FROM information_schema.columns "
                        "WHERE table_name = :table_name"
                    ),
                    {"table_name": self._table.name},
                )
                present = {row[0] for row in cols.all()}
                status.table_exists = bool(present)
                status.missing_columns = [c for c in REQUIRED_COLUMNS if c not in present]
        except Exception as e:
            status.error = f"{type(e).__name__}: {e}"
            logger.warning(f"{__name__}:check_setup - Setup check failed: {e}")

        return status
