"""
Database connection management.

Builds the async SQLAlchemy engine (asyncpg driver) and the session
factory. Both are created once by the service container; nothing here is
a module-level singleton. pgvector values travel as text through the
``pgvector.sqlalchemy`` column type, so no driver codec is registered.

Dependencies: sqlalchemy, asyncpg, docqa.configs
System role: Database connection lifecycle management
"""

import logging

from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker, create_async_engine

from docqa.configs.database import DatabaseSettings

logger = logging.getLogger(__name__)


def create_engine_from_settings(db_config: DatabaseSettings) -> AsyncEngine:
    """
    Create async SQLAlchemy engine with a bounded connection pool.

    Uses the default async queue pool: at most pool_size + max_overflow
    connections; further checkouts wait pool_timeout seconds.
    pool_pre_ping=True detects stale connections before use.

    Args:
        db_config: Database settings

    Returns:
        AsyncEngine: Configured async engine

    Usage:
        engine = create_engine_from_settings(settings.database)
        async with engine.connect() as conn:
            result = await conn.execute(text("SELECT 1"))
    """
    engine = create_async_engine(
        db_config.async_database_url,
        echo=db_config.echo_sql,
        pool_size=db_config.pool_size,
        max_overflow=db_config.max_overflow,
        pool_timeout=db_config.pool_timeout,
        pool_pre_ping=True,
    )

    logger.info(
        f"{__name__}:create_engine_from_settings - Engine created for "
        f"{db_config.host}:{db_config.port}/{db_config.db} "
        f"(pool_size={db_config.pool_size}, max_overflow={db_config.max_overflow})"
    )
    return engine


def create_session_factory(engine: AsyncEngine) -> async_sessionmaker[AsyncSession]:
    """
    Create async session factory bound to an engine.

    autoflush=False and expire_on_commit=False keep ORM objects usable
    after commit for explicit transaction control.

    Returns:
        async_sessionmaker: Session factory

    Usage:
        SessionFactory = create_session_factory(engine)
        async with SessionFactory() as session:
            session.add(obj)
            await session.commit()
    """
    return async_sessionmaker(
        bind=engine,
        autoflush=False,
        expire_on_commit=False,
    )
