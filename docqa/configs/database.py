"""
Database configuration settings.

Manages PostgreSQL connection parameters for SQLAlchemy.
The async pool is bounded: once pool_size + max_overflow connections are
checked out, further requests wait up to pool_timeout seconds.

Dependencies: pydantic, pydantic_settings
System role: Database connection configuration for the chunk store and registry
"""

from pydantic import Field

from docqa.configs.base import BaseSettings, settings_config


class DatabaseSettings(BaseSettings):
    """PostgreSQL database configuration."""

    model_config = settings_config("POSTGRES_")

    host: str = Field(default="localhost", description="PostgreSQL host")
    port: int = Field(default=5432, description="PostgreSQL port")
    user: str = Field(default="postgres", description="PostgreSQL user")
    password: str = Field(default="postgres", description="PostgreSQL password")
    db: str = Field(default="docqa", description="PostgreSQL database name")

    pool_size: int = Field(default=20, description="Connection pool hard cap")
    max_overflow: int = Field(default=0, description="Connections allowed beyond pool_size")
    pool_timeout: int = Field(
        default=60,
        description="Seconds a request waits for a pooled connection before failing",
    )
    echo_sql: bool = Field(default=False, description="Echo SQL statements to logs")

    sslmode: str = Field(default="disable", description="SSL mode (disable, require)")

    @property
    def async_database_url(self) -> str:
        """
        Construct async PostgreSQL connection URL.

        Returns:
            str: SQLAlchemy async-compatible database URL (asyncpg uses 'ssl' param)
        """
        ssl_param = "?ssl=require" if self.sslmode == "require" else ""
        return (
            f"postgresql+asyncpg://{self.user}:{self.password}"
            f"@{self.host}:{self.port}/{self.db}{ssl_param}"
        )
