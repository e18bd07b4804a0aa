"""Tests for settings defaults and environment overrides."""

from unittest.mock import AsyncMock, MagicMock, patch

import pytest
from pydantic import ValidationError

from docqa.configs.base import BaseSettings
from docqa.configs.database import DatabaseSettings
from docqa.configs.embedding import EmbeddingSettings
from docqa.configs.llm import LLMSettings
from docqa.configs.retrieval import RetrievalSettings
from docqa.configs.settings import Settings
from docqa.configs.vector_store import VectorStoreSettings
from docqa.main import create_app


class TestSettings:
    """Test configuration loading."""

    def test_defaults(self) -> None:
        settings = Settings()

        assert settings.retrieval.similarity_threshold == 0.1
        assert settings.retrieval.chunk_size == 1000
        assert settings.retrieval.chunk_overlap == 200
        assert settings.embedding.hash_top_words == 100
        assert settings.embedding.hash_positions_per_word == 16

    def test_environment_override(self, monkeypatch) -> None:
        monkeypatch.setenv("RETRIEVAL_SIMILARITY_THRESHOLD", "0.35")
        monkeypatch.setenv("RETRIEVAL_EMBEDDING_CONCURRENCY", "4")

        retrieval = RetrievalSettings()

        assert retrieval.similarity_threshold == 0.35
        assert retrieval.embedding_concurrency == 4

    def test_overlap_must_be_smaller_than_chunk(self) -> None:
        with pytest.raises(ValidationError):
            RetrievalSettings(chunk_size=100, chunk_overlap=100)

    def test_async_database_url(self) -> None:
        db = DatabaseSettings(host="db", port=5433, user="u", password="p", db="docs", sslmode="require")

        assert db.async_database_url == "postgresql+asyncpg://u:p@db:5433/docs?ssl=require"


class TestDotEnvLoading:
    """Test suite for reading every settings group from a .env file."""

    ENV_KEYS = (
        "POSTGRES_HOST",
        "EMBEDDING_MODEL",
        "LLM_MODEL",
        "RETRIEVAL_SIMILARITY_THRESHOLD",
        "VECTOR_STORE_TABLE_NAME",
        "DEBUG",
    )

    def test_values_loaded_from_env_file(self, tmp_path, monkeypatch) -> None:
        for key in self.ENV_KEYS:
            monkeypatch.delenv(key, raising=False)
        (tmp_path / ".env").write_text(
            "\n".join([
                "POSTGRES_HOST=envhost",
                "EMBEDDING_MODEL=nomic-embed-text",
                "LLM_MODEL=mistral",
                "RETRIEVAL_SIMILARITY_THRESHOLD=0.3",
                "VECTOR_STORE_TABLE_NAME=env_chunks",
                "DEBUG=true",
            ]),
            encoding="utf-8",
        )
        monkeypatch.chdir(tmp_path)

        settings = Settings()

        assert settings.database.host == "envhost"
        assert settings.embedding.model == "nomic-embed-text"
        assert settings.llm.model == "mistral"
        assert settings.retrieval.similarity_threshold == 0.3
        assert settings.vector_store.table_name == "env_chunks"
        assert settings.debug is True

    def test_process_environment_wins_over_env_file(self, tmp_path, monkeypatch) -> None:
        (tmp_path / ".env").write_text("EMBEDDING_MODEL=from-file\n", encoding="utf-8")
        monkeypatch.chdir(tmp_path)
        monkeypatch.setenv("EMBEDDING_MODEL", "from-env")

        assert EmbeddingSettings().model == "from-env"

    def test_every_settings_group_shares_the_base(self) -> None:
        for settings_cls in (
            DatabaseSettings,
            EmbeddingSettings,
            LLMSettings,
            RetrievalSettings,
            VectorStoreSettings,
        ):
            assert issubclass(settings_cls, BaseSettings)
            assert settings_cls.model_config["env_file"] == ".env"


class TestAppWiring:
    """Test suite for settings flowing into the FastAPI app."""

    def test_debug_flag_passed_to_fastapi(self) -> None:
        assert create_app(Settings(debug=True)).debug is True
        assert create_app(Settings(debug=False)).debug is False

    @pytest.mark.asyncio
    async def test_container_closed_when_app_fails_while_serving(self) -> None:
        container = MagicMock()
        container.startup = AsyncMock()
        container.aclose = AsyncMock()
        app = create_app(Settings())

        with patch("docqa.main.ServiceContainer.from_settings", return_value=container):
            with pytest.raises(RuntimeError):
                async with app.router.lifespan_context(app):
                    raise RuntimeError("boom")

        container.startup.assert_awaited_once()
        container.aclose.assert_awaited_once()
