"""
Tests for the answer synthesizer.

System role: Verification of answer degradation and never-raise behavior
"""

import asyncio
from unittest.mock import AsyncMock, MagicMock

import pytest

from docqa.core.answering.prompt import SYSTEM_PROMPT
from docqa.core.answering.synthesizer import (
    DOCUMENT_NOT_FOUND_ANSWER,
    DOCUMENT_NOT_PROCESSED_ANSWER,
    NO_RELEVANT_CHUNKS_ANSWER,
    UNEXPECTED_ERROR_ANSWER,
    AnswerSynthesizer,
)
from docqa.core.retrieval.retriever import RelevanceRetriever


def tags(document_id: str) -> dict:
    return {"documentId": document_id, "document_id": document_id, "id": document_id}


@pytest.fixture
def synthesizer(chunk_store, registry, embedder, chat_backend) -> AnswerSynthesizer:
    retriever = RelevanceRetriever(chunk_store, registry, embedder)
    return AnswerSynthesizer(retriever, chunk_store, chat_backend)


@pytest.fixture
def invoice_document(chunk_store, registry):
    registry.add("X", vectorized=True)
    chunk_store.add_chunk("invoice total $500", tags("X"))
    chunk_store.add_chunk("shipping address: Jane Smith, 12 Main Road", tags("X"))
    return "X"


class TestModelAnswers:
    """Test suite for the happy path."""

    @pytest.mark.asyncio
    async def test_llm_answer_with_sources(self, synthesizer, chat_backend, invoice_document):
        result = await synthesizer.answer(invoice_document, "what is the total", top_k=5)

        assert result.answer == "The total is $500."
        assert result.mode == "llm"
        assert [s.content for s in result.sources][0] == "invoice total $500"
        assert len(result.sources) == 2

    @pytest.mark.asyncio
    async def test_context_joined_with_blank_lines(self, synthesizer, chat_backend, invoice_document):
        await synthesizer.answer(invoice_document, "what is the total")

        call = chat_backend.calls[0]
        assert call["system_prompt"] == SYSTEM_PROMPT
        assert call["context"] == "invoice total $500\n\nshipping address: Jane Smith, 12 Main Road"
        assert call["question"] == "what is the total"


class TestStructuralMessages:
    """Test suite for fixed user-facing messages."""

    @pytest.mark.asyncio
    async def test_unknown_document(self, synthesizer, chat_backend):
        result = await synthesizer.answer("missing", "anything")

        assert result.answer == DOCUMENT_NOT_FOUND_ANSWER
        assert result.sources == []
        assert chat_backend.calls == []

    @pytest.mark.asyncio
    async def test_unprocessed_document(self, synthesizer, registry):
        registry.add("X", vectorized=False)

        result = await synthesizer.answer("X", "anything")

        assert result.answer == DOCUMENT_NOT_PROCESSED_ANSWER
        assert result.sources == []

    @pytest.mark.asyncio
    async def test_no_relevant_chunks(self, synthesizer, registry, embedder):
        registry.add("X", vectorized=True)
        embedder.null = True

        result = await synthesizer.answer("X", "anything")

        assert result.answer == NO_RELEVANT_CHUNKS_ANSWER
        assert result.sources == []


class TestHeuristicFallback:
    """Test suite for degraded answers when the model fails."""

    @pytest.mark.asyncio
    async def test_failing_llm_returns_names_from_chunks(self, synthesizer, chat_backend, invoice_document):
        chat_backend.error = ConnectionError("model backend down")

        result = await synthesizer.answer(invoice_document, "who wrote this")

        assert result.mode == "heuristic"
        assert "Jane Smith" in result.answer
        assert "$500" not in result.answer
        assert len(result.sources) == 2

    @pytest.mark.asyncio
    async def test_timeout_uses_heuristics(self, synthesizer, chat_backend, invoice_document):
        chat_backend.error = asyncio.TimeoutError()

        result = await synthesizer.answer(invoice_document, "who wrote this")

        assert result.mode == "heuristic"
        assert len(chat_backend.calls) == 1

    @pytest.mark.asyncio
    async def test_empty_model_output_uses_heuristics(self, synthesizer, chat_backend, invoice_document):
        chat_backend.answer = "   "

        result = await synthesizer.answer(invoice_document, "who wrote this")

        assert result.mode == "heuristic"
        assert "Jane Smith" in result.answer


class TestLastResortSearch:
    """Test suite for loose metadata search after retrieval fails."""

    @pytest.mark.asyncio
    async def test_loose_metadata_match_used(self, synthesizer, chunk_store, registry, embedder):
        registry.add("doc-1", vectorized=True)
        embedder.null = True
        chunk_store.add_chunk("revised invoice total $700", {"documentId": "doc-1-rev2"})
        chunk_store.add_chunk("unrelated", {"documentId": "doc-9"})

        result = await synthesizer.answer("doc-1", "what is the total")

        assert [s.content for s in result.sources] == ["revised invoice total $700"]
        assert result.mode == "llm"

    @pytest.mark.asyncio
    async def test_store_failure_during_last_resort(self, synthesizer, chunk_store, registry, embedder):
        registry.add("doc-1", vectorized=True)
        embedder.null = True
        chunk_store.fail_reads = True

        result = await synthesizer.answer("doc-1", "what is the total")

        assert result.answer == NO_RELEVANT_CHUNKS_ANSWER


class TestNeverRaises:
    """Test suite for the generic apology path."""

    @pytest.mark.asyncio
    async def test_unexpected_error_returns_apology(self, chunk_store, registry, embedder, chat_backend, invoice_document):
        chat_backend.error = RuntimeError("model down")
        heuristics = MagicMock()
        heuristics.answer.side_effect = ValueError("extractor bug")
        synthesizer = AnswerSynthesizer(
            RelevanceRetriever(chunk_store, registry, embedder),
            chunk_store,
            chat_backend,
            heuristics=heuristics,
        )

        result = await synthesizer.answer(invoice_document, "who wrote this")

        assert result.answer == UNEXPECTED_ERROR_ANSWER
        assert result.sources == []

    @pytest.mark.asyncio
    async def test_retriever_crash_goes_to_last_resort(self, chunk_store, chat_backend):
        retriever = MagicMock()
        retriever.find_relevant = AsyncMock(side_effect=RuntimeError("boom"))
        chunk_store.add_chunk("fallback content about totals", {"documentId": "X"})
        synthesizer = AnswerSynthesizer(retriever, chunk_store, chat_backend)

        result = await synthesizer.answer("X", "totals")

        assert [s.content for s in result.sources] == ["fallback content about totals"]
