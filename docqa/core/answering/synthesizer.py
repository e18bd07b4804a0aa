"""
Answer synthesizer.

Turns (document, question) into an answer with its source chunks and
never raises. Structural problems become fixed user-facing messages,
retrieval failures get one last loose metadata search, and model
failures degrade to heuristic extraction without further network calls.

Dependencies: docqa.core.retrieval, docqa.boundary.llm, docqa.core.answering.heuristics
System role: Question answering entry point
"""

import logging
import time
from dataclasses import dataclass, field
from typing import Protocol

from docqa.boundary.llm.chat_backend import ChatBackend
from docqa.boundary.vdb.vector_schemas import ChunkMatch, ChunkRecord
from docqa.core.answering.heuristics import HeuristicAnswerer
from docqa.core.answering.prompt import SYSTEM_PROMPT, build_context
from docqa.core.exceptions import DocumentNotFoundError, DocumentNotVectorizedError
from docqa.core.retrieval.retriever import RelevanceRetriever
from docqa.core.retrieval.scoring import loosely_matches_document, score_chunks
from docqa.observability.log_utils import log_answer_event, log_exception_with_context

logger = logging.getLogger(__name__)

DOCUMENT_NOT_FOUND_ANSWER = (
    "I couldn't find the document you're referring to. "
    "Please check that the document ID is correct."
)
DOCUMENT_NOT_PROCESSED_ANSWER = (
    "This document hasn't been processed for questions yet. "
    "Please process the document first using the /process endpoint."
)
NO_RELEVANT_CHUNKS_ANSWER = (
    "I couldn't find relevant information in the document to answer your question."
)
UNEXPECTED_ERROR_ANSWER = (
    "I encountered an unexpected error while trying to answer your question. "
    "Please try again or contact support if the issue persists."
)


@dataclass
class AnswerResult:
    """Answer text plus the chunks it was drawn from."""

    answer: str
    sources: list[ChunkMatch] = field(default_factory=list)
    mode: str = "llm"


class MetadataTextSearch(Protocol):
    async def find_by_metadata_text(self, fragment: str, limit: int = 100) -> list[ChunkRecord]: ...


class AnswerSynthesizer:
    """Retrieves context and generates an answer, degrading step by step."""

    def __init__(
        self,
        retriever: RelevanceRetriever,
        store: MetadataTextSearch,
        chat_backend: ChatBackend,
        heuristics: HeuristicAnswerer | None = None,
        fallback_row_limit: int = 100,
    ) -> None:
        self._retriever = retriever
        self._store = store
        self._chat_backend = chat_backend
        self._heuristics = heuristics or HeuristicAnswerer()
        self._fallback_row_limit = fallback_row_limit

    async def answer(self, document_id: str, question: str, top_k: int = 5) -> AnswerResult:
        """
        Answer a question about one document.

        Args:
            document_id: Registry document id
            question: User question
            top_k: Maximum source chunks

        Returns:
            AnswerResult: Always; failures are expressed in the answer text
        """
        started = time.perf_counter()
        try:
            result = await self._answer(document_id, question, top_k)
        except Exception as e:
            log_exception_with_context(
                logger,
                f"{__name__}:answer - Unexpected failure answering question",
                e,
                document_id=document_id,
                question=question,
            )
            result = AnswerResult(answer=UNEXPECTED_ERROR_ANSWER, mode="error")

        log_answer_event(
            logger, document_id, result.mode, len(result.sources),
            (time.perf_counter() - started) * 1000,
        )
        return result

    async def _answer(self, document_id: str, question: str, top_k: int) -> AnswerResult:
        try:
            chunks = await self._retriever.find_relevant(document_id, question, top_k)
        except DocumentNotFoundError:
            logger.error(f"{__name__}:_answer - Document {document_id} not found")
            return AnswerResult(answer=DOCUMENT_NOT_FOUND_ANSWER, mode="message")
        except DocumentNotVectorizedError:
            logger.error(f"{__name__}:_answer - Document {document_id} not vectorized")
            return AnswerResult(answer=DOCUMENT_NOT_PROCESSED_ANSWER, mode="message")
        except Exception as e:
            logger.warning(
                f"{__name__}:_answer - Retrieval failed ({type(e).__name__}: {e}), "
                "trying loose metadata search"
            )
            chunks = await self._last_resort_chunks(document_id, question, top_k)

        if not chunks:
            return AnswerResult(answer=NO_RELEVANT_CHUNKS_ANSWER, mode="message")

        contents = [chunk.content for chunk in chunks]
        answer = await self._generate(question, contents)
        if answer is not None:
            return AnswerResult(answer=answer, sources=chunks, mode="llm")

        return AnswerResult(
            answer=self._heuristics.answer(question, contents),
            sources=chunks,
            mode="heuristic",
        )

    async def _last_resort_chunks(
        self,
        document_id: str,
        question: str,
        top_k: int,
    ) -> list[ChunkMatch]:
        try:
            rows = await self._store.find_by_metadata_text(document_id, limit=self._fallback_row_limit)
        except Exception as e:
            logger.error(f"{__name__}:_last_resort_chunks - Loose metadata search failed: {e}")
            return []

        matching = [row for row in rows if loosely_matches_document(row.metadata, document_id)]
        return [row.to_match() for row in score_chunks(matching, question, top_k)]

    async def _generate(self, question: str, contents: list[str]) -> str | None:
        """Model answer, or None when the backend failed, timed out or returned nothing."""
        try:
            answer = await self._chat_backend.generate(
                SYSTEM_PROMPT, build_context(contents), question
            )
        except Exception as e:
            logger.warning(
                f"{__name__}:_generate - Chat backend failed ({type(e).__name__}: {e}), "
                "using heuristic extraction"
            )
            return None

        if not answer or not answer.strip():
            logger.warning(f"{__name__}:_generate - Empty model output, using heuristic extraction")
            return None
        return answer.strip()
