"""Tests for sanitized structured logging helpers."""

import logging

from docqa.observability.log_utils import (
    log_answer_event,
    log_retrieval_event,
    safe_log_value,
    summarize_vector,
)


class TestSafeLogValue:
    """Test value sanitization."""

    def test_vectors_are_summarized(self) -> None:
        assert safe_log_value([0.0] * 1536) == "vector(dim=1536, norm=0.0000, nonzero=0)"

    def test_long_strings_truncated(self) -> None:
        value = safe_log_value("x" * 500, max_length=10)

        assert value.startswith("xxxxxxxxxx...")
        assert "500 total" in value

    def test_dicts_show_keys_only(self) -> None:
        assert safe_log_value({"b": "secret", "a": 1}) == "dict(keys=['a', 'b'])"

    def test_summarize_vector(self) -> None:
        assert summarize_vector([3.0, 4.0, 0.0]) == "vector(dim=3, norm=5.0000, nonzero=2)"


class TestPipelineEvents:
    """Test retrieval and answer event records."""

    def test_retrieval_event_attributes(self, caplog) -> None:
        logger = logging.getLogger("test.retrieval")
        with caplog.at_level(logging.INFO, logger="test.retrieval"):
            log_retrieval_event(logger, "doc-1", "tier1", 8, 5, 12.3456)

        record = caplog.records[0]
        assert record.tier == "tier1"
        assert record.document_id == "doc-1"
        assert record.elapsed_ms == "12.35"

    def test_degraded_answers_logged_as_warning(self, caplog) -> None:
        logger = logging.getLogger("test.answer")
        with caplog.at_level(logging.INFO, logger="test.answer"):
            log_answer_event(logger, "doc-1", "llm", 3, 1.0)
            log_answer_event(logger, "doc-1", "heuristic", 3, 1.0)

        assert [r.levelno for r in caplog.records] == [logging.INFO, logging.WARNING]
        assert caplog.records[1].answer_mode == "heuristic"
