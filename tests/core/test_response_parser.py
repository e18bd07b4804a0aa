"""
Tests for upstream embedding response parsing.

System role: Verification of vector extraction rules
"""

import pytest

from docqa.core.embeddings.response_parser import (
    EmbeddingResponseParser,
    extract_vector_from_text,
)
from docqa.core.exceptions import EmbeddingParseError


@pytest.fixture
def parser() -> EmbeddingResponseParser:
    return EmbeddingResponseParser()


class TestEmbeddingResponseParser:
    """Test suite for JSON payload extraction."""

    def test_embedding_field(self, parser):
        assert parser.parse({"embedding": [0.1, 0.2]}) == [0.1, 0.2]

    def test_embeddings_first_row(self, parser):
        assert parser.parse({"embeddings": [[1, 2, 3], [4, 5, 6]]}) == [1.0, 2.0, 3.0]

    def test_openai_style_data(self, parser):
        assert parser.parse({"data": [{"embedding": [0.5, -0.5]}]}) == [0.5, -0.5]

    def test_rule_priority(self, parser):
        """Test embedding wins over embeddings when both are present."""
        assert parser.parse({"embedding": [1.0], "embeddings": [[2.0]]}) == [1.0]

    def test_invalid_rule_falls_through(self, parser):
        """Test an unusable higher-priority field does not block a later rule."""
        assert parser.parse({"embedding": [], "embeddings": [[3.0]]}) == [3.0]

    @pytest.mark.parametrize(
        "payload",
        [
            {},
            {"embedding": "not a vector"},
            {"embedding": [True, False]},
            {"embeddings": []},
            {"data": [{}]},
            ["not", "a", "dict"],
        ],
    )
    def test_no_usable_vector_raises(self, parser, payload):
        with pytest.raises(EmbeddingParseError):
            parser.parse(payload)


class TestExtractVectorFromText:
    """Test suite for free-text array extraction."""

    def test_array_surrounded_by_prose(self):
        text = "Here is the embedding: [0.1, -0.2, 0.3] hope it helps"
        assert extract_vector_from_text(text) == [0.1, -0.2, 0.3]

    def test_multiline_array(self):
        assert extract_vector_from_text("[\n  0.25,\n  0.75\n]") == [0.25, 0.75]

    def test_skips_malformed_brackets(self):
        """Test the first well-formed numeric array is used."""
        assert extract_vector_from_text("[note] then [1, 2]") == [1.0, 2.0]

    def test_rejects_non_finite(self):
        with pytest.raises(EmbeddingParseError):
            extract_vector_from_text("[NaN, 1.0]")

    def test_no_array_raises(self):
        with pytest.raises(EmbeddingParseError):
            extract_vector_from_text("I cannot produce embeddings.")
