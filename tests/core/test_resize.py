"""
Tests for embedding length adaptation.

System role: Verification of resize rules and null-vector detection
"""

import pytest

from docqa.core.embeddings.resize import is_null_vector, resize_embedding


class TestResizeEmbedding:
    """Test suite for resize_embedding."""

    def test_same_length_unchanged(self):
        """Test vector already at target length is returned as-is."""
        vector = [0.1, -0.2, 0.3]
        assert resize_embedding(vector, 3) == vector

    def test_resize_is_idempotent(self):
        """Test resizing twice equals resizing once."""
        once = resize_embedding([1.0, 2.0, 3.0, 4.0, 5.0], 3)
        assert resize_embedding(once, 3) == once

    def test_exact_multiple_is_group_averaged(self):
        """Test longer vector with length multiple of target is averaged in groups."""
        assert resize_embedding([1.0, 3.0, 5.0, 7.0, 9.0, 11.0], 3) == [2.0, 6.0, 10.0]

    def test_longer_non_multiple_is_truncated(self):
        """Test longer vector that is not a multiple is truncated."""
        assert resize_embedding([1.0, 2.0, 3.0, 4.0, 5.0], 3) == [1.0, 2.0, 3.0]

    def test_shorter_is_tiled_then_truncated(self):
        """Test shorter vector is repeated cyclically."""
        assert resize_embedding([1.0, 2.0], 5) == [1.0, 2.0, 1.0, 2.0, 1.0]

    def test_common_model_dimensions_reach_store_dimension(self):
        """Test typical backend lengths all map to 1536."""
        for length in (64, 384, 768, 1024, 3072, 4096):
            assert len(resize_embedding([0.5] * length, 1536)) == 1536

    def test_empty_vector_rejected(self):
        """Test empty input raises ValueError."""
        with pytest.raises(ValueError):
            resize_embedding([], 3)

    def test_non_positive_target_rejected(self):
        """Test zero target dimension raises ValueError."""
        with pytest.raises(ValueError):
            resize_embedding([1.0], 0)


class TestIsNullVector:
    """Test suite for is_null_vector."""

    def test_all_zeros_is_null(self):
        assert is_null_vector([0.0] * 8)

    def test_single_nonzero_is_not_null(self):
        assert not is_null_vector([0.0, 0.0, 1e-9])
