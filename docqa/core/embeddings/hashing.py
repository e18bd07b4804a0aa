"""
Deterministic hashing embedding.

Last strategy of the embedding cascade. Needs no backend and cannot fail:
word frequencies are spread over hashed positions, a small length bias is
added, and the result is L2-normalized. Equal inputs always produce equal
vectors, and texts sharing frequent words land close together.

Dependencies: None
System role: Always-available embedding fallback
"""

import math
import re
from collections import Counter

_NON_WORD = re.compile(r"[^\w\s]")

LENGTH_BIAS_STRIDE = 200
LENGTH_BIAS_SCALE = 10000.0
MIN_WORD_LENGTH = 3


def string_hash(value: str) -> int:
    """
    32-bit signed rolling hash: ``h = h * 31 + ord(c)`` with int32 wraparound.

    Args:
        value: Input string

    Returns:
        int: Hash in [-2**31, 2**31)
    """
    h = 0
    for char in value:
        h = ((h << 5) - h + ord(char)) & 0xFFFFFFFF
    if h >= 0x80000000:
        h -= 0x100000000
    return h


def tokenize(text: str) -> list[str]:
    """Lowercase, replace punctuation with spaces and split on whitespace."""
    return _NON_WORD.sub(" ", text.lower()).split()


def pseudo_embedding(
    text: str,
    dimension: int,
    top_words: int = 100,
    positions_per_word: int = 16,
) -> list[float]:
    """
    Build a deterministic unit-length (or zero) vector from word statistics.

    Args:
        text: Input text; may be empty
        dimension: Output length
        top_words: Number of most frequent words (length >= 3) used
        positions_per_word: Hashed positions each word contributes to

    Returns:
        list[float]: Vector of length ``dimension``. All zeros only when the
            text is empty; otherwise L2 norm is 1.
    """
    vector = [0.0] * dimension
    words = tokenize(text)
    total = len(words)

    if total:
        counts = Counter(word for word in words if len(word) >= MIN_WORD_LENGTH)
        # Counter preserves first-seen order, sorted() is stable
        ranked = sorted(counts.items(), key=lambda item: item[1], reverse=True)[:top_words]

        for word_index, (word, freq) in enumerate(ranked):
            h = string_hash(word)
            value = (freq / total) * (1 - word_index * 0.01)
            for i in range(positions_per_word):
                position = abs(h * (i + 1)) % dimension
                vector[position] += value

    bias = len(text) / LENGTH_BIAS_SCALE
    for i in range(0, dimension, LENGTH_BIAS_STRIDE):
        vector[i] += bias

    magnitude = math.sqrt(sum(v * v for v in vector)) or 1.0
    return [v / magnitude for v in vector]
