"""
Upstream embedding response parsing.

Model backends disagree on where the vector lives in their JSON
(``embedding``, ``embeddings[0]``, OpenAI-style ``data[0].embedding``) and
chat-style endpoints return it inside free text. Parsing is an explicit,
ordered list of extraction rules; the first rule yielding a valid numeric
vector wins.

Dependencies: None
System role: Typed vector extraction for the embedding cascade
"""

import json
import math
import re
from collections.abc import Callable
from typing import Any

from docqa.core.exceptions import EmbeddingParseError

_BRACKETED = re.compile(r"\[[\s\S]*?\]")

ExtractionRule = Callable[[Any], Any]


def _validate_vector(candidate: Any) -> list[float] | None:
    """Return candidate as floats if it is a non-empty list of finite numbers."""
    if not isinstance(candidate, list) or not candidate:
        return None
    values: list[float] = []
    for item in candidate:
        if isinstance(item, bool) or not isinstance(item, (int, float)):
            return None
        value = float(item)
        if not math.isfinite(value):
            return None
        values.append(value)
    return values


def _rule_embedding(payload: Any) -> Any:
    return payload["embedding"]


def _rule_embeddings_first(payload: Any) -> Any:
    return payload["embeddings"][0]


def _rule_data_first(payload: Any) -> Any:
    return payload["data"][0]["embedding"]


DEFAULT_RULES: tuple[tuple[str, ExtractionRule], ...] = (
    ("embedding", _rule_embedding),
    ("embeddings[0]", _rule_embeddings_first),
    ("data[0].embedding", _rule_data_first),
)


class EmbeddingResponseParser:
    """
    Extracts a vector from a decoded JSON payload.

    Rules are tried in order; a rule that raises a lookup error or yields
    something other than a numeric list is skipped.
    """

    def __init__(self, rules: tuple[tuple[str, ExtractionRule], ...] = DEFAULT_RULES) -> None:
        self._rules = rules

    def parse(self, payload: Any) -> list[float]:
        """
        Extract a vector from a JSON payload.

        Args:
            payload: Decoded response body

        Returns:
            list[float]: Non-empty vector of finite floats

        Raises:
            EmbeddingParseError: No rule produced a valid vector
        """
        for _name, rule in self._rules:
            try:
                candidate = rule(payload)
            except (KeyError, IndexError, TypeError):
                continue
            vector = _validate_vector(candidate)
            if vector is not None:
                return vector

        keys = sorted(payload) if isinstance(payload, dict) else type(payload).__name__
        raise EmbeddingParseError(
            "No embedding vector found in response",
            {"tried_rules": [name for name, _ in self._rules], "payload_keys": keys},
        )


def extract_vector_from_text(text: str) -> list[float]:
    """
    Extract the first well-formed bracketed numeric array from free text.

    Args:
        text: Model output, e.g. "Here you go: [0.1, -0.3, ...]"

    Returns:
        list[float]: Parsed vector

    Raises:
        EmbeddingParseError: No bracketed numeric array in the text
    """
    for match in _BRACKETED.finditer(text or ""):
        try:
            candidate = json.loads(match.group(0))
        except ValueError:
            continue
        vector = _validate_vector(candidate)
        if vector is not None:
            return vector

    raise EmbeddingParseError(
        "No numeric array found in model output",
        {"output_preview": (text or "")[:100]},
    )
