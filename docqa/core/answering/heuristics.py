"""
Heuristic answer extraction.

Used when the language model is unavailable. The question's leading
interrogative picks an extractor; extractors only ever return text found
in the retrieved chunks.

Dependencies: None
System role: Offline degraded answering
"""

import re
from collections.abc import Callable, Sequence

from docqa.core.answering.prompt import NO_INFORMATION_ANSWER

_SENTENCE_SPLIT = re.compile(r"[.!?]+")
_PERSON_NAME = re.compile(r"\b[A-Z][a-z]+ [A-Z][a-z]+\b")
_DATE = re.compile(
    r"\b(?:\d{4}-\d{1,2}-\d{1,2}"
    r"|\d{1,2}[/.-]\d{1,2}[/.-]\d{2,4}"
    r"|1\d{3}|20\d{2})\b"
)

PLACE_SUFFIXES = ("City", "District", "State", "Country", "County", "Province", "Region")
KNOWN_CITIES = (
    "New York", "Los Angeles", "San Francisco", "Chicago", "Toronto", "London",
    "Paris", "Berlin", "Madrid", "Rome", "Amsterdam", "Tokyo", "Beijing",
    "Shanghai", "Mumbai", "Delhi", "Singapore", "Dubai", "Sydney", "Melbourne",
)
_PLACE = re.compile(
    r"\b(?:(?:[A-Z][a-z]+ )+(?:" + "|".join(PLACE_SUFFIXES) + r")"
    r"|" + "|".join(re.escape(city) for city in KNOWN_CITIES) + r")\b"
)

WHAT_SENTENCE_MIN = 20
GENERIC_SENTENCE_MIN = 30


def split_sentences(text: str, min_length: int) -> list[str]:
    """Split on sentence punctuation, keep stripped sentences longer than min_length."""
    return [s.strip() for s in _SENTENCE_SPLIT.split(text) if len(s.strip()) > min_length]


def _unique(items: Sequence[str], limit: int) -> list[str]:
    seen: list[str] = []
    for item in items:
        if item not in seen:
            seen.append(item)
        if len(seen) == limit:
            break
    return seen


class HeuristicAnswerer:
    """
    Keyword-dispatched extractive answers.

    Keywords are matched as whole words, case-insensitively, in the order
    what, who, when, where. If the matched extractor finds nothing the
    generic extractor runs.
    """

    def __init__(self) -> None:
        self._extractors: list[tuple[re.Pattern, Callable[[list[str]], str | None]]] = [
            (re.compile(r"\bwhat\b", re.IGNORECASE), self._answer_what),
            (re.compile(r"\bwho\b", re.IGNORECASE), self._answer_who),
            (re.compile(r"\bwhen\b", re.IGNORECASE), self._answer_when),
            (re.compile(r"\bwhere\b", re.IGNORECASE), self._answer_where),
        ]

    def answer(self, question: str, contents: Sequence[str]) -> str:
        """
        Build an answer from chunk contents without a model.

        Args:
            question: User question
            contents: Retrieved chunk texts, most relevant first

        Returns:
            str: Extracted answer, or the fixed no-information answer
        """
        chunks = [c for c in contents if c]

        for pattern, extractor in self._extractors:
            if pattern.search(question):
                extracted = extractor(chunks)
                if extracted:
                    return extracted
                break

        return self._answer_generic(chunks)

    @staticmethod
    def _answer_what(chunks: list[str]) -> str | None:
        sentences = [s for chunk in chunks for s in split_sentences(chunk, WHAT_SENTENCE_MIN)][:5]
        if not sentences:
            return None
        return ". ".join(sentences) + "."

    @staticmethod
    def _answer_who(chunks: list[str]) -> str | None:
        names = _unique([m for chunk in chunks for m in _PERSON_NAME.findall(chunk)], 3)
        if not names:
            return None
        return f"The document mentions: {', '.join(names)}."

    @staticmethod
    def _answer_when(chunks: list[str]) -> str | None:
        dates = _unique([m for chunk in chunks for m in _DATE.findall(chunk)], 3)
        if not dates:
            return None
        return f"Relevant dates in the document: {', '.join(dates)}."

    @staticmethod
    def _answer_where(chunks: list[str]) -> str | None:
        places = _unique([m for chunk in chunks for m in _PLACE.findall(chunk)], 3)
        if not places:
            return None
        return f"Locations mentioned in the document: {', '.join(places)}."

    @staticmethod
    def _answer_generic(chunks: list[str]) -> str:
        sentences = split_sentences(" ".join(chunks), GENERIC_SENTENCE_MIN)[:3]
        if sentences:
            return ". ".join(sentences) + "."
        if chunks:
            return chunks[0]
        return NO_INFORMATION_ANSWER
