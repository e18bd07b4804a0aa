"""
Answer synthesis: model answers with heuristic fallback.
"""

from docqa.core.answering.heuristics import HeuristicAnswerer
from docqa.core.answering.prompt import ANSWER_PROMPT, NO_INFORMATION_ANSWER, SYSTEM_PROMPT
from docqa.core.answering.synthesizer import AnswerResult, AnswerSynthesizer

__all__ = [
    "ANSWER_PROMPT",
    "AnswerResult",
    "AnswerSynthesizer",
    "HeuristicAnswerer",
    "NO_INFORMATION_ANSWER",
    "SYSTEM_PROMPT",
]
