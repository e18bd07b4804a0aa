"""
Observability module.

Provides logging configuration and structured, sanitized log helpers.
"""

from docqa.observability.log_utils import (
    log_answer_event,
    log_exception_with_context,
    log_retrieval_event,
    log_with_context,
    safe_log_value,
    summarize_vector,
)
from docqa.observability.logger import configure_logging, get_logger

__all__ = [
    "configure_logging",
    "get_logger",
    "log_answer_event",
    "log_exception_with_context",
    "log_retrieval_event",
    "log_with_context",
    "safe_log_value",
    "summarize_vector",
]
