"""
Logging utilities for safe structured logging.

Attaches sanitized key/value context to log records so question text,
chunk lists or 1536-float vectors never flood the log, and provides
event helpers for the retrieval and answering pipeline.

Dependencies: logging (stdlib)
System role: Logging helper functions
"""

import logging
import math
from collections.abc import Sequence
from typing import Any


def summarize_vector(vector: Sequence[float]) -> str:
    """
    Describe an embedding by length, L2 norm and nonzero count.

    Args:
        vector: Embedding values

    Returns:
        str: e.g. "vector(dim=1536, norm=1.0000, nonzero=212)"
    """
    norm = math.sqrt(sum(v * v for v in vector))
    nonzero = sum(1 for v in vector if v != 0)
    return f"vector(dim={len(vector)}, norm={norm:.4f}, nonzero={nonzero})"


def safe_log_value(value: Any, max_length: int = 300) -> str:
    """
    Safely convert any value to a string for logging.

    Numeric lists are treated as vectors and summarized.

    Args:
        value: Value to convert
        max_length: Maximum length before truncating

    Returns:
        str: Safe string representation
    """
    try:
        if value is None:
            return "None"
        if isinstance(value, str):
            val_str = value
        elif isinstance(value, (list, tuple)):
            if value and all(isinstance(v, (int, float)) for v in value):
                val_str = summarize_vector(value)
            else:
                val_str = f"{type(value).__name__}({len(value)} items)"
        elif isinstance(value, dict):
            val_str = f"dict(keys={sorted(str(k) for k in value)[:10]})"
        else:
            val_str = str(value)

        if len(val_str) > max_length:
            return val_str[:max_length] + f"... (truncated, {len(val_str)} total)"
        return val_str
    except Exception as e:
        return f"<unable to log: {type(e).__name__}>"


def log_with_context(
    logger: logging.Logger,
    level: int,
    message: str,
    **context,
) -> None:
    """
    Log a message with structured context, safely converting all values.

    Args:
        logger: Logger instance
        level: Log level (logging.INFO, etc.)
        message: Log message
        **context: Arbitrary key-value pairs attached as record attributes
    """
    safe_context = {key: safe_log_value(val) for key, val in context.items()}
    logger.log(level, message, extra=safe_context)


def log_exception_with_context(
    logger: logging.Logger,
    message: str,
    exc: Exception,
    **context,
) -> None:
    """
    Log an exception with traceback and sanitized context.

    Args:
        logger: Logger instance
        message: Log message
        exc: Exception instance
        **context: Additional context dict
    """
    safe_context = {key: safe_log_value(val) for key, val in context.items()}
    safe_context.update({
        "error_type": type(exc).__name__,
        "error_msg": str(exc),
    })
    logger.exception(message, extra=safe_context)


def log_retrieval_event(
    logger: logging.Logger,
    document_id: str,
    tier: str,
    candidate_count: int,
    returned_count: int,
    elapsed_ms: float,
) -> None:
    """Record which retrieval tier answered and how many chunks it produced."""
    log_with_context(
        logger,
        logging.INFO,
        f"retrieval completed via {tier}: {returned_count}/{candidate_count} chunks",
        document_id=document_id,
        tier=tier,
        candidate_count=candidate_count,
        returned_count=returned_count,
        elapsed_ms=round(elapsed_ms, 2),
    )


def log_answer_event(
    logger: logging.Logger,
    document_id: str,
    mode: str,
    source_count: int,
    elapsed_ms: float,
) -> None:
    """Record how an answer was produced (llm, heuristic, message)."""
    level = logging.INFO if mode == "llm" else logging.WARNING
    log_with_context(
        logger,
        level,
        f"answer produced by {mode} with {source_count} sources",
        document_id=document_id,
        answer_mode=mode,
        source_count=source_count,
        elapsed_ms=round(elapsed_ms, 2),
    )
