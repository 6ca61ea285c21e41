#!/usr/bin/env python3
"""
Error Handling Utility Module

Reusable patterns for the parsing boundary, where a bad record should be
logged with context and skipped instead of aborting a whole batch:
1. log_and_continue() - Log error and continue execution (skip the item)
2. log_and_return_default() - Log error and return a fallback value

Both log at WARNING with structured ``extra`` fields.
"""

import logging
from typing import Any, TypeVar

T = TypeVar("T")


def log_and_continue(
    logger: logging.Logger,
    error: Exception,
    context: dict[str, Any],
    error_type: str = "Operation",
) -> None:
    """
    Log an error with structured context and continue execution gracefully.

    Use this when one bad item in a batch should not halt processing.

    Args:
        logger: Logger instance from logging.getLogger(__name__)
        error: The caught exception
        context: Structured data about what failed (issue_id, field, ...)
        error_type: Human-readable description of the operation

    Example:
        for record in records:
            try:
                issues.append(Issue.from_dict(record))
            except IssueParseError as e:
                log_and_continue(logger, e, {"issue_id": record.get("id")}, "Issue parsing")
                continue
    """
    logger.warning(
        f"{error_type} failed: {error}",
        extra={
            "error_type": error_type,
            "exception_class": error.__class__.__name__,
            "context": context,
        },
    )


def log_and_return_default(
    logger: logging.Logger,
    error: Exception,
    context: dict[str, Any],
    default_value: T,
    error_type: str = "Operation",
) -> T:
    """
    Log an error and return a default value.

    Args:
        logger: Logger instance
        error: The caught exception
        context: Structured data about what failed
        default_value: Value to return on error (None, [], {}, etc.)
        error_type: Human-readable description

    Returns:
        default_value

    Example:
        try:
            closed_at = parse_iso_timestamp(raw)
        except ValueError as e:
            closed_at = log_and_return_default(
                logger, e, context={"field": "closed_at"}, default_value=None, error_type="Timestamp parsing"
            )
    """
    logger.warning(
        f"{error_type} failed, returning default value: {error}",
        extra={
            "error_type": error_type,
            "exception_class": error.__class__.__name__,
            "context": context,
            "default_value": str(default_value),
        },
    )
    return default_value
