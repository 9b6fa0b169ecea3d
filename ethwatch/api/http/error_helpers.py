"""Shared helpers for consistent HTTP error formatting."""

from __future__ import annotations

from ethwatch.utils.exceptions import ErrorCategory, EthWatchError, classify_exception


def unknown_error_detail(exc: Exception | None) -> str:
    """Format generic unknown-error detail consistently across endpoints."""
    return str(exc) if exc else "Unknown error"


def classify_http_status(exc: Exception) -> int:
    """Map exception to appropriate HTTP status code."""
    if isinstance(exc, EthWatchError):
        category = exc.category
    else:
        _, category, _ = classify_exception(exc)
    category_to_status = {
        ErrorCategory.VALIDATION: 400,
        ErrorCategory.TIMEOUT: 504,
        ErrorCategory.RETRYABLE: 503,
        ErrorCategory.PROTOCOL: 502,
    }
    return category_to_status.get(category, 500)
