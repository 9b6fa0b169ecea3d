"""
Exception hierarchy and error handling utilities for ethwatch.

Provides:
- Chain query exceptions with error codes (decode, transport, protocol, unmarshal)
- Error categorization
- Safe error message formatting (RPC endpoint keys are not leaked into logs)
"""

from __future__ import annotations

import asyncio
import json
import re
from enum import Enum
from typing import Any


class ErrorCategory(Enum):
    """Error categories for classification."""
    RETRYABLE = "retryable"
    FATAL = "fatal"
    VALIDATION = "validation"
    PROTOCOL = "protocol"
    TIMEOUT = "timeout"


class EthWatchError(Exception):
    """Base exception for all ethwatch errors."""

    def __init__(
        self,
        message: str,
        code: str = "UNKNOWN_ERROR",
        category: ErrorCategory = ErrorCategory.FATAL,
        details: dict[str, Any] | None = None,
    ):
        super().__init__(message)
        self.message = message
        self.code = code
        self.category = category
        self.details = details or {}

    def to_dict(self) -> dict[str, Any]:
        return {
            "error": self.code,
            "message": self.message,
            "category": self.category.value,
            "details": self.details,
        }

    def __str__(self) -> str:
        return f"[{self.code}] {self.message}"


class DecodeError(EthWatchError):
    """Malformed hex quantity."""

    def __init__(self, message: str, value: str | None = None):
        details = {"value": value} if value is not None else {}
        super().__init__(message, code="DECODE_ERROR", category=ErrorCategory.VALIDATION, details=details)


class TransportError(EthWatchError):
    """Network or HTTP failure talking to the node."""

    def __init__(self, message: str, method: str | None = None, status_code: int | None = None):
        super().__init__(
            message,
            code="TRANSPORT_ERROR",
            category=ErrorCategory.RETRYABLE,
            details={"method": method, "status_code": status_code},
        )
        self.method = method
        self.status_code = status_code


class ProtocolError(EthWatchError):
    """JSON-RPC envelope carried a non-null error."""

    def __init__(self, method: str, rpc_code: int, rpc_message: str):
        super().__init__(
            f"RPC request {method} failed: {rpc_message}",
            code="RPC_ERROR",
            category=ErrorCategory.PROTOCOL,
            details={"method": method, "rpc_code": rpc_code},
        )
        self.method = method
        self.rpc_code = rpc_code
        self.rpc_message = rpc_message


class UnmarshalError(EthWatchError):
    """Response body does not have the expected shape."""

    def __init__(self, message: str, method: str | None = None):
        details = {"method": method} if method else {}
        super().__init__(message, code="UNMARSHAL_ERROR", category=ErrorCategory.VALIDATION, details=details)
        self.method = method


_SENSITIVE_PATTERNS = [
    re.compile(r"(api[_-]?key|token|secret|password|auth)[=:]\s*['\"]?([^\s'\"&]+)['\"]?", re.IGNORECASE),
    re.compile(r"bearer\s+[a-zA-Z0-9\-._~+/]+=*", re.IGNORECASE),
    # Provider URLs embed the project key as the last path segment (infura, alchemy).
    re.compile(r"(?<=/v2/)[a-zA-Z0-9_-]{16,}|(?<=/v3/)[a-zA-Z0-9_-]{16,}"),
]


def sanitize_error_message(message: str, replacement: str = "[REDACTED]") -> str:
    """Remove sensitive information from error messages."""
    sanitized = message
    for pattern in _SENSITIVE_PATTERNS:
        sanitized = pattern.sub(replacement, sanitized)
    return sanitized


def classify_exception(exc: Exception) -> tuple[str, ErrorCategory, bool]:
    """
    Classify an exception and return (error_code, category, should_retry).

    Returns:
        Tuple of (error_code, category, should_retry)
    """
    if isinstance(exc, EthWatchError):
        return exc.code, exc.category, exc.category == ErrorCategory.RETRYABLE

    if isinstance(exc, asyncio.TimeoutError):
        return "TIMEOUT", ErrorCategory.TIMEOUT, True

    if isinstance(exc, ConnectionError):
        return "CONNECTION_ERROR", ErrorCategory.RETRYABLE, True

    if isinstance(exc, json.JSONDecodeError):
        return "JSON_PARSE_ERROR", ErrorCategory.VALIDATION, False

    if isinstance(exc, (ValueError, KeyError, TypeError)):
        return "INVALID_VALUE", ErrorCategory.VALIDATION, False

    return "INTERNAL_ERROR", ErrorCategory.FATAL, False
