"""Utility functions for ethwatch."""

from ethwatch.utils.exceptions import (
    EthWatchError,
    DecodeError,
    TransportError,
    ProtocolError,
    UnmarshalError,
    ErrorCategory,
    classify_exception,
    sanitize_error_message,
)

__all__ = [
    "EthWatchError",
    "DecodeError",
    "TransportError",
    "ProtocolError",
    "UnmarshalError",
    "ErrorCategory",
    "classify_exception",
    "sanitize_error_message",
]
