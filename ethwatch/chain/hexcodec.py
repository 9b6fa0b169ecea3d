"""Hex quantity and topic encoding for Ethereum JSON-RPC."""

from __future__ import annotations

from ethwatch.utils.exceptions import DecodeError

HEX_PREFIX = "0x"
TOPIC_HEX_CHARS = 64

_HEX_DIGITS = frozenset("0123456789abcdefABCDEF")


def hex_to_int(value: str) -> int:
    """
    Decode a hex quantity such as ``"0x1a"`` or ``"1a"``.

    Only plain hex digits are accepted after the prefix; ``int(x, 16)`` on its
    own would also take signs, whitespace and underscores.
    """
    if not isinstance(value, str):
        raise DecodeError(f"hex value must be a string, got {type(value).__name__}")
    digits = value
    if len(digits) > len(HEX_PREFIX) and digits.startswith(HEX_PREFIX):
        digits = digits[len(HEX_PREFIX):]
    if not digits:
        raise DecodeError("empty hex value", value=value)
    if not all(ch in _HEX_DIGITS for ch in digits):
        raise DecodeError(f"invalid hex value: {value!r}", value=value)
    return int(digits, 16)


def int_to_hex(value: int) -> str:
    """Encode a non-negative int as an unpadded hex quantity (``0 -> "0x0"``)."""
    if value < 0:
        raise DecodeError(f"hex quantity cannot be negative: {value}", value=str(value))
    return HEX_PREFIX + format(value, "x")


def address_to_topic(address: str) -> str:
    """
    Left-pad an address to the 32-byte form log filters match indexed
    address parameters against.

    Longer input is not truncated.
    """
    if address.startswith(HEX_PREFIX):
        address = address[len(HEX_PREFIX):]
    return HEX_PREFIX + address.lower().rjust(TOPIC_HEX_CHARS, "0")
