"""Tests for ethwatch.chain.hexcodec."""

from __future__ import annotations

import pytest

from ethwatch.chain.hexcodec import address_to_topic, hex_to_int, int_to_hex
from ethwatch.utils.exceptions import DecodeError


@pytest.mark.parametrize(
    "value",
    ["0x0", "0x1", "0x100", "ff", "0xDEADbeef", "1A2b", "0x" + "f" * 64],
)
def test_hex_to_int_matches_int_base16(value: str) -> None:
    digits = value[2:] if value.startswith("0x") else value
    assert hex_to_int(value) == int(digits, 16)


def test_hex_to_int_same_value_with_and_without_prefix() -> None:
    assert hex_to_int("0x1a") == hex_to_int("1a") == 26


@pytest.mark.parametrize("value", ["", "0x", "0xg1", "xyz", "-1", "+1", " 1", "1_0", "0x1 ", "0x0x1"])
def test_hex_to_int_rejects_non_hex(value: str) -> None:
    with pytest.raises(DecodeError):
        hex_to_int(value)


def test_hex_to_int_rejects_non_string() -> None:
    with pytest.raises(DecodeError):
        hex_to_int(256)  # type: ignore[arg-type]


def test_decode_error_carries_value() -> None:
    with pytest.raises(DecodeError) as exc_info:
        hex_to_int("0xzz")
    assert exc_info.value.details == {"value": "0xzz"}
    assert exc_info.value.code == "DECODE_ERROR"


def test_int_to_hex() -> None:
    assert int_to_hex(0) == "0x0"
    assert int_to_hex(255) == "0xff"
    assert hex_to_int(int_to_hex(12345678901234567890)) == 12345678901234567890


def test_int_to_hex_rejects_negative() -> None:
    with pytest.raises(DecodeError):
        int_to_hex(-1)


def test_address_to_topic_pads_canonical_address() -> None:
    address = "0xAb5801a7D398351b8bE11C439e05C5B3259aeC9B"
    topic = address_to_topic(address)
    assert len(topic) == 66
    assert topic == "0x000000000000000000000000ab5801a7d398351b8be11c439e05c5b3259aec9b"


def test_address_to_topic_without_prefix() -> None:
    assert address_to_topic("123") == "0x" + "0" * 61 + "123"


def test_address_to_topic_passes_long_input_through() -> None:
    long_value = "A" * 70
    assert address_to_topic(long_value) == "0x" + "a" * 70
