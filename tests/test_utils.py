"""
Byte utilities and base64 detection.
"""

import pytest

from cryptoguard.common.utils import (
    b64decode,
    b64encode,
    is_non_empty_base64,
    is_null_or_empty,
    to_hex_string,
)

# ── Null / empty ──────────────────────────────────────────────────────────────
def test_none_is_null_or_empty():
    assert is_null_or_empty(None)

def test_empty_bytes_is_null_or_empty():
    assert is_null_or_empty(b"")
    assert is_null_or_empty(bytearray())
    assert is_null_or_empty([])

def test_non_empty_bytes_is_not_null_or_empty():
    assert not is_null_or_empty(bytes(1))

# ── Hex ───────────────────────────────────────────────────────────────────────
def test_hex_of_empty_is_empty_string():
    assert to_hex_string(b"") == ""

def test_hex_of_none_is_empty_string():
    assert to_hex_string(None) == ""

def test_hex_lowercase_two_digits_per_byte():
    assert to_hex_string(bytes([0xFF, 0x02])) == "ff02"

def test_hex_keeps_buffer_order():
    data = bytes([0x01, 0x02, 0x03, 0x04, 0x05, 0x06, 0x07, 0x08,
                  0x09, 0x10, 0x11, 0x12, 0x13, 0x14, 0x15, 0x16])
    assert to_hex_string(data) == "01020304050607080910111213141516"

def test_hex_accepts_int_lists():
    assert to_hex_string([0x00, 0xAB]) == "00ab"

# ── Base64 ────────────────────────────────────────────────────────────────────
@pytest.mark.parametrize("text", [
    "SGlyZSBNZS4=",
    "Q29weXJpZ2h0IDIwMTUgRHVhbmUgS2luZw==",
    "UGxlYXNlIGRvIG5vdCBzdGVhbC4=",
    "AAAA",
])
def test_is_base64(text):
    assert is_non_empty_base64(text)

@pytest.mark.parametrize("text", [
    None,
    "",
    " ",
    "    ",
    " foo ",
    "  foo  ",
    "UGxlYXNlIGRvIG5vdCBzdGVhbC=",
    "UGxlYXNlIGRvIG5vdCBzdGVhbC= ",
    " UGxlYXNlIGRvIG5vdCBzdGVhbC=",
    " UGxlYXNlIGRvIG5vdCBzdGVhbC= ",
    "SGlyZSBNZS4=\n",
    "SGl=ZSBNZS4=",
    "SGlyZSBNZS4-",
    "AAA====",
])
def test_is_not_base64(text):
    assert not is_non_empty_base64(text)

def test_b64_helpers_round_trip():
    assert b64decode(b64encode(b"Hire Me.")) == b"Hire Me."
    assert b64encode(b"Hire Me.") == "SGlyZSBNZS4="
