"""
Byte and text utilities for cryptoguard.

Null/empty checks, hex rendering and base64 detection used by every
validator in the crypto package.
"""

import base64
import re

# Letters, digits, '+' and '/', then at most three '=' at the very end
BASE64_PATTERN = re.compile(r"[a-zA-Z0-9+/]*={0,3}")


def is_null_or_empty(buffer) -> bool:
    """
    Check if a buffer is missing or has zero length.

    Args:
        buffer: bytes, bytearray, memoryview, list of ints, or None

    Returns:
        True if buffer is None or empty, False otherwise
    """
    return buffer is None or len(buffer) == 0


def to_hex_string(buffer) -> str:
    """
    Render a buffer as lowercase hex, two digits per byte.

    Args:
        buffer: Bytes (or a sequence of ints 0-255) to render

    Returns:
        Hex string with no separators, or "" for a None/empty buffer
    """
    if is_null_or_empty(buffer):
        return ""

    return bytes(buffer).hex()


def is_non_empty_base64(text) -> bool:
    """
    Check if a string is structurally base64.

    Leading or trailing whitespace makes the text invalid outright; it is
    not stripped first. Padding bits are not checked.

    Args:
        text: String to check

    Returns:
        True if text is non-empty, a multiple of 4 long, and uses only the
        base64 alphabet with up to three trailing '=' characters
    """
    if text is None:
        return False

    original_length = len(text)
    trimmed = text.strip()

    if len(trimmed) == 0 or len(trimmed) != original_length:
        return False

    return len(trimmed) % 4 == 0 and BASE64_PATTERN.fullmatch(trimmed) is not None


def b64encode(data: bytes) -> str:
    """
    Base64 encode bytes to string.

    Args:
        data: Bytes to encode

    Returns:
        Base64-encoded string
    """
    return base64.b64encode(data).decode('ascii')


def b64decode(data: str) -> bytes:
    """
    Base64 decode string to bytes.

    Args:
        data: Base64-encoded string

    Returns:
        Decoded bytes

    Raises:
        binascii.Error: If data is not valid base64
    """
    return base64.b64decode(data, validate=True)


# Test function
if __name__ == "__main__":
    print("[*] Testing utility functions")

    data = bytes(range(1, 17))
    print(f"\n[1] Hex of {list(data)}: {to_hex_string(data)}")
    print(f"    Hex of None: {to_hex_string(None)!r}")

    encoded = b64encode(b"Hire Me.")
    print(f"\n[2] Base64 encode: {encoded}")
    print(f"    is_non_empty_base64({encoded!r}): {is_non_empty_base64(encoded)}")
    print(f"    is_non_empty_base64(' foo '): {is_non_empty_base64(' foo ')}")

    assert b64decode(encoded) == b"Hire Me.", "Base64 encode/decode failed!"

    print("\n[✓] Utility functions test passed!")
