"""
RSA key validation, block-size arithmetic and encrypt/decrypt contracts.

RSA can only encrypt a block up to a size fixed by the modulus length and
the padding scheme. ``encrypt`` and ``decrypt`` check the input and the key
role before anything reaches the Provider:

    encrypt: plaintext missing -> empty -> key not public -> block too large
    decrypt: ciphertext missing -> empty -> key not private

A private key is refused where a public key is expected (and the other way
round) so that private key material is never handed around by mistake.
"""

from ..common.models import RsaKeyMaterial
from ..common.result import ErrorKind, Result, fail
from ..common.utils import is_null_or_empty
from . import provider

# Padding overhead is folded into these offsets against (bits - 384) / 8:
# PKCS#1 v1.5 leaves bits/8 - 11 bytes, OAEP bits/8 - 41 bytes.
PKCS1_OFFSET = 37
OAEP_OFFSET = 7


def is_valid_key(key: RsaKeyMaterial, expect_private: bool) -> bool:
    """
    Check if key material is a well-formed RSA key of the expected role.

    Public keys have only modulus and exponent set. Private keys have all
    fields set. Malformed records can fail both checks.

    Args:
        key: Key material to check
        expect_private: True to require a private key, False for public

    Returns:
        True if the record is a valid key of the requested role
    """
    if key is None:
        return False

    private_fields = [getattr(key, name) for name in RsaKeyMaterial.PRIVATE_FIELDS]

    if expect_private:
        if any(is_null_or_empty(value) for value in private_fields):
            return False
    else:
        if not all(is_null_or_empty(value) for value in private_fields):
            return False

    if is_null_or_empty(key.exponent):
        return False

    return not is_null_or_empty(key.modulus)


def max_encryptable_bytes(key_bits: int, use_oaep: bool = False) -> int:
    """
    Largest plaintext block an RSA key of ``key_bits`` can encrypt.

    Only meaningful for byte-aligned key sizes of at least 384 bits; below
    that the result can be zero or negative and no clamping is done.

    Args:
        key_bits: Modulus size in bits
        use_oaep: True for OAEP padding, False for PKCS#1 v1.5

    Returns:
        Maximum block size in bytes
    """
    delta = key_bits - 384
    # Truncate toward zero
    whole_bytes = delta // 8 if delta >= 0 else -(-delta // 8)
    return whole_bytes + (OAEP_OFFSET if use_oaep else PKCS1_OFFSET)


def is_valid_encryption_block(buffer, key_bits: int, use_oaep: bool = False) -> bool:
    """
    Check if a buffer fits in one RSA block.

    Args:
        buffer: Data to encrypt
        key_bits: Modulus size in bits
        use_oaep: True for OAEP padding, False for PKCS#1 v1.5

    Returns:
        False for a None or empty buffer, otherwise True if the buffer is
        no longer than max_encryptable_bytes
    """
    if is_null_or_empty(buffer):
        return False

    return len(buffer) <= max_encryptable_bytes(key_bits, use_oaep)


def key_size_bits(key: RsaKeyMaterial) -> int:
    """Key size as the modulus length in bits (0 if there is no modulus)."""
    if key is None or key.modulus is None:
        return 0
    return len(key.modulus) * 8


def encrypt(plaintext: bytes, public_key: RsaKeyMaterial, use_oaep: bool = False) -> Result:
    """
    Encrypt a single block with an RSA public key.

    Args:
        plaintext: Data to encrypt, at most max_encryptable_bytes long
        public_key: Public key material; a private key is rejected
        use_oaep: True for OAEP padding, False for PKCS#1 v1.5

    Returns:
        Result holding the ciphertext, or a failure of kind
        NULL_OR_EMPTY_INPUT, BLOCK_SIZE_EXCEEDED, INVALID_KEY_ROLE or
        PROVIDER_FAILURE
    """
    if plaintext is None:
        return fail(ErrorKind.NULL_OR_EMPTY_INPUT, "plaintext must not be None", "plaintext")

    if len(plaintext) == 0:
        return fail(
            ErrorKind.BLOCK_SIZE_EXCEEDED,
            "plaintext must be a non-empty byte array",
            "plaintext",
        )

    if not is_valid_key(public_key, expect_private=False):
        return fail(
            ErrorKind.INVALID_KEY_ROLE,
            "Argument must be a valid RSA public key. Do not pass a private key; "
            "private and public keys are kept apart so that private keys are "
            "not handed out by mistake.",
            "public_key",
        )

    bits = key_size_bits(public_key)

    if not is_valid_encryption_block(plaintext, bits, use_oaep):
        return fail(
            ErrorKind.BLOCK_SIZE_EXCEEDED,
            f"plaintext must be a valid block size or encryption will fail. "
            f"Max block size is {max_encryptable_bytes(bits, use_oaep)} bytes for an "
            f"RSA key of {bits} bits with use_oaep={use_oaep}, but the block is "
            f"{len(plaintext)} bytes.",
            "plaintext",
        )

    # Outside the try: a bad CRYPTOGUARD_OAEP_HASH raises ValidationError
    scheme = provider.rsa_padding(use_oaep)

    try:
        return Result.Ok(provider.rsa_encrypt(plaintext, public_key, scheme))
    except provider.PROVIDER_ERRORS as e:
        return fail(ErrorKind.PROVIDER_FAILURE, f"RSA encryption failed: {e}", cause=e)


def decrypt(ciphertext: bytes, private_key: RsaKeyMaterial, use_oaep: bool = False) -> Result:
    """
    Decrypt a single block with an RSA private key.

    Args:
        ciphertext: Data produced by ``encrypt``
        private_key: Private key material; a public key is rejected
        use_oaep: Must match the padding used to encrypt

    Returns:
        Result holding the plaintext, or a failure of kind
        NULL_OR_EMPTY_INPUT, BLOCK_SIZE_EXCEEDED, INVALID_KEY_ROLE or
        PROVIDER_FAILURE
    """
    if ciphertext is None:
        return fail(ErrorKind.NULL_OR_EMPTY_INPUT, "ciphertext must not be None", "ciphertext")

    if len(ciphertext) == 0:
        return fail(ErrorKind.BLOCK_SIZE_EXCEEDED, "ciphertext must be non-empty", "ciphertext")

    if not is_valid_key(private_key, expect_private=True):
        return fail(
            ErrorKind.INVALID_KEY_ROLE,
            "Argument must be a valid RSA private key. You may have passed a public key.",
            "private_key",
        )

    scheme = provider.rsa_padding(use_oaep)

    try:
        return Result.Ok(provider.rsa_decrypt(ciphertext, private_key, scheme))
    except provider.PROVIDER_ERRORS as e:
        return fail(ErrorKind.PROVIDER_FAILURE, f"RSA decryption failed: {e}", cause=e)
