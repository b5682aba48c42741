"""
Block cipher contracts.

Key and IV sizes are checked against the chosen algorithm before the
Provider builds a transform:

1. data, key and iv are each present and non-empty
2. the key length is one of the algorithm's legal key sizes
3. the IV is exactly one block long

Chaining mode and padding are the Provider's (CBC, PKCS#7); they are
never changed here.
"""

from typing import Iterable, List, Union

from ..common.models import KeySizeDescriptor
from ..common.result import ErrorKind, Result, fail
from ..common.utils import is_null_or_empty, to_hex_string
from . import provider
from .provider import SymmetricAlgorithm, SymmetricAlgorithmId


def legal_key_sizes(
    descriptors: Union[KeySizeDescriptor, Iterable[KeySizeDescriptor], SymmetricAlgorithm, SymmetricAlgorithmId, str, None],
) -> List[int]:
    """
    Expand key-size descriptors into the explicit list of legal sizes.

    Args:
        descriptors: KeySizeDescriptor values, or an algorithm whose
            descriptors should be used

    Returns:
        Distinct key sizes in bits, largest first; [] for None or no
        descriptors
    """
    if descriptors is None:
        return []

    if isinstance(descriptors, KeySizeDescriptor):
        descriptors = [descriptors]
    elif isinstance(descriptors, (SymmetricAlgorithm, SymmetricAlgorithmId, str)):
        descriptors = provider.get_symmetric_algorithm(descriptors).key_sizes

    sizes = set()
    for descriptor in descriptors:
        # step 0: fixed size, max_bits assumed equal to min_bits
        sizes.update(descriptor.sizes())

    return sorted(sizes, reverse=True)


def _check_arguments(algorithm: SymmetricAlgorithm, data_name: str, data, key, iv):
    for name, value in ((data_name, data), ("key", key), ("iv", iv)):
        if is_null_or_empty(value):
            return fail(ErrorKind.NULL_OR_EMPTY_INPUT, f"{name} must not be None or empty", name)

    key_bits = len(key) * 8
    legal = legal_key_sizes(algorithm)
    if key_bits not in legal:
        allowed = "\n".join(f"\t --> {size} bits" for size in legal)
        return fail(
            ErrorKind.KEY_SIZE_NOT_SUPPORTED,
            f"Key size of {key_bits} bits is not in the allowed size range for "
            f"{algorithm.name}. Allowed sizes include:\n{allowed}",
            "key",
        )

    if len(iv) * 8 != algorithm.block_size_bits:
        return fail(
            ErrorKind.IV_SIZE_MISMATCH,
            f"The initialization vector {to_hex_string(iv)} is {len(iv) * 8} bits; "
            f"pass an IV equal to the {algorithm.block_size_bits}-bit block size of "
            f"{algorithm.name}.",
            "iv",
        )

    return None


def encrypt(algorithm, plaintext: bytes, key: bytes, iv: bytes) -> Result:
    """
    Encrypt with a block cipher.

    Args:
        algorithm: SymmetricAlgorithmId, its name, or a SymmetricAlgorithm
        plaintext: Data to encrypt
        key: Key of a legal size for the algorithm
        iv: IV exactly one block long

    Returns:
        Result holding the ciphertext, or a failure of kind
        NULL_OR_EMPTY_INPUT, KEY_SIZE_NOT_SUPPORTED, IV_SIZE_MISMATCH or
        PROVIDER_FAILURE
    """
    algorithm = provider.get_symmetric_algorithm(algorithm)

    failure = _check_arguments(algorithm, "plaintext", plaintext, key, iv)
    if failure is not None:
        return failure

    try:
        return Result.Ok(algorithm.encrypt(plaintext, key, iv))
    except provider.PROVIDER_ERRORS as e:
        return fail(ErrorKind.PROVIDER_FAILURE, f"{algorithm.name} encryption failed: {e}", cause=e)


def decrypt(algorithm, ciphertext: bytes, key: bytes, iv: bytes) -> Result:
    """
    Decrypt data produced by ``encrypt`` with the same algorithm, key and IV.

    Returns:
        Result holding the plaintext; a wrong key or corrupted ciphertext
        usually shows up as PROVIDER_FAILURE (bad padding)
    """
    algorithm = provider.get_symmetric_algorithm(algorithm)

    failure = _check_arguments(algorithm, "ciphertext", ciphertext, key, iv)
    if failure is not None:
        return failure

    try:
        return Result.Ok(algorithm.decrypt(ciphertext, key, iv))
    except provider.PROVIDER_ERRORS as e:
        return fail(ErrorKind.PROVIDER_FAILURE, f"{algorithm.name} decryption failed: {e}", cause=e)
