"""
Digest computation with a non-empty input check.
"""

from ..common.result import ErrorKind, Result, fail
from ..common.utils import is_null_or_empty
from . import provider


def digest_size_bits(algorithm) -> int:
    return provider.get_hash_algorithm(algorithm).digest_size_bytes * 8


def compute_digest(algorithm, data: bytes) -> Result:
    """
    Hash the whole of ``data`` in one call.

    Args:
        algorithm: HashAlgorithmId, its name, or a HashAlgorithm
        data: Bytes to hash

    Returns:
        Result holding the digest (always the algorithm's digest size), or
        a NULL_OR_EMPTY_INPUT / PROVIDER_FAILURE failure
    """
    algorithm = provider.get_hash_algorithm(algorithm)

    if is_null_or_empty(data):
        return fail(ErrorKind.NULL_OR_EMPTY_INPUT, "data must not be None or empty", "data")

    try:
        return Result.Ok(algorithm.compute(data))
    except provider.PROVIDER_ERRORS as e:
        return fail(ErrorKind.PROVIDER_FAILURE, f"{algorithm.name} digest failed: {e}", cause=e)
