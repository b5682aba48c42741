"""
Custom exceptions for cryptoguard.

One class per error kind. Operations report failures through
``Result`` objects; ``Result.unwrap()`` raises the matching class below.
"""


class CryptoGuardException(Exception):
    """Base exception for cryptoguard errors."""

    def __init__(self, message: str, argument: str = None):
        super().__init__(message)
        self.argument = argument


class NullOrEmptyInputError(CryptoGuardException):
    """A required buffer or text argument was missing or zero-length."""
    pass


class InvalidKeyRoleError(CryptoGuardException):
    """Key material is not a valid key of the role the operation needs."""
    pass


class BlockSizeExceededError(CryptoGuardException):
    """Input is empty or larger than the RSA key/padding combination allows."""
    pass


class KeySizeNotSupportedError(CryptoGuardException):
    """Symmetric key length is not a legal size for the algorithm."""
    pass


class IvSizeMismatchError(CryptoGuardException):
    """IV length does not equal the algorithm's block size."""
    pass


class MalformedKeyMaterialError(CryptoGuardException):
    """Parsed key material is not a valid public or private key."""
    pass


class ProviderError(CryptoGuardException):
    """The underlying cryptographic primitive rejected the operation."""
    pass
