"""
Explicit result type for cryptoguard operations.

Every operation returns a ``Result``: either ``Ok(value)`` or
``Err(failure)``. Callers that prefer exceptions call ``unwrap()``.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Generic, Optional, TypeVar

from .exceptions import (
    CryptoGuardException,
    NullOrEmptyInputError,
    InvalidKeyRoleError,
    BlockSizeExceededError,
    KeySizeNotSupportedError,
    IvSizeMismatchError,
    MalformedKeyMaterialError,
    ProviderError,
)

T = TypeVar("T")


class ErrorKind(str, Enum):
    NULL_OR_EMPTY_INPUT = "NULL_OR_EMPTY_INPUT"
    INVALID_KEY_ROLE = "INVALID_KEY_ROLE"
    BLOCK_SIZE_EXCEEDED = "BLOCK_SIZE_EXCEEDED"
    KEY_SIZE_NOT_SUPPORTED = "KEY_SIZE_NOT_SUPPORTED"
    IV_SIZE_MISMATCH = "IV_SIZE_MISMATCH"
    MALFORMED_KEY_MATERIAL = "MALFORMED_KEY_MATERIAL"
    PROVIDER_FAILURE = "PROVIDER_FAILURE"


_EXCEPTIONS = {
    ErrorKind.NULL_OR_EMPTY_INPUT: NullOrEmptyInputError,
    ErrorKind.INVALID_KEY_ROLE: InvalidKeyRoleError,
    ErrorKind.BLOCK_SIZE_EXCEEDED: BlockSizeExceededError,
    ErrorKind.KEY_SIZE_NOT_SUPPORTED: KeySizeNotSupportedError,
    ErrorKind.IV_SIZE_MISMATCH: IvSizeMismatchError,
    ErrorKind.MALFORMED_KEY_MATERIAL: MalformedKeyMaterialError,
    ErrorKind.PROVIDER_FAILURE: ProviderError,
}


@dataclass(frozen=True)
class Failure:
    """
    Why an operation was rejected.

    ``argument`` names the offending parameter where there is one.
    ``cause`` holds the Provider's exception for PROVIDER_FAILURE.
    """
    kind: ErrorKind
    message: str
    argument: Optional[str] = None
    cause: Optional[BaseException] = None

    def to_exception(self) -> CryptoGuardException:
        return _EXCEPTIONS[self.kind](self.message, self.argument)


@dataclass(frozen=True)
class Result(Generic[T]):
    ok: bool
    value: Optional[T] = None
    failure: Optional[Failure] = None

    @staticmethod
    def Ok(v: T) -> "Result[T]":
        return Result(ok=True, value=v, failure=None)

    @staticmethod
    def Err(f: Failure) -> "Result[T]":
        return Result(ok=False, value=None, failure=f)

    @property
    def kind(self) -> Optional[ErrorKind]:
        return None if self.failure is None else self.failure.kind

    def unwrap(self) -> T:
        """
        Return the value, or raise the exception matching the failure.

        Raises:
            CryptoGuardException: subclass chosen by ``failure.kind``;
                chained to the Provider's exception when there is one
        """
        if self.ok:
            return self.value
        raise self.failure.to_exception() from self.failure.cause

    def unwrap_err(self) -> Failure:
        if self.ok or self.failure is None:
            raise RuntimeError("unwrap_err() on Ok")
        return self.failure


def fail(kind: ErrorKind, message: str, argument: str = None,
         cause: BaseException = None) -> Result:
    """Shorthand for ``Result.Err(Failure(...))``."""
    return Result.Err(Failure(kind=kind, message=message, argument=argument, cause=cause))
