"""
Data model definitions using Pydantic.

Key material and key-size descriptors are immutable value objects; the
validators in ``cryptoguard.crypto`` are free functions over them.
"""

from typing import ClassVar, Optional, Tuple
from pydantic import BaseModel, ConfigDict, Field


class RsaKeyMaterial(BaseModel):
    """
    RSA key fields as big-endian unsigned byte strings.

    A public key sets only ``modulus`` and ``exponent``. A private key sets
    all eight fields. Any field may be None; the role checks live in
    ``cryptoguard.crypto.rsa.is_valid_key``.
    """
    model_config = ConfigDict(frozen=True)

    modulus: Optional[bytes] = Field(None, description="Modulus n")
    exponent: Optional[bytes] = Field(None, description="Public exponent e")
    d: Optional[bytes] = Field(None, description="Private exponent")
    dp: Optional[bytes] = Field(None, description="d mod (p - 1)")
    dq: Optional[bytes] = Field(None, description="d mod (q - 1)")
    inverse_q: Optional[bytes] = Field(None, description="q^-1 mod p")
    p: Optional[bytes] = Field(None, description="First prime factor")
    q: Optional[bytes] = Field(None, description="Second prime factor")

    PRIVATE_FIELDS: ClassVar[Tuple[str, ...]] = ("d", "dp", "dq", "inverse_q", "p", "q")

    def public_part(self) -> "RsaKeyMaterial":
        """Copy holding only modulus and exponent."""
        return RsaKeyMaterial(modulus=self.modulus, exponent=self.exponent)


class KeySizeDescriptor(BaseModel):
    """
    A range of legal key sizes in bits.

    ``step_bits == 0`` means the single size ``min_bits``.
    A stepped range with max_bits below min_bits holds no sizes.
    """
    model_config = ConfigDict(frozen=True)

    min_bits: int = Field(..., ge=0)
    max_bits: int = Field(..., ge=0)
    step_bits: int = Field(0, ge=0)

    def sizes(self) -> list:
        if self.step_bits == 0:
            return [self.min_bits]
        return list(range(self.min_bits, self.max_bits + 1, self.step_bits))
