"""
Cryptographic Provider backed by the ``cryptography`` package.

This is the only module that touches real primitives. Everything here is
called after cryptoguard's own validation has passed:

- a registry of symmetric algorithms (block size, legal key sizes, and a
  factory for fresh CBC/PKCS#7 transforms)
- a registry of hash algorithms (digest size, one-shot compute)
- RSA key generation, import/export to ``RsaKeyMaterial``, and the
  PKCS#1 v1.5 / OAEP encrypt and decrypt primitives

Every call builds its own Cipher, Hash or key object; nothing is shared
between calls.
"""

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Callable, Tuple, Union

from cryptography.exceptions import InvalidKey, UnsupportedAlgorithm
from cryptography.hazmat.decrepit.ciphers.algorithms import Camellia, TripleDES
from cryptography.hazmat.primitives import hashes, padding, serialization
from cryptography.hazmat.primitives.asymmetric import padding as asym_padding
from cryptography.hazmat.primitives.asymmetric import rsa
from cryptography.hazmat.primitives.ciphers import Cipher, algorithms, modes

from ..common.models import KeySizeDescriptor, RsaKeyMaterial
from ..config import get_settings

logger = logging.getLogger(__name__)

# Exceptions the primitives raise for data or keys they reject
PROVIDER_ERRORS = (ValueError, TypeError, UnsupportedAlgorithm, InvalidKey)


# ---------------------------------------------------------------------------
# Symmetric algorithms
# ---------------------------------------------------------------------------


class SymmetricAlgorithmId(str, Enum):
    AES = "AES"
    DES = "DES"
    TRIPLE_DES = "TRIPLE_DES"
    CAMELLIA = "CAMELLIA"


@dataclass(frozen=True)
class SymmetricAlgorithm:
    """A block cipher together with the sizes it accepts."""
    id: SymmetricAlgorithmId
    block_size_bits: int
    key_sizes: Tuple[KeySizeDescriptor, ...]
    factory: Callable[[bytes], object]

    @property
    def name(self) -> str:
        return self.id.value

    def _cipher(self, key: bytes, iv: bytes) -> Cipher:
        logger.debug(
            "Creating %s transform (key=%d bits, iv=%d bits)",
            self.name, len(key) * 8, len(iv) * 8,
        )
        return Cipher(self.factory(key), modes.CBC(iv))

    def encrypt(self, data: bytes, key: bytes, iv: bytes) -> bytes:
        """
        Encrypt with CBC chaining and PKCS#7 padding to the block boundary.

        Args:
            data: Plaintext of any length
            key: Key bytes
            iv: IV, one block long

        Returns:
            Ciphertext, a whole number of blocks
        """
        padder = padding.PKCS7(self.block_size_bits).padder()
        padded = padder.update(bytes(data)) + padder.finalize()

        encryptor = self._cipher(bytes(key), bytes(iv)).encryptor()
        return encryptor.update(padded) + encryptor.finalize()

    def decrypt(self, data: bytes, key: bytes, iv: bytes) -> bytes:
        """
        Reverse of ``encrypt``.

        Raises:
            ValueError: If data is not whole blocks or the padding is invalid
        """
        decryptor = self._cipher(bytes(key), bytes(iv)).decryptor()
        padded = decryptor.update(bytes(data)) + decryptor.finalize()

        unpadder = padding.PKCS7(self.block_size_bits).unpadder()
        return unpadder.update(padded) + unpadder.finalize()


def _triple_des(key: bytes) -> TripleDES:
    # TripleDES only takes three-key form: K1 K2 K3
    if len(key) == 8:
        key = key * 3
    elif len(key) == 16:
        key = key + key[:8]
    return TripleDES(key)


_SYMMETRIC_ALGORITHMS = {
    SymmetricAlgorithmId.AES: SymmetricAlgorithm(
        id=SymmetricAlgorithmId.AES,
        block_size_bits=128,
        key_sizes=(KeySizeDescriptor(min_bits=128, max_bits=256, step_bits=64),),
        factory=algorithms.AES,
    ),
    SymmetricAlgorithmId.DES: SymmetricAlgorithm(
        id=SymmetricAlgorithmId.DES,
        block_size_bits=64,
        key_sizes=(KeySizeDescriptor(min_bits=64, max_bits=64, step_bits=0),),
        factory=_triple_des,
    ),
    SymmetricAlgorithmId.TRIPLE_DES: SymmetricAlgorithm(
        id=SymmetricAlgorithmId.TRIPLE_DES,
        block_size_bits=64,
        key_sizes=(KeySizeDescriptor(min_bits=128, max_bits=192, step_bits=64),),
        factory=_triple_des,
    ),
    SymmetricAlgorithmId.CAMELLIA: SymmetricAlgorithm(
        id=SymmetricAlgorithmId.CAMELLIA,
        block_size_bits=128,
        key_sizes=(KeySizeDescriptor(min_bits=128, max_bits=256, step_bits=64),),
        factory=Camellia,
    ),
}


def get_symmetric_algorithm(
    algorithm: Union[SymmetricAlgorithmId, str, SymmetricAlgorithm],
) -> SymmetricAlgorithm:
    """
    Resolve an algorithm id (or its name) to its registry entry.

    A ``SymmetricAlgorithm`` passed in is returned as is, so callers can
    supply their own entries.

    Raises:
        ValueError: If the name is not a known algorithm
    """
    if isinstance(algorithm, SymmetricAlgorithm):
        return algorithm
    return _SYMMETRIC_ALGORITHMS[SymmetricAlgorithmId(algorithm)]


def symmetric_algorithms() -> Tuple[SymmetricAlgorithm, ...]:
    return tuple(_SYMMETRIC_ALGORITHMS.values())


# ---------------------------------------------------------------------------
# Hash algorithms
# ---------------------------------------------------------------------------


class HashAlgorithmId(str, Enum):
    SHA1 = "SHA1"
    SHA256 = "SHA256"
    SHA384 = "SHA384"
    SHA512 = "SHA512"
    SHA3_256 = "SHA3_256"
    SHA3_512 = "SHA3_512"
    BLAKE2B = "BLAKE2B"


@dataclass(frozen=True)
class HashAlgorithm:
    id: HashAlgorithmId
    factory: Callable[[], hashes.HashAlgorithm]

    @property
    def name(self) -> str:
        return self.id.value

    @property
    def digest_size_bytes(self) -> int:
        return self.factory().digest_size

    def compute(self, data: bytes) -> bytes:
        logger.debug("Computing %s digest over %d bytes", self.name, len(data))
        context = hashes.Hash(self.factory())
        context.update(bytes(data))
        return context.finalize()


_HASH_ALGORITHMS = {
    HashAlgorithmId.SHA1: HashAlgorithm(HashAlgorithmId.SHA1, hashes.SHA1),
    HashAlgorithmId.SHA256: HashAlgorithm(HashAlgorithmId.SHA256, hashes.SHA256),
    HashAlgorithmId.SHA384: HashAlgorithm(HashAlgorithmId.SHA384, hashes.SHA384),
    HashAlgorithmId.SHA512: HashAlgorithm(HashAlgorithmId.SHA512, hashes.SHA512),
    HashAlgorithmId.SHA3_256: HashAlgorithm(HashAlgorithmId.SHA3_256, hashes.SHA3_256),
    HashAlgorithmId.SHA3_512: HashAlgorithm(HashAlgorithmId.SHA3_512, hashes.SHA3_512),
    HashAlgorithmId.BLAKE2B: HashAlgorithm(HashAlgorithmId.BLAKE2B, lambda: hashes.BLAKE2b(64)),
}


def get_hash_algorithm(
    algorithm: Union[HashAlgorithmId, str, HashAlgorithm],
) -> HashAlgorithm:
    """Resolve a hash id (or its name) to its registry entry."""
    if isinstance(algorithm, HashAlgorithm):
        return algorithm
    return _HASH_ALGORITHMS[HashAlgorithmId(algorithm)]


def hash_algorithms() -> Tuple[HashAlgorithm, ...]:
    return tuple(_HASH_ALGORITHMS.values())


# ---------------------------------------------------------------------------
# RSA
# ---------------------------------------------------------------------------


def _int_to_bytes(value: int, length: int = None) -> bytes:
    if length is None:
        length = max(1, (value.bit_length() + 7) // 8)
    return value.to_bytes(length, byteorder='big')


def _bytes_to_int(value: bytes) -> int:
    return int.from_bytes(value, byteorder='big')


def export_rsa_key(key) -> RsaKeyMaterial:
    """
    Convert a ``cryptography`` RSA key object to ``RsaKeyMaterial``.

    Private keys export all eight fields, public keys only modulus and
    exponent. The modulus is always ``key_size / 8`` bytes long.

    Args:
        key: RSAPrivateKey or RSAPublicKey

    Returns:
        RsaKeyMaterial
    """
    if isinstance(key, rsa.RSAPrivateKey):
        numbers = key.private_numbers()
        public = numbers.public_numbers
        modulus_length = (key.key_size + 7) // 8
        return RsaKeyMaterial(
            modulus=_int_to_bytes(public.n, modulus_length),
            exponent=_int_to_bytes(public.e),
            d=_int_to_bytes(numbers.d, modulus_length),
            dp=_int_to_bytes(numbers.dmp1),
            dq=_int_to_bytes(numbers.dmq1),
            inverse_q=_int_to_bytes(numbers.iqmp),
            p=_int_to_bytes(numbers.p),
            q=_int_to_bytes(numbers.q),
        )

    if isinstance(key, rsa.RSAPublicKey):
        public = key.public_numbers()
        return RsaKeyMaterial(
            modulus=_int_to_bytes(public.n, (key.key_size + 7) // 8),
            exponent=_int_to_bytes(public.e),
        )

    raise TypeError(f"Expected an RSA key, got {type(key).__name__}")


def generate_rsa_key_pair(
    key_bits: int,
    public_exponent: int = 65537,
) -> Tuple[RsaKeyMaterial, RsaKeyMaterial]:
    """
    Generate a fresh RSA key pair.

    Args:
        key_bits: Modulus size in bits (1024 or more)
        public_exponent: Public exponent e

    Returns:
        Tuple of (public_key, private_key) as RsaKeyMaterial
    """
    logger.debug("Generating %d-bit RSA key pair", key_bits)
    private_key = rsa.generate_private_key(
        public_exponent=public_exponent,
        key_size=key_bits,
    )
    return export_rsa_key(private_key.public_key()), export_rsa_key(private_key)


def import_rsa_key_pem(pem: bytes, password: bytes = None) -> RsaKeyMaterial:
    """
    Load RSA key material from PEM bytes.

    Accepts a PKCS#8/PKCS#1 private key or a SubjectPublicKeyInfo public key.

    Raises:
        ValueError: If the PEM data cannot be parsed
        TypeError: If the PEM holds a non-RSA key
    """
    if b"PRIVATE KEY" in pem:
        key = serialization.load_pem_private_key(pem, password=password)
    else:
        key = serialization.load_pem_public_key(pem)
    return export_rsa_key(key)


def _public_key(material: RsaKeyMaterial) -> rsa.RSAPublicKey:
    return rsa.RSAPublicNumbers(
        e=_bytes_to_int(material.exponent),
        n=_bytes_to_int(material.modulus),
    ).public_key()


def _private_key(material: RsaKeyMaterial) -> rsa.RSAPrivateKey:
    public = rsa.RSAPublicNumbers(
        e=_bytes_to_int(material.exponent),
        n=_bytes_to_int(material.modulus),
    )
    return rsa.RSAPrivateNumbers(
        p=_bytes_to_int(material.p),
        q=_bytes_to_int(material.q),
        d=_bytes_to_int(material.d),
        dmp1=_bytes_to_int(material.dp),
        dmq1=_bytes_to_int(material.dq),
        iqmp=_bytes_to_int(material.inverse_q),
        public_numbers=public,
    ).private_key()


def _oaep_hash() -> hashes.HashAlgorithm:
    return get_hash_algorithm(get_settings().oaep_hash).factory()


def rsa_padding(use_oaep: bool):
    """
    Padding object for the RSA primitives.

    OAEP reads its hash from settings, so an invalid CRYPTOGUARD_OAEP_HASH
    raises pydantic.ValidationError here.
    """
    if use_oaep:
        algorithm = _oaep_hash()
        return asym_padding.OAEP(
            mgf=asym_padding.MGF1(algorithm=algorithm),
            algorithm=algorithm,
            label=None,
        )
    return asym_padding.PKCS1v15()


def rsa_encrypt(data: bytes, public_key: RsaKeyMaterial, scheme) -> bytes:
    """
    Encrypt one block with an RSA public key.

    Args:
        data: Block to encrypt
        public_key: Public key material
        scheme: Padding from ``rsa_padding``

    Raises:
        ValueError: If the block is too long for the key and padding
    """
    key = _public_key(public_key)
    logger.debug("RSA encrypt: %d-bit key, padding=%s", key.key_size, scheme.name)
    return key.encrypt(bytes(data), scheme)


def rsa_decrypt(data: bytes, private_key: RsaKeyMaterial, scheme) -> bytes:
    """
    Decrypt one block with an RSA private key.

    Args:
        data: Block to decrypt
        private_key: Private key material
        scheme: Padding the block was encrypted with

    Raises:
        ValueError: If the key numbers are inconsistent or decryption fails
    """
    key = _private_key(private_key)
    logger.debug("RSA decrypt: %d-bit key, padding=%s", key.key_size, scheme.name)
    return key.decrypt(bytes(data), scheme)
