"""
Cryptographic contracts for cryptoguard.

This package provides:
- RSA key role validation, block-size arithmetic and encrypt/decrypt
- Public-key XML interchange
- Block cipher key/IV validation and encrypt/decrypt
- Digest computation
- The cryptography-backed Provider those contracts delegate to
"""

from .rsa import is_valid_key, max_encryptable_bytes, is_valid_encryption_block
from .keyxml import to_public_key_xml, from_public_key_xml, load_public_key_xml
from .symmetric import legal_key_sizes
from .hashing import compute_digest, digest_size_bits
from .provider import (
    SymmetricAlgorithmId, HashAlgorithmId,
    get_symmetric_algorithm, get_hash_algorithm,
    generate_rsa_key_pair, import_rsa_key_pem,
)

__all__ = [
    'is_valid_key',
    'max_encryptable_bytes',
    'is_valid_encryption_block',
    'to_public_key_xml',
    'from_public_key_xml',
    'load_public_key_xml',
    'legal_key_sizes',
    'compute_digest',
    'digest_size_bits',
    'SymmetricAlgorithmId',
    'HashAlgorithmId',
    'get_symmetric_algorithm',
    'get_hash_algorithm',
    'generate_rsa_key_pair',
    'import_rsa_key_pem',
]
