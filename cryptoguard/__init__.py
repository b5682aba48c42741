"""
cryptoguard

A validation layer in front of standard cryptographic primitives:
- RSA public/private key role checks and block-size limits
- RSA encrypt/decrypt contracts (PKCS#1 v1.5 and OAEP)
- Symmetric key size enumeration and block cipher contracts
- Digest computation with input checks
- Hex rendering and base64 detection
"""

__version__ = "1.0.0"
