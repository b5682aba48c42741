"""
Shared fixtures for the cryptoguard test suite.

RSA key generation is slow, so each key size is generated once per session.
"""

import pytest

from cryptoguard.config import get_settings
from cryptoguard.crypto.provider import generate_rsa_key_pair


@pytest.fixture(scope="session")
def rsa_1024():
    return generate_rsa_key_pair(1024)


@pytest.fixture(scope="session")
def rsa_2048():
    return generate_rsa_key_pair(2048)


@pytest.fixture(params=[1024, 2048], ids=lambda bits: f"{bits}bit")
def rsa_pair(request):
    """(key_bits, public_key, private_key) for each tested key size."""
    public, private = request.getfixturevalue(f"rsa_{request.param}")
    return request.param, public, private


@pytest.fixture
def clean_settings(monkeypatch):
    """Let a test change CRYPTOGUARD_* variables and see fresh settings."""
    get_settings.cache_clear()
    yield monkeypatch
    get_settings.cache_clear()
