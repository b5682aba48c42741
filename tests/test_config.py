"""
Settings, logging and the result type.
"""

import logging
import os
import subprocess
import sys

import pytest
from pydantic import ValidationError

from cryptoguard.common.exceptions import CryptoGuardException, ProviderError
from cryptoguard.common.result import ErrorKind, Failure, Result, fail
from cryptoguard.config import configure_logging, get_settings
from cryptoguard.crypto import rsa, symmetric

# ── Settings ──────────────────────────────────────────────────────────────────
def test_defaults(clean_settings):
    clean_settings.delenv("CRYPTOGUARD_LOG_LEVEL", raising=False)
    clean_settings.delenv("CRYPTOGUARD_OAEP_HASH", raising=False)

    settings = get_settings()
    assert settings.log_level == "WARNING"
    assert settings.oaep_hash == "SHA1"

def test_values_read_from_environment(clean_settings):
    clean_settings.setenv("CRYPTOGUARD_LOG_LEVEL", "debug")
    clean_settings.setenv("CRYPTOGUARD_OAEP_HASH", "sha256")

    settings = get_settings()
    assert settings.log_level == "DEBUG"
    assert settings.oaep_hash == "SHA256"

@pytest.mark.parametrize("name, value", [
    ("CRYPTOGUARD_LOG_LEVEL", "LOUD"),
    ("CRYPTOGUARD_OAEP_HASH", "MD5"),
])
def test_invalid_values_rejected(clean_settings, name, value):
    clean_settings.setenv(name, value)
    with pytest.raises(ValidationError):
        get_settings()

def test_oaep_hash_setting_is_used(clean_settings, rsa_1024):
    clean_settings.setenv("CRYPTOGUARD_OAEP_HASH", "SHA256")
    public, private = rsa_1024
    # SHA-256 OAEP leaves 128 - 66 bytes
    data = os.urandom(62)

    encrypted = rsa.encrypt(data, public, use_oaep=True).unwrap()
    assert rsa.decrypt(encrypted, private, use_oaep=True).unwrap() == data
    assert rsa.encrypt(bytes(63), public, use_oaep=True).kind is ErrorKind.PROVIDER_FAILURE

def test_bad_oaep_hash_is_not_a_provider_failure(clean_settings, rsa_1024):
    clean_settings.setenv("CRYPTOGUARD_OAEP_HASH", "MD5")
    public, private = rsa_1024

    with pytest.raises(ValidationError):
        rsa.encrypt(b"x", public, use_oaep=True)
    with pytest.raises(ValidationError):
        rsa.decrypt(bytes(128), private, use_oaep=True)

def test_dotenv_read_on_first_settings_call(clean_settings, tmp_path):
    (tmp_path / ".env").write_text("CRYPTOGUARD_LOG_LEVEL=ERROR\n")
    clean_settings.chdir(tmp_path)
    # setenv then delenv so teardown also removes what .env sets
    clean_settings.setenv("CRYPTOGUARD_LOG_LEVEL", "INFO")
    clean_settings.delenv("CRYPTOGUARD_LOG_LEVEL")

    assert get_settings().log_level == "ERROR"

def test_import_does_not_read_dotenv(tmp_path):
    (tmp_path / ".env").write_text("CRYPTOGUARD_LOG_LEVEL=ERROR\n")
    env = {k: v for k, v in os.environ.items() if k != "CRYPTOGUARD_LOG_LEVEL"}
    code = "import os, cryptoguard.config; print(os.getenv('CRYPTOGUARD_LOG_LEVEL'))"

    result = subprocess.run([sys.executable, "-c", code], cwd=tmp_path, env=env,
                            capture_output=True, text=True)
    assert result.returncode == 0, result.stderr
    assert result.stdout.strip() == "None"

# ── Logging ───────────────────────────────────────────────────────────────────
def test_configure_logging_installs_one_handler():
    logger = logging.getLogger("cryptoguard")
    try:
        configure_logging("DEBUG")
        configure_logging("DEBUG")
        assert logger.level == logging.DEBUG
        assert len(logger.handlers) == 1
    finally:
        for handler in list(logger.handlers):
            logger.removeHandler(handler)
        logger.setLevel(logging.NOTSET)

def test_configure_logging_rejects_unknown_level():
    with pytest.raises(ValueError):
        configure_logging("CHATTY")

def test_provider_logs_transform_creation(caplog):
    caplog.set_level(logging.DEBUG, logger="cryptoguard")
    symmetric.encrypt("AES", b"data", bytes(16), bytes(16)).unwrap()
    assert "Creating AES transform" in caplog.text

def test_validation_failures_are_not_logged(caplog):
    caplog.set_level(logging.DEBUG, logger="cryptoguard")
    symmetric.encrypt("AES", b"data", bytes(20), bytes(16))
    assert caplog.records == []

# ── Result ────────────────────────────────────────────────────────────────────
def test_ok_result_unwraps():
    result = Result.Ok(b"value")
    assert result.ok
    assert result.kind is None
    assert result.unwrap() == b"value"
    with pytest.raises(RuntimeError):
        result.unwrap_err()

def test_provider_failure_chains_cause():
    cause = ValueError("boom")
    result = fail(ErrorKind.PROVIDER_FAILURE, "provider said no", cause=cause)

    with pytest.raises(ProviderError) as excinfo:
        result.unwrap()
    assert excinfo.value.__cause__ is cause
    assert result.unwrap_err() == Failure(ErrorKind.PROVIDER_FAILURE, "provider said no", cause=cause)

@pytest.mark.parametrize("kind", list(ErrorKind))
def test_every_kind_maps_to_an_exception(kind):
    exc = Failure(kind, "message", "arg").to_exception()
    assert isinstance(exc, CryptoGuardException)
    assert exc.argument == "arg"
    assert str(exc) == "message"
