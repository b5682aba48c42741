"""
Environment configuration for cryptoguard.

Values come from the process environment, with a ``.env`` file from the
working directory (or a parent) loaded the first time settings are read:

    CRYPTOGUARD_LOG_LEVEL   logging level for configure_logging (WARNING)
    CRYPTOGUARD_OAEP_HASH   hash used by RSA-OAEP and its MGF1 (SHA1)
"""

import logging
import os
from functools import lru_cache

from dotenv import find_dotenv, load_dotenv
from pydantic import BaseModel, ConfigDict, field_validator

VALID_LOG_LEVELS = frozenset({"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"})
OAEP_HASHES = frozenset({"SHA1", "SHA256", "SHA384", "SHA512"})


class Settings(BaseModel):
    model_config = ConfigDict(frozen=True)

    log_level: str = "WARNING"
    oaep_hash: str = "SHA1"

    @field_validator("log_level")
    @classmethod
    def _check_log_level(cls, value: str) -> str:
        value = value.upper()
        if value not in VALID_LOG_LEVELS:
            raise ValueError(
                f"Invalid log level: {value}. Valid: {', '.join(sorted(VALID_LOG_LEVELS))}"
            )
        return value

    @field_validator("oaep_hash")
    @classmethod
    def _check_oaep_hash(cls, value: str) -> str:
        value = value.upper()
        if value not in OAEP_HASHES:
            raise ValueError(
                f"Unsupported OAEP hash: {value}. Valid: {', '.join(sorted(OAEP_HASHES))}"
            )
        return value


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """
    Build settings from the environment.

    Cached; call ``get_settings.cache_clear()`` after changing the
    environment.

    Raises:
        pydantic.ValidationError: If a variable holds an unsupported value
    """
    load_dotenv(find_dotenv(usecwd=True))
    return Settings(
        log_level=os.getenv('CRYPTOGUARD_LOG_LEVEL', 'WARNING'),
        oaep_hash=os.getenv('CRYPTOGUARD_OAEP_HASH', 'SHA1'),
    )


def configure_logging(level: str = None) -> None:
    """
    Attach a stream handler to the ``cryptoguard`` logger.

    Args:
        level: Logging level name; defaults to CRYPTOGUARD_LOG_LEVEL
    """
    level = (level or get_settings().log_level).upper()
    if level not in VALID_LOG_LEVELS:
        raise ValueError(f"Invalid log level: {level}")

    handler = logging.StreamHandler()
    handler.setFormatter(
        logging.Formatter("%(asctime)s %(levelname)s %(name)s: %(message)s")
    )

    logger = logging.getLogger("cryptoguard")
    # Replace existing handlers so repeated calls don't duplicate output
    for existing in list(logger.handlers):
        logger.removeHandler(existing)
    logger.addHandler(handler)
    logger.setLevel(level)
