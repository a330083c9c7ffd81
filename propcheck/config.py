"""Library configuration via environment variables."""

from pydantic_settings import BaseSettings
from functools import lru_cache


class Settings(BaseSettings):
    """Settings loaded from PROPCHECK_* environment variables."""

    # Diagnostics
    DIAGNOSTICS_ENABLED: bool = True  # Resolve call-site traces for reported failures
    GENERIC_SUBJECT_NAME: str = "Component class"
    DIAGNOSTIC_HISTORY_SIZE: int = 100

    # Logging
    DEBUG: bool = False
    LOG_LEVEL: str = "info"

    model_config = {"env_prefix": "PROPCHECK_", "env_file": ".env", "env_file_encoding": "utf-8", "extra": "ignore"}


@lru_cache
def get_settings() -> Settings:
    return Settings()
