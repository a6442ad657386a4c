"""Configuration loaded from BOOTS_* environment variables."""

from __future__ import annotations

from functools import lru_cache
from pathlib import Path

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class BootsSettings(BaseSettings):
    """Boots settings.

    All fields are read from environment variables with the ``BOOTS_`` prefix.
    For example, ``BOOTS_BASE_DIR=/srv/app`` maps to ``base_dir``.
    Values passed explicitly to ``SessionConfig`` or on the command line win
    over these.
    """

    model_config = SettingsConfigDict(
        env_prefix="BOOTS_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # -- Logging ---------------------------------------------------------------
    log_level: str = "INFO"

    # -- Script discovery ------------------------------------------------------
    flag: str = "--boots"
    """Command-line flag whose following arguments are script identifiers."""

    base_dir: Path = Field(default_factory=Path.cwd)
    """Directory relative identifiers are joined onto when a direct load fails."""

    export_name: str = "script"
    """Module attribute holding the script unit."""


@lru_cache(maxsize=1)
def get_settings() -> BootsSettings:
    """Return a cached settings instance.

    Reads from environment variables and ``.env`` on first call, then returns
    the same object.  Call ``get_settings.cache_clear()`` in tests to force a
    re-read after overriding env vars.
    """
    return BootsSettings()
