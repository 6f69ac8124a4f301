"""Mini README: Centralised configuration model and helpers for Pocket Ledger.

Structure:
    * LedgerSettings - Pydantic model describing runtime configuration.
    * get_settings - cached accessor for environment-aware settings.

Usage:
    Import ``get_settings`` to read ``POCKETLEDGER_*`` environment variables
    (or a local ``.env`` file): where the SQLite database lives, how month
    labels are rendered, the log level, and where the HTTP API binds. The
    settings are cached so validation happens once per process; tests call
    ``get_settings.cache_clear()`` after changing the environment.
"""

from __future__ import annotations

import logging
from functools import lru_cache
from pathlib import Path

from pydantic import Field, validator
from pydantic_settings import BaseSettings


class LedgerSettings(BaseSettings):
    """Runtime configuration for the ledger store and its interfaces."""

    environment: str = Field(
        "development",
        description="Environment label controlling debug toggles and logging levels.",
    )
    database_path: Path = Field(
        Path("data") / "ledger.db",
        description="SQLite file holding transactions and receipt image references.",
    )
    month_label_format: str = Field(
        "%b %Y",
        description=(
            "strftime pattern used to render month labels such as 'Mar 2025'."
            " Query labels must be built with the same pattern."
        ),
    )
    log_level: str = Field(
        "INFO",
        description="Root logger level name (DEBUG, INFO, WARNING, ...).",
    )
    interface_host: str = Field(
        "127.0.0.1",
        description="Network interface for the HTTP API to bind to.",
    )
    interface_port: int = Field(
        8000,
        description="Port the HTTP API listens on.",
        ge=1,
        le=65535,
    )

    class Config:
        env_prefix = "POCKETLEDGER_"
        env_file = ".env"
        case_sensitive = False

    @validator("database_path", pre=True)
    def _expand_path(cls, value: str | Path) -> Path:
        """Expand ``~`` so configured paths behave like shell paths."""

        return Path(value).expanduser()

    @validator("log_level")
    def _normalise_level(cls, value: str) -> str:
        """Accept any casing but reject names the logging module does not know."""

        normalised = value.strip().upper()
        if not isinstance(logging.getLevelName(normalised), int):
            raise ValueError(f"Unknown log level: {value}")
        return normalised


@lru_cache()
def get_settings() -> LedgerSettings:
    """Return cached settings, ensuring consistent configuration across modules."""

    return LedgerSettings()
