"""Mini README: Tests for environment-driven settings."""

from __future__ import annotations

from pathlib import Path

import pytest
from pydantic import ValidationError

from pocketledger.configuration import LedgerSettings


def test_environment_overrides(monkeypatch) -> None:
    monkeypatch.setenv("POCKETLEDGER_DATABASE_PATH", "~/ledgers/home.db")
    monkeypatch.setenv("POCKETLEDGER_LOG_LEVEL", "debug")
    monkeypatch.setenv("POCKETLEDGER_INTERFACE_PORT", "9100")

    settings = LedgerSettings()

    assert settings.database_path == Path("~/ledgers/home.db").expanduser()
    assert settings.log_level == "DEBUG"
    assert settings.interface_port == 9100
    assert settings.month_label_format == "%b %Y"


def test_invalid_values_are_rejected(monkeypatch) -> None:
    monkeypatch.setenv("POCKETLEDGER_LOG_LEVEL", "chatty")
    with pytest.raises(ValidationError):
        LedgerSettings()

    monkeypatch.setenv("POCKETLEDGER_LOG_LEVEL", "info")
    monkeypatch.setenv("POCKETLEDGER_INTERFACE_PORT", "70000")
    with pytest.raises(ValidationError):
        LedgerSettings()
