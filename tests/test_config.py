"""Tests for settings loading."""

import pytest

from smsledger.config import Settings, load_settings
from smsledger.domain.errors import ConfigurationError


def test_defaults(monkeypatch):
    for name in ("SMSLEDGER_CURRENCY", "SMSLEDGER_TIMEZONE", "SMSLEDGER_LOG_LEVEL"):
        monkeypatch.delenv(name, raising=False)

    settings = load_settings()

    assert settings == Settings()
    assert settings.base_currency == "MVR"
    assert settings.timezone == "Indian/Maldives"


def test_environment(monkeypatch):
    monkeypatch.setenv("SMSLEDGER_CURRENCY", "USD")
    monkeypatch.setenv("SMSLEDGER_TIMEZONE", "UTC")

    settings = load_settings()

    assert settings.base_currency == "USD"
    assert settings.timezone == "UTC"


def test_overrides_win(monkeypatch):
    monkeypatch.setenv("SMSLEDGER_TIMEZONE", "UTC")

    settings = load_settings(timezone="Asia/Kolkata", base_currency=None)

    assert settings.timezone == "Asia/Kolkata"
    assert settings.base_currency == "MVR"


def test_unknown_timezone():
    with pytest.raises(ConfigurationError, match="Unknown timezone"):
        load_settings(timezone="Nowhere/Atlantis")
