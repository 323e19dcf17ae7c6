"""Configuration parsing safeguards."""

from __future__ import annotations

import pytest

import streakwise.config as cfg


def test_defaults(tmp_path):
    config = cfg.BaseConfig()

    assert config.DATA_DIR == (tmp_path / "data").resolve()
    assert config.DATA_DIR.exists()
    assert config.DATABASE_URL.startswith("sqlite:///")
    assert config.DATABASE_URL.endswith("streakwise.db")
    assert config.TIMEZONE == "UTC"
    assert config.TREND_DAYS == 7
    assert config.TIME_RANGE == "month"
    assert config.DEV_MODE is True


def test_environment_overrides(monkeypatch):
    monkeypatch.setenv("STREAKWISE_DEV_MODE", "off")
    monkeypatch.setenv("STREAKWISE_TIMEZONE", "Europe/Berlin")
    monkeypatch.setenv("STREAKWISE_TREND_DAYS", "14")
    monkeypatch.setenv("STREAKWISE_TIME_RANGE", "Week")
    monkeypatch.setenv("STREAKWISE_DATABASE_URL", "sqlite:///elsewhere.db")

    config = cfg.BaseConfig()

    assert config.DEV_MODE is False
    assert config.tzinfo().key == "Europe/Berlin"
    assert config.TREND_DAYS == 14
    assert config.TIME_RANGE == "week"
    assert config.DATABASE_URL == "sqlite:///elsewhere.db"


def test_unknown_timezone_rejected(monkeypatch):
    monkeypatch.setenv("STREAKWISE_TIMEZONE", "Mars/Olympus_Mons")
    with pytest.raises(ValueError):
        cfg.BaseConfig()


@pytest.mark.parametrize("value", ["0", "-3", "seven"])
def test_bad_trend_days_rejected(monkeypatch, value):
    monkeypatch.setenv("STREAKWISE_TREND_DAYS", value)
    with pytest.raises(ValueError):
        cfg.BaseConfig()


def test_bad_time_range_rejected(monkeypatch):
    monkeypatch.setenv("STREAKWISE_TIME_RANGE", "decade")
    with pytest.raises(ValueError):
        cfg.BaseConfig()


def test_in_memory_config():
    config = cfg.TestConfig()
    assert config.DATABASE_URL == "sqlite://"
