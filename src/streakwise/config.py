"""Application configuration objects and helpers."""

from __future__ import annotations

import os
from pathlib import Path
from typing import Any
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from dotenv import load_dotenv

load_dotenv()

TIME_RANGES = ("week", "month", "year")


def _env_bool(name: str, default: bool = False) -> bool:
    """Interpret environment variable values as booleans."""

    value = os.getenv(name)
    if value is None:
        return default
    return value.strip().lower() in {"1", "true", "yes", "on"}


def _env_int(name: str, default: int) -> int:
    """Interpret environment variable values as integers."""

    value = os.getenv(name)
    if value is None or not value.strip():
        return default
    try:
        return int(value.strip())
    except ValueError as exc:
        raise ValueError(f"{name} must be an integer, got {value!r}") from exc


class BaseConfig:
    """Base configuration shared across environments."""

    DB_FILENAME = "streakwise.db"
    SQLITE_PRAGMAS = {"journal_mode": "wal", "foreign_keys": "on"}

    def __init__(self) -> None:
        self.DATA_DIR = self._resolve_data_dir()
        self.DEV_MODE = _env_bool("STREAKWISE_DEV_MODE", default=True)
        self.DATABASE_URL = os.getenv("STREAKWISE_DATABASE_URL", self._build_sqlite_url())
        self.TIMEZONE = os.getenv("STREAKWISE_TIMEZONE", "UTC")
        self.TREND_DAYS = _env_int("STREAKWISE_TREND_DAYS", 7)
        self.TIME_RANGE = os.getenv("STREAKWISE_TIME_RANGE", "month").strip().lower()

        if self.TREND_DAYS < 1:
            raise ValueError("STREAKWISE_TREND_DAYS must be at least 1.")
        if self.TIME_RANGE not in TIME_RANGES:
            raise ValueError(
                f"STREAKWISE_TIME_RANGE must be one of {', '.join(TIME_RANGES)}; "
                f"got {self.TIME_RANGE!r}"
            )
        self.tzinfo()

    def _resolve_data_dir(self) -> Path:
        """Return the directory where the SQLite file and logs live."""

        data_root = os.getenv("STREAKWISE_DATA_DIR", "instance")
        path = Path(data_root).expanduser().resolve()
        path.mkdir(parents=True, exist_ok=True)
        return path

    def _build_sqlite_url(self) -> str:
        """Construct the default SQLite URL inside the data directory."""

        db_path = self.DATA_DIR / self.DB_FILENAME
        return f"sqlite:///{db_path}"

    def tzinfo(self) -> ZoneInfo:
        """Return the zone used to decide which calendar day is "today"."""

        try:
            return ZoneInfo(self.TIMEZONE)
        except (ZoneInfoNotFoundError, ValueError) as exc:
            raise ValueError(f"STREAKWISE_TIMEZONE is not a known zone: {self.TIMEZONE!r}") from exc

    def sqlalchemy_engine_options(self) -> dict[str, Any]:
        """Expose engine kwargs for SQLModel to consume."""

        if self.DATABASE_URL.startswith("sqlite"):
            return {"connect_args": {"check_same_thread": False}}
        return {}


class TestConfig(BaseConfig):
    """Test configuration backed by an in-memory database."""

    def __init__(self) -> None:
        super().__init__()
        self.DATABASE_URL = "sqlite://"
