"""Tests for structured logging functionality."""

from __future__ import annotations

import json
import logging
import logging.handlers
import sys

import pytest

from streakwise.config import BaseConfig
from streakwise.logging_config import JSONFormatter, get_logger, setup_logging


@pytest.fixture(autouse=True)
def _reset_package_logger():
    yield
    logger = logging.getLogger("streakwise")
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()
    logger.setLevel(logging.NOTSET)


def _record(level=logging.INFO, msg="Test message", exc_info=None):
    record = logging.LogRecord(
        name="test.logger",
        level=level,
        pathname="test.py",
        lineno=42,
        msg=msg,
        args=(),
        exc_info=exc_info,
    )
    record.module = "test_module"
    record.funcName = "test_function"
    return record


def test_json_formatter():
    """JSONFormatter emits the expected keys."""
    log_data = json.loads(JSONFormatter().format(_record()))

    assert log_data["level"] == "INFO"
    assert log_data["logger"] == "test.logger"
    assert log_data["message"] == "Test message"
    assert log_data["module"] == "test_module"
    assert log_data["function"] == "test_function"
    assert log_data["line"] == 42
    assert "timestamp" in log_data
    assert "extra" not in log_data


def test_json_formatter_with_exception():
    try:
        raise ValueError("Test error")
    except ValueError:
        exc_info = sys.exc_info()

    log_data = json.loads(JSONFormatter().format(_record(logging.ERROR, "Error occurred", exc_info)))

    assert log_data["exception"]["type"] == "ValueError"
    assert "Test error" in log_data["exception"]["message"]
    assert log_data["exception"]["traceback"] is not None


def test_json_formatter_includes_extra_fields():
    record = _record()
    record.habit_id = 7
    log_data = json.loads(JSONFormatter().format(record))
    assert log_data["extra"] == {"habit_id": 7}


def test_setup_logging(tmp_path):
    """Logging setup creates a JSON log file under the data directory."""
    config = BaseConfig()
    config.DATA_DIR = tmp_path
    config.DEV_MODE = True

    logger = setup_logging(config)

    assert logger.name == "streakwise"
    assert logger.level == logging.DEBUG
    assert len(logger.handlers) == 2  # Console + File

    log_file = tmp_path / "logs" / "streakwise.log"
    assert log_file.exists()

    get_logger("services.test").warning("Test warning message")
    for handler in logger.handlers:
        handler.flush()

    lines = [line for line in log_file.read_text(encoding="utf-8").splitlines() if line.strip()]
    assert len(lines) >= 2
    entries = [json.loads(line) for line in lines]
    assert entries[0]["message"] == "Logging initialized"
    assert entries[-1]["logger"] == "streakwise.services.test"


def test_file_lines_omit_console_timestamp(tmp_path):
    """The console formatter's asctime must not leak into JSON extras."""
    config = BaseConfig()
    config.DATA_DIR = tmp_path
    config.DEV_MODE = True

    logger = setup_logging(config)
    get_logger("services.test").info("hello")
    for handler in logger.handlers:
        handler.flush()

    lines = (tmp_path / "logs" / "streakwise.log").read_text(encoding="utf-8").splitlines()
    entry = json.loads(lines[-1])
    assert entry["message"] == "hello"
    assert "extra" not in entry


def test_setup_logging_is_idempotent(tmp_path):
    config = BaseConfig()
    config.DATA_DIR = tmp_path

    setup_logging(config)
    logger = setup_logging(config)

    assert len(logger.handlers) == 2


def test_get_logger():
    """get_logger returns loggers under the package namespace."""
    assert get_logger("module1").name == "streakwise.module1"
    assert get_logger("streakwise.services.ledger").name == "streakwise.services.ledger"
    assert get_logger("streakwise").name == "streakwise"


@pytest.mark.parametrize("dev_mode", [True, False])
def test_logging_levels_by_mode(tmp_path, dev_mode):
    """Console logging level adjusts based on dev mode."""
    config = BaseConfig()
    config.DATA_DIR = tmp_path
    config.DEV_MODE = dev_mode

    logger = setup_logging(config)

    console_handler = next(
        handler
        for handler in logger.handlers
        if isinstance(handler, logging.StreamHandler)
        and not isinstance(handler, logging.handlers.RotatingFileHandler)
    )
    expected_level = logging.INFO if dev_mode else logging.WARNING
    assert console_handler.level == expected_level
