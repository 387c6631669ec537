"""Unit tests for shark logging configuration."""

from __future__ import annotations

import json
import logging
import math
import os
import sys
from logging.handlers import RotatingFileHandler
from unittest import mock

import pytest

import shark
from shark.logging_config import LOGGER_NAME, JsonFormatter, _get_level, _get_logger
from shark.numerics import Integrator, TooManySubdivisionsError


class TestSilentByDefault:
    def test_logger_has_null_handler(self):
        logger = logging.getLogger(LOGGER_NAME)
        assert any(isinstance(h, logging.NullHandler) for h in logger.handlers)

    def test_integration_produces_no_output(self, capfd):
        Integrator(100).integrate(lambda x, p: math.sin(x), None, 0, math.pi, 1e-10, 0)

        captured = capfd.readouterr()
        assert captured.out == ""
        assert captured.err == ""


class TestEnableConsoleLogging:
    def test_sets_level_and_adds_handler(self):
        handler = shark.enable_console_logging(level="DEBUG")

        logger = _get_logger()
        assert handler in logger.handlers
        assert logger.level == logging.DEBUG

    def test_integrator_debug_trace(self, capfd):
        shark.enable_console_logging(level="DEBUG", format="[TRACE] %(name)s %(message)s")

        Integrator(100).integrate(lambda x, p: x, None, 0, 1, 1e-10, 0)

        captured = capfd.readouterr()
        assert "[TRACE] shark.numerics.integrator Integrated over [0, 1]" in captured.err
        assert "using 1 intervals" in captured.err

    def test_failure_logged_as_warning(self, caplog):
        with caplog.at_level(logging.WARNING, logger=LOGGER_NAME):
            with pytest.raises(TooManySubdivisionsError):
                Integrator(1).integrate(lambda x, p: math.sin(x), None, 0, math.pi, 1e-12, 0)

        warnings = [r for r in caplog.records if r.levelno == logging.WARNING]
        assert len(warnings) == 1
        assert "failed after 1 intervals" in warnings[0].getMessage()


class TestEnableFileLogging:
    def test_creates_rotating_handler_and_parents(self, tmp_path):
        log_file = tmp_path / "nested" / "shark.log"
        handler = shark.enable_file_logging(log_file, max_bytes=1024, backup_count=3)

        assert isinstance(handler, RotatingFileHandler)
        assert handler.maxBytes == 1024
        assert handler.backupCount == 3
        assert log_file.parent.exists()

    def test_writes_to_file(self, tmp_path):
        log_file = tmp_path / "shark.log"
        shark.enable_file_logging(log_file, level="INFO")

        logging.getLogger(f"{LOGGER_NAME}.test").info("file test message")
        for handler in _get_logger().handlers:
            handler.flush()

        assert "file test message" in log_file.read_text()


class TestEnableJsonLogging:
    def test_outputs_valid_json(self, capfd):
        shark.enable_json_logging(level="INFO")

        logging.getLogger(f"{LOGGER_NAME}.test").info("json test")

        data = json.loads(capfd.readouterr().err.strip())
        assert data["message"] == "json test"
        assert data["level"] == "INFO"
        assert data["logger"] == f"{LOGGER_NAME}.test"
        assert "timestamp" in data

    def test_writes_json_to_file(self, tmp_path):
        log_file = tmp_path / "shark.jsonl"
        handler = shark.enable_json_logging(level="INFO", path=log_file)
        assert isinstance(handler, RotatingFileHandler)

        logging.getLogger(f"{LOGGER_NAME}.test").info("json file test")
        handler.flush()

        assert json.loads(log_file.read_text().strip())["message"] == "json file test"

    def test_formatter_includes_exception(self):
        try:
            raise RuntimeError("test error")
        except RuntimeError:
            record = logging.LogRecord(
                name="shark.test",
                level=logging.ERROR,
                pathname="test.py",
                lineno=1,
                msg="error occurred",
                args=(),
                exc_info=sys.exc_info(),
            )

        data = json.loads(JsonFormatter().format(record))
        assert "RuntimeError" in data["exception"]


class TestConfigureFromEnv:
    def test_respects_level(self):
        with mock.patch.dict(os.environ, {"SHARK_LOGGING": "DEBUG"}, clear=False):
            shark.configure_from_env()

        assert _get_logger().level == logging.DEBUG

    def test_respects_log_file(self, tmp_path):
        log_file = tmp_path / "env.log"
        with mock.patch.dict(os.environ, {"SHARK_LOG_FILE": str(log_file)}, clear=False):
            shark.configure_from_env()

        assert any(isinstance(h, RotatingFileHandler) for h in _get_logger().handlers)
        assert _get_logger().level == logging.INFO

    def test_respects_json(self, capfd):
        with mock.patch.dict(os.environ, {"SHARK_LOGGING": "INFO", "SHARK_LOG_JSON": "1"}, clear=False):
            shark.configure_from_env()

        logging.getLogger(f"{LOGGER_NAME}.test").info("json env test")
        assert json.loads(capfd.readouterr().err.strip())["message"] == "json env test"

    def test_does_nothing_without_env_vars(self):
        initial_count = len(_get_logger().handlers)

        with mock.patch.dict(os.environ, {}, clear=True):
            shark.configure_from_env()

        assert len(_get_logger().handlers) == initial_count


class TestLevels:
    def test_set_level(self):
        shark.set_level("WARNING")
        assert _get_logger().level == logging.WARNING
        shark.set_level(logging.ERROR)
        assert _get_logger().level == logging.ERROR

    def test_set_module_level(self, capfd):
        shark.enable_console_logging(level="DEBUG")
        shark.set_module_level("numerics.workspace", "CRITICAL")

        try:
            Integrator(10)
            captured = capfd.readouterr()
            assert "Allocated quadrature workspace" not in captured.err
        finally:
            logging.getLogger(f"{LOGGER_NAME}.numerics.workspace").setLevel(logging.NOTSET)

    def test_disable_logging(self, capfd):
        shark.enable_console_logging(level="DEBUG")
        shark.disable_logging()

        logging.getLogger(f"{LOGGER_NAME}.test").critical("this should not appear")

        assert "this should not appear" not in capfd.readouterr().err
        assert all(isinstance(h, logging.NullHandler) for h in _get_logger().handlers)

    def test_get_level(self):
        assert _get_level("info") == logging.INFO
        assert _get_level(logging.ERROR) == logging.ERROR
        assert _get_level("INVALID") == logging.INFO
