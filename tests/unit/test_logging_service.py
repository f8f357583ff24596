"""Tests for logging service configuration."""

import logging
from unittest.mock import patch

from household.services.logging import QUIET_LOGGERS, get_log_level, setup_server_logging


class TestServerLogging:
    """Test server logging configuration."""

    def setup_method(self):
        """Save original handlers before each test."""
        self.root_logger = logging.getLogger()
        self.original_handlers = self.root_logger.handlers.copy()
        self.original_level = self.root_logger.level

    def teardown_method(self):
        """Restore original handlers after each test."""
        for handler in self.root_logger.handlers[:]:
            handler.close()
            self.root_logger.removeHandler(handler)
        for handler in self.original_handlers:
            self.root_logger.addHandler(handler)
        self.root_logger.setLevel(self.original_level)
        for name in QUIET_LOGGERS:
            logging.getLogger(name).setLevel(logging.NOTSET)

    def test_creates_log_directory(self, tmp_path) -> None:
        log_file = tmp_path / "nested" / "server.log"
        assert not log_file.parent.exists()

        setup_server_logging(str(log_file))

        assert log_file.parent.exists()

    def test_creates_stdout_and_file_handlers(self, tmp_path) -> None:
        setup_server_logging(str(tmp_path / "server.log"))

        assert len(self.root_logger.handlers) == 2

    def test_handlers_use_configured_level(self, tmp_path) -> None:
        with patch.dict("os.environ", {"LOG_LEVEL": "WARNING"}, clear=False):
            setup_server_logging(str(tmp_path / "server.log"))

        assert self.root_logger.level == logging.WARNING
        for handler in self.root_logger.handlers:
            assert handler.level == logging.WARNING

    def test_writes_named_records_to_file(self, tmp_path) -> None:
        log_file = tmp_path / "server.log"
        with patch.dict("os.environ", {"LOG_LEVEL": "INFO"}, clear=False):
            setup_server_logging(str(log_file))

        logging.getLogger("household.settlement").info("Net transfer computed")

        contents = log_file.read_text()
        assert "household.settlement - INFO - Net transfer computed" in contents
        assert contents.startswith("[")

    def test_default_level_used_without_env(self, tmp_path, monkeypatch) -> None:
        monkeypatch.delenv("LOG_LEVEL", raising=False)

        setup_server_logging(str(tmp_path / "server.log"), default_level="ERROR")

        assert self.root_logger.level == logging.ERROR

    def test_quiets_third_party_loggers(self, tmp_path) -> None:
        with patch.dict("os.environ", {"LOG_LEVEL": "INFO"}, clear=False):
            setup_server_logging(str(tmp_path / "server.log"))

        assert logging.getLogger("sqlalchemy.engine").level == logging.WARNING

    def test_debug_keeps_third_party_loggers_verbose(self, tmp_path) -> None:
        with patch.dict("os.environ", {"LOG_LEVEL": "DEBUG"}, clear=False):
            setup_server_logging(str(tmp_path / "server.log"))

        assert logging.getLogger("sqlalchemy.engine").level == logging.DEBUG


class TestGetLogLevel:
    def test_default_is_info(self, monkeypatch) -> None:
        monkeypatch.delenv("LOG_LEVEL", raising=False)

        assert get_log_level() == logging.INFO

    def test_level_is_case_insensitive(self, monkeypatch) -> None:
        monkeypatch.setenv("LOG_LEVEL", "debug")

        assert get_log_level() == logging.DEBUG

    def test_unknown_level_falls_back_to_info(self, monkeypatch) -> None:
        monkeypatch.setenv("LOG_LEVEL", "VERBOSE")

        assert get_log_level() == logging.INFO
