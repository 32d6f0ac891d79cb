"""
Unit tests for logging configuration.
"""

import logging

import pytest

from suburbpulse.logging_config import (
    PACKAGE_LOGGER,
    get_logger,
    reset_logging,
    setup_logging,
)


@pytest.fixture(autouse=True)
def restore_logging():
    yield
    reset_logging()
    setup_logging()


class TestSetupLogging:
    """Tests for setup_logging function."""

    def test_explicit_level_overrides_earlier_setup(self):
        setup_logging()
        setup_logging(level="debug")
        assert logging.getLogger(PACKAGE_LOGGER).level == logging.DEBUG

    def test_repeat_call_without_overrides_is_noop(self):
        setup_logging(level="ERROR")
        setup_logging()
        assert logging.getLogger(PACKAGE_LOGGER).level == logging.ERROR

    def test_unknown_level_falls_back_to_info(self):
        setup_logging(level="LOUD")
        assert logging.getLogger(PACKAGE_LOGGER).level == logging.INFO

    def test_level_from_environment(self, monkeypatch):
        monkeypatch.setenv("SUBURBPULSE_LOG_LEVEL", "WARNING")
        from suburbpulse.config import reset_config
        reset_config()
        try:
            setup_logging(force=True)
            assert logging.getLogger(PACKAGE_LOGGER).level == logging.WARNING
        finally:
            reset_config()

    def test_log_file_receives_records(self, tmp_path):
        log_path = tmp_path / "logs" / "suburbpulse.log"
        setup_logging(log_file=str(log_path))

        get_logger("tests").warning("written to file")
        for handler in logging.getLogger(PACKAGE_LOGGER).handlers:
            handler.flush()

        assert "written to file" in log_path.read_text(encoding="utf-8")

    def test_reconfigure_does_not_stack_handlers(self):
        setup_logging(force=True)
        setup_logging(force=True)
        assert len(logging.getLogger(PACKAGE_LOGGER).handlers) == 1


class TestGetLogger:
    """Tests for get_logger function."""

    def test_prefixes_package_namespace(self):
        assert get_logger("analytics.outliers").name == "suburbpulse.analytics.outliers"

    def test_keeps_package_names(self):
        assert get_logger("suburbpulse.ingestion").name == "suburbpulse.ingestion"
