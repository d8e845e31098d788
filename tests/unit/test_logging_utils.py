"""Unit tests for threatwatch.utils.logging_utils."""

from __future__ import annotations

import logging

import pytest
import yaml

from threatwatch.utils.logging_utils import configure_logging, get_logger, get_run_logger

LOGGER_NAME = "threatwatch.logging_test"


@pytest.fixture
def logging_yaml(tmp_path):
    """A minimal dictConfig file configuring only LOGGER_NAME."""
    path = tmp_path / "logging.yaml"
    path.write_text(
        yaml.safe_dump({
            "version": 1,
            "disable_existing_loggers": False,
            "formatters": {"plain": {"format": "%(levelname)s %(message)s"}},
            "loggers": {LOGGER_NAME: {"level": "WARNING", "handlers": [], "propagate": False}},
        }),
        encoding="utf-8",
    )
    yield path
    logger = logging.getLogger(LOGGER_NAME)
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()


class TestGetLogger:
    def test_namespaced(self):
        """Bare names are placed under threatwatch."""
        assert get_logger("agents.event_agent").name == "threatwatch.agents.event_agent"

    def test_already_namespaced(self):
        """Names already under threatwatch are left alone."""
        assert get_logger("threatwatch.pipeline").name == "threatwatch.pipeline"

    def test_run_logger_prefixes_run_id(self):
        """The adapter prefixes messages with the run id."""
        adapter = get_run_logger("pipeline", "20240115_120000_events")
        msg, _ = adapter.process("Pipeline: complete", {})
        assert msg == "[20240115_120000_events] Pipeline: complete"


class TestConfigureLogging:
    def test_level_override(self, logging_yaml):
        """log_level replaces every configured logger's level."""
        configure_logging(str(logging_yaml), log_level="debug")
        assert logging.getLogger(LOGGER_NAME).level == logging.DEBUG

    def test_log_file_handler_added(self, logging_yaml, tmp_path):
        """log_file attaches a file handler that receives records."""
        log_file = tmp_path / "run.log"
        configure_logging(str(logging_yaml), log_file=str(log_file))

        logger = logging.getLogger(LOGGER_NAME)
        logger.warning("Cascade analysis failed")
        for handler in logger.handlers:
            handler.flush()

        assert "WARNING Cascade analysis failed" in log_file.read_text(encoding="utf-8")
