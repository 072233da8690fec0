"""
Tests for logging setup.
"""

import logging
from pathlib import Path

from lemonade_dev.core.observability.logging_config import (
    LOG_FILE_ENV,
    LOG_FILE_LEVEL_ENV,
    LOG_LEVEL_ENV,
    PACKAGE_LOGGER,
    level_from_flags,
    parse_level,
    setup_logging,
)


class TestParseLevel:
    def test_names(self):
        assert parse_level("debug") == logging.DEBUG
        assert parse_level(" INFO ") == logging.INFO

    def test_fallback(self):
        assert parse_level(None) == logging.WARNING
        assert parse_level("loud") == logging.WARNING


class TestLevelFromFlags:
    def test_precedence(self):
        assert level_from_flags(debug=True, verbose=True, quiet=True) == "DEBUG"
        assert level_from_flags(verbose=True, quiet=True) == "INFO"
        assert level_from_flags(quiet=True) == "ERROR"

    def test_no_flags(self):
        assert level_from_flags() is None


class TestSetupLogging:
    def test_defaults_to_warning(self):
        logger = setup_logging(environ={})
        assert logger.name == PACKAGE_LOGGER
        assert logger.level == logging.WARNING
        assert len(logger.handlers) == 1

    def test_env_level(self):
        logger = setup_logging(environ={LOG_LEVEL_ENV: "debug"})
        assert logger.level == logging.DEBUG

    def test_flag_beats_env(self):
        logger = setup_logging("ERROR", environ={LOG_LEVEL_ENV: "DEBUG"})
        assert logger.level == logging.ERROR

    def test_root_logger_untouched(self):
        root = logging.getLogger()
        handlers = root.handlers[:]
        logger = setup_logging("INFO", environ={})
        assert root.handlers == handlers
        assert logger.propagate is False

    def test_replaces_handlers(self):
        setup_logging("INFO", environ={})
        logger = setup_logging("DEBUG", environ={})
        assert len(logger.handlers) == 1

    def test_file_handler_from_env(self, tmp_path: Path):
        log_file = tmp_path / "lemonade.log"
        logger = setup_logging(
            environ={LOG_FILE_ENV: str(log_file), LOG_FILE_LEVEL_ENV: "DEBUG"},
        )
        assert logger.level == logging.DEBUG
        assert len(logger.handlers) == 2

        logging.getLogger("lemonade_dev.test").debug("written to file only")
        for h in logger.handlers:
            h.flush()
        assert "written to file only" in log_file.read_text()

    def test_empty_log_file_env_ignored(self):
        logger = setup_logging(environ={LOG_FILE_ENV: ""})
        assert len(logger.handlers) == 1
