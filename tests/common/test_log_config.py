"""Tests for catalog_import/common/log_config.py"""

import logging
import sys

from catalog_import.common.log_config import LOGGER_NAME, setup_logging


class TestSetupLogging:
    def teardown_method(self):
        """Reset logger between tests."""
        logger = logging.getLogger(LOGGER_NAME)
        logger.handlers.clear()
        logger.setLevel(logging.WARNING)

    def test_default_level_is_info(self):
        setup_logging()
        logger = logging.getLogger(LOGGER_NAME)
        assert logger.level == logging.INFO

    def test_verbose_sets_debug(self):
        setup_logging(verbose=True)
        logger = logging.getLogger(LOGGER_NAME)
        assert logger.level == logging.DEBUG

    def test_quiet_sets_warning(self):
        setup_logging(quiet=True)
        logger = logging.getLogger(LOGGER_NAME)
        assert logger.level == logging.WARNING

    def test_handler_outputs_to_stderr(self):
        setup_logging()
        logger = logging.getLogger(LOGGER_NAME)
        assert len(logger.handlers) == 1
        handler = logger.handlers[0]
        assert handler.stream is sys.stderr

    def test_repeated_setup_keeps_one_handler(self):
        setup_logging()
        setup_logging(verbose=True)
        logger = logging.getLogger(LOGGER_NAME)
        assert len(logger.handlers) == 1

    def test_child_loggers_inherit_level(self):
        child = logging.getLogger("catalog_import.pipeline.batch_coordinator")
        setup_logging(quiet=True)
        assert child.getEffectiveLevel() == logging.WARNING

    def test_console_level_follows_flags(self):
        setup_logging(quiet=True)
        handler = logging.getLogger(LOGGER_NAME).handlers[0]
        assert handler.level == logging.WARNING


class TestLogFile:
    def teardown_method(self):
        logger = logging.getLogger(LOGGER_NAME)
        for handler in logger.handlers:
            handler.close()
        logger.handlers.clear()
        logger.setLevel(logging.WARNING)

    def test_file_receives_debug_records(self, tmp_path):
        log_file = tmp_path / "logs" / "import.log"
        setup_logging(quiet=True, log_file=str(log_file))

        logger = logging.getLogger(LOGGER_NAME + ".extraction")
        logger.debug("Skipping duplicate product: %s", "AP-001")
        for handler in logging.getLogger(LOGGER_NAME).handlers:
            handler.flush()

        assert "Skipping duplicate product: AP-001" in log_file.read_text(encoding="utf-8")

    def test_file_handler_added_alongside_console(self, tmp_path):
        setup_logging(log_file=str(tmp_path / "import.log"))
        logger = logging.getLogger(LOGGER_NAME)
        assert len(logger.handlers) == 2
        assert logger.level == logging.DEBUG
        assert logger.handlers[0].level == logging.INFO
