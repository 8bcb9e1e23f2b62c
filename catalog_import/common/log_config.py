"""
Logging Configuration

Console output goes to stderr so stdout only carries the import summary.
An optional log file records every skipped row of a run (DEBUG), which is
what you want when reconciling a large vendor sheet afterwards.
"""

import logging
import os
import sys
from typing import Optional

LOGGER_NAME = "catalog_import"

CONSOLE_FORMAT = "%(levelname)-8s %(message)s"
FILE_FORMAT = "%(asctime)s %(levelname)-8s %(name)s: %(message)s"


def _console_level(verbose: bool, quiet: bool) -> int:
    if verbose:
        return logging.DEBUG
    if quiet:
        return logging.WARNING
    return logging.INFO


def setup_logging(verbose: bool = False, quiet: bool = False, log_file: Optional[str] = None) -> None:
    """
    Configure the package logger.

    Args:
        verbose: Show DEBUG messages on the console (every skipped row)
        quiet: Only show warnings and errors on the console
        log_file: Also write DEBUG-level records to this file
    """
    console_level = _console_level(verbose, quiet)

    console = logging.StreamHandler(sys.stderr)
    console.setLevel(console_level)
    console.setFormatter(logging.Formatter(CONSOLE_FORMAT))

    logger = logging.getLogger(LOGGER_NAME)
    for handler in logger.handlers:
        handler.close()
    logger.handlers.clear()
    logger.addHandler(console)

    if log_file:
        os.makedirs(os.path.dirname(log_file) or ".", exist_ok=True)
        file_handler = logging.FileHandler(log_file, encoding="utf-8")
        file_handler.setLevel(logging.DEBUG)
        file_handler.setFormatter(logging.Formatter(FILE_FORMAT))
        logger.addHandler(file_handler)
        logger.setLevel(logging.DEBUG)
    else:
        logger.setLevel(console_level)
