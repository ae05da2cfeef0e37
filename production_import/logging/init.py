from __future__ import annotations

import logging
import sys
from typing import TextIO

"""Labeled stdout logging for the importer.

Every line the importer prints starts with a label:

    DEBUG resolver header_keys=11 ton_per_hour_key=None
    INFO wrote 120 records to import_entries.json
    SUMMARY records=120 rows=124 skipped=4 ...

SUMMARY is a custom level (25) reserved for the machine-readable completion
line. Module loggers (`production_import.*`) have no handlers of their own and
reach stdout through the package logger configured here.
"""

__all__ = [
    "LOGGER_NAME",
    "LabeledFormatter",
    "SUMMARY_LEVEL",
    "get_logger",
    "log_summary",
    "reset_logging",
    "set_debug",
    "setup_logging",
]

LOGGER_NAME = "production_import"
SUMMARY_LEVEL = 25  # between INFO and WARNING

_logger: logging.Logger | None = None


class LabeledFormatter(logging.Formatter):
    """`LABEL message`, with WARN instead of WARNING."""

    LEVEL_LABELS = {
        logging.DEBUG: "DEBUG",
        logging.INFO: "INFO",
        SUMMARY_LEVEL: "SUMMARY",
        logging.WARNING: "WARN",
        logging.ERROR: "ERROR",
        logging.CRITICAL: "CRITICAL",
    }

    def format(self, record: logging.LogRecord) -> str:
        label = self.LEVEL_LABELS.get(record.levelno, record.levelname)
        return f"{label} {record.getMessage()}"


def _detach_handlers(logger: logging.Logger) -> None:
    for handler in logger.handlers[:]:
        logger.removeHandler(handler)


def setup_logging(stream: TextIO | None = None) -> logging.Logger:
    """Configure the package logger once per process and return it.

    Args:
        stream: Output stream (default: sys.stdout at call time)

    Later calls return the same logger untouched until reset_logging().
    """
    global _logger
    if _logger is not None:
        return _logger

    logging.addLevelName(SUMMARY_LEVEL, "SUMMARY")
    logger = logging.getLogger(LOGGER_NAME)
    _detach_handlers(logger)

    handler = logging.StreamHandler(stream or sys.stdout)
    handler.setFormatter(LabeledFormatter())
    handler.setLevel(logging.INFO)
    logger.addHandler(handler)
    logger.setLevel(logging.INFO)
    # stdout only; the root logger would print every line twice
    logger.propagate = False

    _logger = logger
    return logger


def get_logger() -> logging.Logger:
    return _logger if _logger is not None else setup_logging()


def set_debug(logger: logging.Logger) -> None:
    """Switch the logger and its handlers to DEBUG (the CLI --debug flag)."""
    logger.setLevel(logging.DEBUG)
    for handler in logger.handlers:
        handler.setLevel(logging.DEBUG)


def log_summary(message: str) -> None:
    """Emit `SUMMARY <message>`."""
    get_logger().log(SUMMARY_LEVEL, message)


def reset_logging() -> None:
    """Forget the configured logger and restore default propagation (tests)."""
    global _logger
    logger = logging.getLogger(LOGGER_NAME)
    _detach_handlers(logger)
    logger.setLevel(logging.NOTSET)
    logger.propagate = True
    _logger = None
