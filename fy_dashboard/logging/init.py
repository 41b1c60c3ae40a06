from __future__ import annotations

import logging
import sys

"""Console logging for the dashboard.

Every line is ``<LABEL> <message>`` on stdout, where LABEL is one of DEBUG,
INFO, WARN, ERROR or SUMMARY. Module loggers (``logging.getLogger(__name__)``)
are children of "fy_dashboard" and share its single handler. The load summary
has its own SUMMARY level (25, between INFO and WARNING).
"""

__all__ = [
    "LOGGER_NAME",
    "SUMMARY_LEVEL",
    "LabeledFormatter",
    "setup_logging",
    "set_level",
    "set_debug",
    "get_logger",
    "log_summary",
    "reset_logging",
]

LOGGER_NAME = "fy_dashboard"
SUMMARY_LEVEL = 25

_configured: logging.Logger | None = None


class LabeledFormatter(logging.Formatter):
    LABELS = {
        logging.DEBUG: "DEBUG",
        logging.INFO: "INFO",
        logging.WARNING: "WARN",
        logging.ERROR: "ERROR",
        logging.CRITICAL: "CRITICAL",
        SUMMARY_LEVEL: "SUMMARY",
    }

    def format(self, record: logging.LogRecord) -> str:
        return f"{self.LABELS.get(record.levelno, record.levelname)} {record.getMessage()}"


def setup_logging(level: int = logging.INFO) -> logging.Logger:
    """Attach one stdout handler to the "fy_dashboard" logger; later calls are no-ops.

    The handler binds ``sys.stdout`` as it is at first call, so text views and
    log lines end up in the same stream.
    """
    global _configured
    if _configured is not None:
        return _configured

    logging.addLevelName(SUMMARY_LEVEL, "SUMMARY")
    logger = logging.getLogger(LOGGER_NAME)
    logger.handlers.clear()
    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(LabeledFormatter())
    logger.addHandler(handler)
    logger.propagate = False
    set_level(logger, level)

    _configured = logger
    return logger


def set_level(logger: logging.Logger, level: int) -> None:
    logger.setLevel(level)
    for h in logger.handlers:
        h.setLevel(level)


def set_debug(logger: logging.Logger) -> None:
    set_level(logger, logging.DEBUG)


def get_logger() -> logging.Logger:
    return _configured if _configured is not None else setup_logging()


def log_summary(message: str) -> None:
    get_logger().log(SUMMARY_LEVEL, message)


def reset_logging() -> None:
    """Forget the configured logger so the next setup rebinds stdout (tests)."""
    global _configured
    _configured = None
