"""Logging configuration for the kitchen planner."""

import logging
import os
import sys
from datetime import datetime

from .config import LOG_LEVEL


class ConsoleFormatter(logging.Formatter):
    """Human-readable single-line formatter."""

    def format(self, record: logging.LogRecord) -> str:
        timestamp = datetime.now().strftime("%Y-%m-%d %H:%M:%S")
        level = record.levelname.ljust(8)
        formatted = f"{timestamp} | {level} | {record.name} | {record.getMessage()}"

        if record.exc_info:
            formatted += "\n" + self.formatException(record.exc_info)

        return formatted


def get_logger(name: str) -> logging.Logger:
    """Get a logger for the given module name."""
    return logging.getLogger(name)


def configure_logging(log_level: str | None = None, log_file: str | None = None) -> None:
    """
    Configure logging for the application.

    Args:
        log_level: Minimum log level (DEBUG, INFO, WARNING, ERROR). Falls back
            to the LOG_LEVEL environment variable.
        log_file: Optional file path to also write logs to.
    """
    level_str = (log_level or os.getenv("LOG_LEVEL", LOG_LEVEL)).upper()
    level = getattr(logging, level_str, logging.WARNING)

    formatter = ConsoleFormatter()

    package_logger = logging.getLogger("kitchen_planner")
    package_logger.setLevel(level)

    # Remove existing handlers so repeated CLI invocations don't stack them
    for handler in package_logger.handlers[:]:
        package_logger.removeHandler(handler)

    # Logs go to stderr so command output stays clean
    console_handler = logging.StreamHandler(sys.stderr)
    console_handler.setFormatter(formatter)
    console_handler.setLevel(level)
    package_logger.addHandler(console_handler)

    if log_file:
        file_handler = logging.FileHandler(log_file)
        file_handler.setFormatter(formatter)
        file_handler.setLevel(level)
        package_logger.addHandler(file_handler)

    package_logger.propagate = False

    # Quiet noisy third-party loggers
    for module_name in ("httpx", "httpcore"):
        logging.getLogger(module_name).setLevel(logging.WARNING)

    package_logger.debug(f"Logging configured: level={level_str}")
