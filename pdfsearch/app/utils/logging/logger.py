"""Centralized logging configuration for the search application.
This module sets up application-wide logging using Python's logging module.
It configures both console and file logging with UTF-8 encoding.
It also provides helper functions to log messages, replacing special Unicode
characters with their textual equivalents to avoid encoding issues.
"""

import os
import logging
import sys
from logging.handlers import RotatingFileHandler

from pdfsearch.app.utils.constant.constant import ERROR_WORD, WARNING_WORD, LOG_DIR

# Create the logs directory if it does not exist
os.makedirs(LOG_DIR, exist_ok=True)


class Utf8Formatter(logging.Formatter):
    """
    A logging formatter that keeps non-ASCII page text readable in log output.

    Methods:
        formatMessage(record)
            Formats the log record to a string while ensuring proper encoding.
    """

    def formatMessage(self, record):
        """
        Format the log message for the given log record.

        Parameters:
            record (logging.LogRecord): The log record containing all pertinent logging information.

        Returns:
            str: The formatted log message.
        """
        return super().formatMessage(record)


"""The following configuration sets up logging for the application.
Console logging goes to sys.stdout, file logging to a rotating file handler
capped at 10 MB with up to 5 backups.
"""
logging.basicConfig(
    level=logging.INFO,  # Set the logging level to INFO
    format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",  # Define the log format
    handlers=[
        logging.StreamHandler(stream=sys.stdout),  # Log to standard output
        RotatingFileHandler(
            os.path.join(LOG_DIR, "app.log"),  # Path to the log file
            maxBytes=10485760,  # Limit log file size to 10 MB
            backupCount=5,  # Keep up to 5 backup log files
            encoding='utf-8'  # Ensure UTF-8 encoding is used
        )
    ]
)

# Default logger for indexing, search and scan activity.
default_logger = logging.getLogger("document_search")
default_logger.setLevel(logging.INFO)


def log_info(message, *args, **kwargs):
    """Log an informational message with status glyphs replaced by text markers."""
    safe_message = message.replace("❌", ERROR_WORD).replace("⚠️", WARNING_WORD)
    default_logger.info(safe_message, *args, **kwargs)


def log_error(message, *args, **kwargs):
    """Log an error message with status glyphs replaced by text markers."""
    safe_message = message.replace("[OK]", ERROR_WORD).replace("❌", ERROR_WORD).replace("⚠️", WARNING_WORD)
    default_logger.error(safe_message, *args, **kwargs)


def log_warning(message, *args, **kwargs):
    """Log a warning message with status glyphs replaced by text markers."""
    safe_message = message.replace("[OK]", WARNING_WORD).replace("❌", ERROR_WORD).replace("⚠️", WARNING_WORD)
    default_logger.warning(safe_message, *args, **kwargs)


def log_debug(message, *args, **kwargs):
    """
    Log a debug message.

    Debug messages are emitted at DEBUG level so per-page chatter stays out of
    the default INFO output.
    """
    safe_message = message.replace("[OK]", "[DEBUG]").replace("❌", ERROR_WORD).replace("⚠️", WARNING_WORD)
    default_logger.debug(safe_message, *args, **kwargs)


# Export only the specified names to be available when importing this module.
__all__ = ["default_logger", "log_info", "log_error", "log_warning", "log_debug"]
