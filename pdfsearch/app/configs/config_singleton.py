"""
Configuration singleton for document search.

This module provides direct access to configuration values
without requiring service imports.
"""

import os
from typing import Any

from dotenv import load_dotenv

from pdfsearch.app.utils.constant.constant import (
    DEFAULT_SCAN_BATCH_SIZE,
    DEFAULT_SEARCH_DEBOUNCE_SECONDS,
    DEFAULT_PDF_URL,
    DEFAULT_FETCH_TIMEOUT,
    MAX_PDF_SIZE_MB,
)

# Load environment variables
load_dotenv(verbose=True)

# Global configuration dictionary
_config = {}


def _load_config_from_env() -> None:
    """Load configuration from environment variables."""

    # Background scan configuration
    _config["scan_batch_size"] = _parse_positive_int(
        os.getenv("SCAN_BATCH_SIZE"), DEFAULT_SCAN_BATCH_SIZE
    )
    _config["search_debounce_seconds"] = _parse_float(
        os.getenv("SEARCH_DEBOUNCE_SECONDS"), DEFAULT_SEARCH_DEBOUNCE_SECONDS
    )

    # Document retrieval configuration
    _config["default_pdf_url"] = os.getenv("DEFAULT_PDF_URL", DEFAULT_PDF_URL)
    _config["pdf_fetch_timeout"] = _parse_float(
        os.getenv("PDF_FETCH_TIMEOUT"), DEFAULT_FETCH_TIMEOUT
    )
    _config["max_pdf_size_bytes"] = _parse_positive_int(
        os.getenv("MAX_PDF_SIZE_MB"), MAX_PDF_SIZE_MB
    ) * 1024 * 1024

    # API configuration
    _config["api_port"] = int(os.getenv("API_PORT", "8000"))
    _config["api_host"] = os.getenv("API_HOST", "0.0.0.0")
    _config["debug"] = os.getenv("DEBUG", "false").lower() == "true"


def _parse_positive_int(value: Any, default: int) -> int:
    """Parse a positive integer, falling back to the default."""
    try:
        parsed = int(value)
    except (TypeError, ValueError):
        return default
    return parsed if parsed > 0 else default


def _parse_float(value: Any, default: float) -> float:
    """Parse a non-negative float, falling back to the default."""
    try:
        parsed = float(value)
    except (TypeError, ValueError):
        return default
    return parsed if parsed >= 0 else default


def get_config(key: str, default: Any = None) -> Any:
    """
    Get configuration value by key.

    Args:
        key: Configuration key
        default: Default value if key not found

    Returns:
        Configuration value
    """
    # Make sure config is loaded
    if not _config:
        _load_config_from_env()
    return _config.get(key, default)


def set_config(key: str, value: Any) -> None:
    """
    Set configuration value.

    Args:
        key: Configuration key
        value: Configuration value
    """
    _config[key] = value


# Initialize configuration
_load_config_from_env()
