"""
Utilities package for document search.

This package contains utility functions and helpers used across the
document search system.
"""

from pdfsearch.app.utils.logging.logger import default_logger

# Export the default logger
__all__ = ["default_logger"]
