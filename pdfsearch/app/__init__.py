"""
Document search application package.

This package contains the incremental page-text indexing and phrase search
engine used by the PDF viewer, together with its HTTP surface.
"""

from pdfsearch.app.utils.logging.logger import default_logger

# Initialize logging
logger = default_logger

# Set version
__version__ = "1.0.0"
