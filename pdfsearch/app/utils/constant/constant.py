"""
Constants for the document search application.

This module defines configuration constants organized into several categories:
1. Environment and network settings (allowed origins, proxy headers).
2. Background scan and debounce defaults.
3. Document retrieval limits.
4. Log and error handling constants, including patterns for detecting sensitive data
   and error messages.
"""

import os

# Allowed origins for CORS, read from the environment or default values.
ALLOWED_ORIGINS = os.environ.get(
    "ALLOWED_ORIGINS",
    "http://localhost:3000,http://localhost:8000,http://localhost:5173",
).split(",")

# Number of pages decoded concurrently in one background scan batch.
DEFAULT_SCAN_BATCH_SIZE = 5
# Inactivity window before a live edit starts a new background scan.
DEFAULT_SEARCH_DEBOUNCE_SECONDS = 0.3
# Separator inserted between consecutive fragments of a page.
FRAGMENT_SEPARATOR = " "

# Document loaded when no URL is supplied.
DEFAULT_PDF_URL = "https://pdfobject.com/pdf/sample.pdf"
# Timeout for downloading a document.
DEFAULT_FETCH_TIMEOUT = 30.0  # 30 seconds
# Maximum size of a downloaded document (25 MB).
MAX_PDF_SIZE_MB = 25
# File read chunk size.
CHUNK_SIZE = 64 * 1024  # 64KB
# User agent sent when fetching remote documents.
FETCH_USER_AGENT = "Mozilla/5.0"
# MIME type for PDF files.
APPLICATION_PDF = "application/pdf"
# Media type for JSON responses.
JSON_MEDIA_TYPE = "application/json"
# Cache lifetime for proxied documents in seconds.
PROXY_CACHE_TTL = 3600

# Log locations.
LOG_DIR = os.environ.get("LOG_DIR", "app/logs/app_log")
ERROR_LOG_PATH = os.environ.get(
    "ERROR_LOG_PATH", "app/logs/error_logs/detailed_errors.log"
)
# Flag to indicate whether to use JSON logging for errors.
USE_JSON_LOGGING = os.environ.get("ERROR_JSON_LOGGING", "true").lower() == "true"
# Service name attached to detailed error records.
SERVICE_NAME = os.environ.get("SERVICE_NAME", "document_search")

# Text strings for log messages.
ERROR_WORD = "[ERROR]"
WARNING_WORD = "[WARNING]"

# Standard safe message to display when error details are redacted.
SAFE_MESSAGE = "Error details have been redacted for security."
# Regex pattern for detecting email addresses.
EMAIL_PATTERN = r"\b[A-Za-z0-9._%+-]+@[A-Za-z0-9.-]+\.[A-Z|a-z]{2,}\b"
# List of keywords considered sensitive.
SENSITIVE_KEYWORDS = [
    "password",
    "secret",
    "credential",
    "private",
]
# URL patterns redacted from error messages.
URL_PATTERNS = [
    r"https?://[^\s/$.?#].[^\s]*",  # Standard URLs.
    r"file://[^\s]*",  # Local file URLs.
]
# Mapping of exception types to user-facing messages.
ERROR_TYPE_MESSAGES = {
    "ValueError": "Invalid value provided",
    "TypeError": "Incorrect data type",
    "KeyError": "Required key not found",
    "TimeoutError": "Operation timed out",
    "DecodeError": "Document page could not be decoded",
    "DocumentFetchError": "Document could not be retrieved",
    "Exception": "An unexpected error occurred",
}
