"""
Error handling utilities that keep document text and URLs out of log output.

This module provides centralized error handling for the search engine and its
HTTP surface. Errors raised while decoding pages or fetching documents are logged
with a unique error ID and trace ID, messages are sanitized before they reach the
logs, and HTTP handlers receive a JSON-safe error payload instead of raw exception text.
"""

import json
import os
import re
import time
import traceback
import uuid
from typing import Dict, Any, Optional

from pdfsearch.app.utils.constant.constant import (
    ERROR_TYPE_MESSAGES,
    SAFE_MESSAGE,
    ERROR_LOG_PATH,
    SERVICE_NAME,
    USE_JSON_LOGGING,
    SENSITIVE_KEYWORDS,
    URL_PATTERNS,
    EMAIL_PATTERN,
)
from pdfsearch.app.utils.logging.logger import log_warning, log_error


class SecurityAwareErrorHandler:
    """
    Error handler that logs failures without leaking document content or endpoints.

    Page decode failures during a background scan go through log_processing_error and
    are otherwise swallowed by the caller; HTTP routes use handle_safe_error to build
    the body of their error response.
    """

    @staticmethod
    def _new_trace_id() -> str:
        return f"trace_{int(time.time())}_{uuid.uuid4().hex[:8]}"

    @staticmethod
    def log_processing_error(
            e: Exception,
            operation_type: str,
            resource_id: str = "",
            trace_id: Optional[str] = None
    ) -> str:
        """
        Log an error safely without leaking sensitive information and return a trace ID.

        Args:
            e (Exception): The exception to log.
            operation_type (str): The type of operation during which the error occurred.
            resource_id (str): Identifier of the affected resource, e.g. "page_4".
            trace_id (Optional[str]): Optional trace identifier.

        Returns:
            str: The trace identifier associated with the logged error.
        """
        # Generate a unique error identifier.
        error_id = str(uuid.uuid4())
        if not trace_id:
            trace_id = SecurityAwareErrorHandler._new_trace_id()
        sanitized_message = SecurityAwareErrorHandler._sanitize_error_message(str(e))
        # Log a concise error message with resource details.
        log_error(f"[ERROR] {operation_type} error on {resource_id} (ID: {error_id}, Trace: {trace_id}): "
                  f"{sanitized_message}")
        SecurityAwareErrorHandler._log_detailed_error(
            error_id, type(e).__name__, str(e), operation_type, traceback.format_exc(),
            {"resource_id": resource_id, "trace_id": trace_id}
        )
        return trace_id

    @staticmethod
    def handle_safe_error(
            e: Exception,
            operation_type: str,
            endpoint: Optional[str] = None,
            additional_info: Optional[Dict[str, Any]] = None,
            trace_id: Optional[str] = None
    ) -> Dict[str, Any]:
        """
        Build a sanitized error payload for an HTTP response.

        Args:
            e (Exception): The exception to handle.
            operation_type (str): Type of operation.
            endpoint (Optional[str]): Relevant API endpoint if applicable.
            additional_info (Optional[Dict[str, Any]]): Extra context merged into the payload.
            trace_id (Optional[str]): Optional trace identifier.

        Returns:
            Dict[str, Any]: The error payload.
        """
        if not trace_id:
            trace_id = SecurityAwareErrorHandler._new_trace_id()
        error_id = str(uuid.uuid4())
        error_type = type(e).__name__
        log_error(f"[ERROR] {operation_type} error on {endpoint or 'unknown endpoint'} (Trace: {trace_id}): "
                  f"{SecurityAwareErrorHandler._sanitize_error_message(str(e))}")
        SecurityAwareErrorHandler._log_detailed_error(
            error_id, error_type, str(e), operation_type, traceback.format_exc(),
            {"endpoint": endpoint, "trace_id": trace_id}
        )
        safe_message = ERROR_TYPE_MESSAGES.get(error_type, ERROR_TYPE_MESSAGES["Exception"])
        if SecurityAwareErrorHandler.is_error_sensitive(e):
            safe_message = SAFE_MESSAGE
        response = {
            "status": "error",
            "error": f"{safe_message}. Reference ID: {error_id}",
            "error_type": error_type,
            "error_id": error_id,
            "trace_id": trace_id,
            "timestamp": time.time()
        }
        if additional_info:
            response.update({k: v for k, v in additional_info.items() if k not in response})
        return response

    @staticmethod
    def _log_detailed_error(
            error_id: str,
            error_type: str,
            error_message: str,
            operation_type: str,
            stack_trace: str,
            additional_info: Optional[Dict[str, Any]] = None
    ) -> None:
        """
        Append a detailed error record to the error log file.

        Args:
            error_id (str): Unique error identifier.
            error_type (str): Type of error.
            error_message (str): The raw error message.
            operation_type (str): The operation type during which the error occurred.
            stack_trace (str): The complete stack trace.
            additional_info (Optional[Dict[str, Any]]): Extra contextual information.
        """
        try:
            os.makedirs(os.path.dirname(ERROR_LOG_PATH), exist_ok=True)
            error_record = {
                "error_id": error_id,
                "timestamp": time.time(),
                "error_type": error_type,
                "operation_type": operation_type,
                "sanitized_message": SecurityAwareErrorHandler._sanitize_error_message(error_message),
                "stack_trace": stack_trace,
                "environment": os.environ.get("ENVIRONMENT", "development"),
                "service": SERVICE_NAME,
                "additional_info": {
                    k: SecurityAwareErrorHandler._sanitize_error_message(str(v))
                    for k, v in (additional_info or {}).items() if v is not None
                },
            }
            with open(ERROR_LOG_PATH, "a", encoding="utf-8") as f:
                if USE_JSON_LOGGING:
                    f.write(json.dumps(error_record) + "\n")
                else:
                    f.write(f"\n--- ERROR: {error_id} at {time.ctime(error_record['timestamp'])} ---\n")
                    f.write(f"Type: {error_type}\n")
                    f.write(f"Operation: {operation_type}\n")
                    f.write(f"Sanitized: {error_record['sanitized_message']}\n")
                    f.write("Stack Trace:\n")
                    f.write(stack_trace)
                    f.write("\n----------------------------------------\n")
        except OSError as log_error_ex:
            log_warning(f"Failed to log detailed error information: {str(log_error_ex)}")

    @staticmethod
    def _sanitize_error_message(message: str) -> str:
        """
        Sanitize an error message to remove sensitive information.

        Args:
            message (str): The error message to sanitize.

        Returns:
            str: The sanitized error message.
        """
        if not message:
            return "Error details not available"
        message_lower = message.lower()
        for keyword in SENSITIVE_KEYWORDS:
            if keyword in message_lower:
                return "Error details redacted for security"
        # URLs first, so the path pattern does not eat their tails.
        for pattern in URL_PATTERNS:
            message = re.sub(pattern, '[URL_REDACTED]', message)

        def path_replacer(match):
            return f"[PATH]/{os.path.basename(match.group(0))}"

        message = re.sub(r'(?:\/[\w\-. ]+)+\/[\w\-. ]+', path_replacer, message)
        message = re.sub(r'(auth|token|bearer|jwt|api[-_]?key)[^\s]*', '[AUTH_TOKEN]', message,
                         flags=re.IGNORECASE)
        message = re.sub(EMAIL_PATTERN, '[EMAIL]', message)
        message = re.sub(r'\b(?:\d{1,3}\.){3}\d{1,3}\b', '[IP_ADDRESS]', message)
        return message

    @staticmethod
    def is_error_sensitive(e: Exception) -> bool:
        """
        Decide whether an exception message must be hidden entirely.

        Args:
            e (Exception): The exception to inspect.

        Returns:
            bool: True if the message mentions a sensitive keyword.
        """
        message_lower = str(e).lower()
        return any(keyword in message_lower for keyword in SENSITIVE_KEYWORDS)
