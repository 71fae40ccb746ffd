import json
import unittest
from unittest.mock import patch, mock_open

from pdfsearch.app.domain.interfaces import DecodeError
from pdfsearch.app.utils.system_utils.error_handling import SecurityAwareErrorHandler

MODULE = "pdfsearch.app.utils.system_utils.error_handling"


class TestSanitizeErrorMessage(unittest.TestCase):
    """Unit tests for SecurityAwareErrorHandler._sanitize_error_message."""

    # Empty messages get a placeholder
    def test_empty_message(self):
        self.assertEqual(SecurityAwareErrorHandler._sanitize_error_message(""), "Error details not available")

    # Sensitive keywords redact the whole message
    def test_sensitive_keyword(self):
        result = SecurityAwareErrorHandler._sanitize_error_message("wrong password for user")

        self.assertEqual(result, "Error details redacted for security")

    # URLs are replaced
    def test_url_redacted(self):
        result = SecurityAwareErrorHandler._sanitize_error_message("cannot reach https://example.com/a.pdf")

        self.assertEqual(result, "cannot reach [URL_REDACTED]")

    # Paths keep only their base name
    def test_path_redacted(self):
        result = SecurityAwareErrorHandler._sanitize_error_message("open /home/user/docs/report.pdf")

        self.assertEqual(result, "open [PATH]/report.pdf")

    # Emails and IP addresses are replaced
    def test_email_and_ip_redacted(self):
        result = SecurityAwareErrorHandler._sanitize_error_message("owner a.b@example.com at 10.0.0.1")

        self.assertEqual(result, "owner [EMAIL] at [IP_ADDRESS]")

    # Sensitivity check looks at the exception text
    def test_is_error_sensitive(self):
        self.assertTrue(SecurityAwareErrorHandler.is_error_sensitive(Exception("Secret leaked")))

        self.assertFalse(SecurityAwareErrorHandler.is_error_sensitive(Exception("page 3 failed")))


class TestSecurityAwareErrorHandler(unittest.TestCase):
    """Unit tests for logging and payload building."""

    def setUp(self):
        self.log_error_patcher = patch(f"{MODULE}.log_error")

        self.mock_log_error = self.log_error_patcher.start()

        self.log_warning_patcher = patch(f"{MODULE}.log_warning")

        self.mock_log_warning = self.log_warning_patcher.start()

        self.makedirs_patcher = patch("os.makedirs")

        self.mock_makedirs = self.makedirs_patcher.start()

    def tearDown(self):
        patch.stopall()

    # Processing errors are logged with their resource and return a trace id
    @patch(f"{MODULE}.SecurityAwareErrorHandler._log_detailed_error")
    def test_log_processing_error(self, mock_detailed):
        trace_id = SecurityAwareErrorHandler.log_processing_error(
            DecodeError(4, "bad xref"), "background_page_decode", "page_4"
        )

        self.assertTrue(trace_id.startswith("trace_"))

        logged = self.mock_log_error.call_args[0][0]

        self.assertIn("background_page_decode", logged)

        self.assertIn("page_4", logged)

        self.assertIn("bad xref", logged)

        self.assertEqual(mock_detailed.call_args[0][1], "DecodeError")

    # A given trace id is reused
    @patch(f"{MODULE}.SecurityAwareErrorHandler._log_detailed_error")
    def test_log_processing_error_keeps_trace_id(self, mock_detailed):
        trace_id = SecurityAwareErrorHandler.log_processing_error(ValueError("x"), "scan", trace_id="trace_given")

        self.assertEqual(trace_id, "trace_given")

    # Safe payloads carry a type-specific message and identifiers
    @patch(f"{MODULE}.SecurityAwareErrorHandler._log_detailed_error")
    def test_handle_safe_error(self, mock_detailed):
        payload = SecurityAwareErrorHandler.handle_safe_error(
            ValueError("bad input"), "api_pdf_proxy", endpoint="/api/pdf-proxy",
            additional_info={"status": "ignored", "hint": "retry"}
        )

        self.assertEqual(payload["status"], "error")

        self.assertEqual(payload["error_type"], "ValueError")

        self.assertTrue(payload["error"].startswith("Invalid value provided. Reference ID: "))

        self.assertIn(payload["error_id"], payload["error"])

        self.assertEqual(payload["hint"], "retry")

        self.assertIn("trace_id", payload)

        self.assertIn("timestamp", payload)

    # Sensitive errors use the generic safe message
    @patch(f"{MODULE}.SecurityAwareErrorHandler._log_detailed_error")
    def test_handle_safe_error_sensitive(self, mock_detailed):
        payload = SecurityAwareErrorHandler.handle_safe_error(Exception("private key mismatch"), "api")

        self.assertTrue(payload["error"].startswith("Error details have been redacted for security."))

    # Detailed records are appended as JSON lines
    @patch(f"{MODULE}.USE_JSON_LOGGING", True)
    def test_log_detailed_error_json(self):
        m = mock_open()

        with patch("builtins.open", m):
            SecurityAwareErrorHandler._log_detailed_error(
                "id-1", "DecodeError", "page 2 failed", "scan", "trace text", {"resource_id": "page_2", "x": None}
            )

        record = json.loads(m().write.call_args[0][0])

        self.assertEqual(record["error_id"], "id-1")

        self.assertEqual(record["operation_type"], "scan")

        self.assertEqual(record["additional_info"], {"resource_id": "page_2"})

    # Failures writing the error log only produce a warning
    def test_log_detailed_error_os_error(self):
        with patch("builtins.open", side_effect=OSError("disk full")):
            SecurityAwareErrorHandler._log_detailed_error("id-2", "ValueError", "msg", "scan", "")

        self.mock_log_warning.assert_called_once()
