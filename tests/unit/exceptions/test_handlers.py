"""Unit tests for exception handlers."""

import unittest
from unittest.mock import Mock, patch

from django.http import Http404

from rest_framework import status
from rest_framework.exceptions import NotFound, ValidationError
from rest_framework.views import APIView

from outbox.exceptions import (
    ConflictError,
    MessageNotFoundError,
    MessageValidationError,
)
from outbox.exceptions.handlers import custom_exception_handler


class TestCustomExceptionHandler(unittest.TestCase):
    """Test cases for custom exception handler."""

    def setUp(self):
        """Set up test fixtures."""
        self.mock_request = Mock()
        self.mock_request.path = "/api/v1/outbox/queue/"
        self.mock_request.method = "GET"
        self.mock_request.META = {"REMOTE_ADDR": "127.0.0.1"}

        self.mock_view = Mock(spec=APIView)
        self.mock_view.request = self.mock_request

        self.context = {"view": self.mock_view, "request": self.mock_request}

    @patch("outbox.exceptions.handlers.get_correlation_id")
    def test_handles_drf_not_found_exception(self, mock_get_correlation_id):
        """Test that DRF NotFound exception is handled correctly."""
        mock_get_correlation_id.return_value = "test-request-id"

        response = custom_exception_handler(NotFound("Resource not found"), self.context)

        self.assertEqual(response.status_code, status.HTTP_404_NOT_FOUND)
        self.assertEqual(response["X-Request-ID"], "test-request-id")

    @patch("outbox.exceptions.handlers.get_correlation_id")
    def test_handles_drf_validation_error(self, mock_get_correlation_id):
        """Test that DRF ValidationError is handled correctly."""
        mock_get_correlation_id.return_value = "test-request-id"

        response = custom_exception_handler(ValidationError("Invalid"), self.context)

        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)

    @patch("outbox.exceptions.handlers.get_correlation_id")
    def test_message_not_found_maps_to_404(self, mock_get_correlation_id):
        """Test that an unknown message ID is a 404."""
        mock_get_correlation_id.return_value = "test-request-id"

        response = custom_exception_handler(
            MessageNotFoundError("msg_1_abc"), self.context
        )

        self.assertEqual(response.status_code, status.HTTP_404_NOT_FOUND)
        self.assertEqual(response.data["status"], 404)
        self.assertIn("msg_1_abc", response.data["message"])
        self.assertEqual(response.data["request_id"], "test-request-id")

    @patch("outbox.exceptions.handlers.get_correlation_id")
    def test_message_validation_error_maps_to_400(self, mock_get_correlation_id):
        """Test that enqueue validation errors carry the field name."""
        mock_get_correlation_id.return_value = "test-request-id"

        response = custom_exception_handler(
            MessageValidationError("recipient must not be empty", field="recipient"),
            self.context,
        )

        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertEqual(response.data["field"], "recipient")

    @patch("outbox.exceptions.handlers.get_correlation_id")
    def test_conflict_error_maps_to_409(self, mock_get_correlation_id):
        """Test that ConflictError returns 409 with detail."""
        mock_get_correlation_id.return_value = "test-request-id"

        response = custom_exception_handler(
            ConflictError("Cannot retry", detail="Only failed messages can be retried"),
            self.context,
        )

        self.assertEqual(response.status_code, status.HTTP_409_CONFLICT)
        self.assertEqual(response.data["error"], "conflict")
        self.assertEqual(response.data["detail"], "Only failed messages can be retried")

    @patch("outbox.exceptions.handlers.get_correlation_id")
    def test_handles_django_http404(self, mock_get_correlation_id):
        """Test that Django Http404 exception is handled correctly."""
        mock_get_correlation_id.return_value = "test-request-id"

        response = custom_exception_handler(Http404("Page not found"), self.context)

        self.assertEqual(response.status_code, status.HTTP_404_NOT_FOUND)
        self.assertIsInstance(response.data, dict)

    @patch("outbox.exceptions.handlers.get_correlation_id")
    def test_handles_unexpected_exception(self, mock_get_correlation_id):
        """Test that unexpected exceptions return 500 error."""
        mock_get_correlation_id.return_value = "test-request-id"

        response = custom_exception_handler(RuntimeError("boom"), self.context)

        self.assertEqual(response.status_code, status.HTTP_500_INTERNAL_SERVER_ERROR)
        self.assertEqual(response.data["status"], 500)
        self.assertIn("internal server error", response.data["message"].lower())

    @patch("outbox.exceptions.handlers.get_correlation_id")
    @patch("outbox.exceptions.handlers.logger")
    def test_logs_exception_details(self, mock_logger, mock_get_correlation_id):
        """Test that exception details are logged."""
        mock_get_correlation_id.return_value = "test-request-id"

        custom_exception_handler(RuntimeError("Test error"), self.context)

        self.assertTrue(mock_logger.log.called)

    @patch("outbox.exceptions.handlers.get_correlation_id")
    def test_no_header_without_request_id(self, mock_get_correlation_id):
        """Test that no header is set outside a request."""
        mock_get_correlation_id.return_value = None

        response = custom_exception_handler(Http404("Not found"), self.context)

        self.assertFalse(response.has_header("X-Request-ID"))


if __name__ == "__main__":
    unittest.main()
