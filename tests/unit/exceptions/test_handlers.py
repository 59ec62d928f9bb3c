"""Unit tests for the DRF exception handler."""

import unittest
from unittest.mock import Mock, patch

from django.core.exceptions import PermissionDenied
from django.http import Http404

from rest_framework import status
from rest_framework.exceptions import NotAuthenticated, ValidationError
from rest_framework.views import APIView

from social.exceptions import (
    ConflictError,
    ForbiddenError,
    InvalidOperationError,
    NotFoundError,
    custom_exception_handler,
)


class TestCustomExceptionHandler(unittest.TestCase):
    """Test cases for custom_exception_handler."""

    def setUp(self):
        """Set up test fixtures."""
        self.mock_request = Mock()
        self.mock_request.path = "/api/v1/social/follow/abc"
        self.mock_request.method = "POST"

        self.mock_view = Mock(spec=APIView)
        self.mock_view.request = self.mock_request

        self.context = {"view": self.mock_view, "request": self.mock_request}

        patcher = patch("social.exceptions.handlers.get_request_id")
        self.mock_get_request_id = patcher.start()
        self.mock_get_request_id.return_value = "test-request-id"
        self.addCleanup(patcher.stop)

    def test_conflict_carries_its_code(self):
        exc = ConflictError(
            "Follow request already pending", code=ConflictError.REQUEST_PENDING
        )

        response = custom_exception_handler(exc, self.context)

        self.assertEqual(response.status_code, status.HTTP_409_CONFLICT)
        self.assertEqual(response.data["error"], "request_pending")
        self.assertEqual(response.data["message"], "Follow request already pending")
        self.assertEqual(response.data["request_id"], "test-request-id")
        self.assertIn("timestamp", response.data)

    def test_domain_error_status_codes(self):
        cases = [
            (InvalidOperationError("You cannot follow yourself"), 400, "invalid_operation"),
            (NotFoundError("Notification not found", detail="n1"), 404, "not_found"),
            (ForbiddenError("Not yours"), 403, "forbidden"),
        ]
        for exc, expected_status, expected_code in cases:
            with self.subTest(error=expected_code):
                response = custom_exception_handler(exc, self.context)

                self.assertEqual(response.status_code, expected_status)
                self.assertEqual(response.data["error"], expected_code)

    def test_not_found_detail_is_returned(self):
        response = custom_exception_handler(
            NotFoundError("Notification not found", detail="n1"), self.context
        )

        self.assertEqual(response.data["detail"], "n1")

    def test_drf_exceptions_keep_drf_handling(self):
        response = custom_exception_handler(ValidationError("Invalid data"), self.context)
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)

        response = custom_exception_handler(NotAuthenticated(), self.context)
        self.assertEqual(response.status_code, status.HTTP_401_UNAUTHORIZED)

    def test_handles_django_http404(self):
        response = custom_exception_handler(Http404("Page not found"), self.context)

        self.assertEqual(response.status_code, status.HTTP_404_NOT_FOUND)

    def test_handles_django_permission_denied(self):
        response = custom_exception_handler(PermissionDenied("Denied"), self.context)

        self.assertEqual(response.status_code, status.HTTP_403_FORBIDDEN)

    def test_unexpected_exception_hides_details(self):
        response = custom_exception_handler(RuntimeError("db password leaked"), self.context)

        self.assertEqual(response.status_code, status.HTTP_500_INTERNAL_SERVER_ERROR)
        self.assertEqual(response.data["error"], "internal_error")
        self.assertNotIn("password", response.data["message"])

    @patch("social.exceptions.handlers.logger")
    def test_client_errors_log_as_warning(self, mock_logger):
        custom_exception_handler(NotFoundError("Gone"), self.context)

        level = mock_logger.log.call_args[0][0]
        self.assertEqual(level, 30)

    @patch("social.exceptions.handlers.logger")
    def test_unexpected_errors_log_as_error(self, mock_logger):
        custom_exception_handler(RuntimeError("boom"), self.context)

        level = mock_logger.log.call_args[0][0]
        self.assertEqual(level, 40)

    def test_adds_request_id_to_response_header(self):
        response = custom_exception_handler(Http404("Not found"), self.context)

        self.assertEqual(response["X-Request-ID"], "test-request-id")

    def test_no_request_id_header_outside_a_request(self):
        self.mock_get_request_id.return_value = None

        response = custom_exception_handler(NotFoundError("Gone"), self.context)

        self.assertNotIn("X-Request-ID", response)
