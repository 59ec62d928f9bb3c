"""Unit tests for ProcessTimeMiddleware."""

import time
import unittest
from unittest.mock import patch

from django.http import HttpRequest, HttpResponse, StreamingHttpResponse

from social.constants import PROCESS_TIME_HEADER
from social.middleware import ProcessTimeMiddleware


class TestProcessTimeMiddleware(unittest.TestCase):
    """Test cases for ProcessTimeMiddleware."""

    def _request(self):
        request = HttpRequest()
        request.method = "GET"
        request.path = "/api/v1/social/notifications"
        return request

    def test_adds_numeric_process_time(self):
        middleware = ProcessTimeMiddleware(lambda request: HttpResponse("OK"))

        response = middleware(self._request())

        self.assertGreaterEqual(float(response[PROCESS_TIME_HEADER]), 0)
        self.assertIn(".", response[PROCESS_TIME_HEADER])

    def test_measures_duration(self):
        def slow(request):
            time.sleep(0.05)
            return HttpResponse("OK")

        response = ProcessTimeMiddleware(slow)(self._request())

        self.assertGreaterEqual(float(response[PROCESS_TIME_HEADER]), 0.05)

    def test_streaming_responses_are_left_alone(self):
        middleware = ProcessTimeMiddleware(
            lambda request: StreamingHttpResponse(iter([b"data: {}\n\n"]))
        )

        response = middleware(self._request())

        self.assertNotIn(PROCESS_TIME_HEADER, response)

    @patch("social.middleware.process_time.SLOW_REQUEST_THRESHOLD", 0.0)
    @patch("social.middleware.process_time.logger")
    def test_slow_request_is_logged(self, mock_logger):
        ProcessTimeMiddleware(lambda request: HttpResponse("OK"))(self._request())

        mock_logger.warning.assert_called_once()
        self.assertEqual(mock_logger.warning.call_args[0][0], "Slow request detected")
