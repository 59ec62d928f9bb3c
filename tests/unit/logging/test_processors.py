"""Tests for the structlog processors."""

from unittest.mock import patch

from colorama import Fore

from social.logging.context import clear_request_id, set_request_id
from social.logging.processors import (
    add_process_info,
    add_request_context,
    add_service_context,
    console_renderer,
)


class TestProcessors:
    """Test suite for the custom processors."""

    def teardown_method(self):
        clear_request_id()

    def test_request_id_is_added_inside_a_request(self):
        set_request_id("req-123")

        event = add_request_context(None, "info", {"event": "follow_created"})

        assert event["request_id"] == "req-123"

    def test_no_request_id_outside_a_request(self):
        event = add_request_context(None, "info", {"event": "presence_registry_closed"})

        assert "request_id" not in event

    def test_service_context_from_environment(self):
        with patch.dict("os.environ", {"SERVICE_NAME": "social", "ENVIRONMENT": "prod"}):
            event = add_service_context(None, "info", {})

        assert event == {"service_name": "social", "environment": "prod"}

    def test_process_info(self):
        event = add_process_info(None, "info", {})

        assert isinstance(event["process_id"], int)
        assert isinstance(event["thread_id"], int)


class TestConsoleRenderer:
    """Test suite for console_renderer."""

    def test_renders_level_message_and_context(self):
        line = console_renderer(
            None,
            "warning",
            {
                "level": "warning",
                "event": "realtime_delivery_failed",
                "request_id": "req-1",
                "logger": "social.realtime.dispatcher",
                "user_id": "u1",
                "process_id": 42,
            },
        )

        assert Fore.YELLOW in line
        assert "[WARNING ]" in line
        assert "realtime_delivery_failed" in line
        assert "social.realtime.dispatcher" in line
        assert "user_id=u1" in line
        assert "process_id" not in line

    def test_defaults_without_request(self):
        line = console_renderer(None, "info", {"event": "presence_registry_initialized"})

        assert "no-request-id" in line
        assert "[INFO    ]" in line
