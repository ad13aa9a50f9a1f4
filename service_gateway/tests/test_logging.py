"""
Unit tests for the shared structlog configuration.
"""

import logging

import structlog

from shared.logging import add_request_context, clear_context, configure_logging, set_request_id


class TestLogging:
    """Test cases for the logging processors."""

    def teardown_method(self):
        clear_context()

    def test_request_context_added(self):
        request_id = set_request_id("req-1")

        event = add_request_context(None, "info", {"event": "hi", "logger": "gateway.handler"})

        assert request_id == "req-1"
        assert event["service"] == "gateway"
        assert event["request_id"] == "req-1"

    def test_no_context_outside_request(self):
        event = add_request_context(None, "info", {"event": "hi", "logger": "root"})

        assert "service" not in event
        assert "request_id" not in event

    def test_generated_request_id(self):
        assert set_request_id()

    def test_single_timestamp_per_event(self):
        configure_logging("gateway")
        processors = structlog.get_config()["processors"]
        event = {"event": "hello"}

        # Skip the level filter and the renderer
        for processor in processors[1:-1]:
            event = processor(logging.getLogger("gateway.test"), "info", event)

        assert [key for key in event if "time" in key] == ["timestamp"]
        assert event["service"] == "gateway"
