"""Tests for logging functionality.

These tests verify:
1. The shared logger is properly initialized
2. Keyword context is rendered
3. Levels filter output
"""

import io
import logging

import pytest

from comptest.logger import ConsoleLogger, Logger, session_logger
from comptest.logger.console_logger import format_context


class TestSessionLogger:
    def test_logger_exists(self):
        assert session_logger is not None
        assert isinstance(session_logger, Logger)

    @pytest.mark.parametrize("method", ["debug", "info", "warning", "error", "critical"])
    def test_logger_has_level_methods(self, method):
        assert callable(getattr(session_logger, method))

    def test_logger_accepts_keyword_args(self):
        # This should not raise an exception
        session_logger.info("Test message", key="value", number=42)


class TestFormatContext:
    def test_plain_message(self):
        assert format_context("sim.batch_start", {}) == "sim.batch_start"

    def test_repeated_event_is_dropped(self):
        rendered = format_context("sim.batch_start", {"event": "sim.batch_start", "components": 4})
        assert rendered == "sim.batch_start components=4"

    def test_values_with_spaces_are_quoted(self):
        rendered = format_context("sim.run_failed", {"error": "batch contains no components"})
        assert rendered == "sim.run_failed error='batch contains no components'"


class TestConsoleLogger:
    def test_writes_to_given_stream(self, request):
        stream = io.StringIO()
        logger = ConsoleLogger(f"batchsim.test.{request.node.nodeid}", level=logging.INFO, stream=stream)

        logger.info("sim.batch_end", event="sim.batch_end", total=4, passed=4)

        output = stream.getvalue()
        assert "INFO" in output
        assert "sim.batch_end total=4 passed=4" in output

    def test_level_filters_output(self, request):
        stream = io.StringIO()
        logger = ConsoleLogger(f"batchsim.test.{request.node.nodeid}", level=logging.WARNING, stream=stream)

        logger.debug("hidden")
        logger.info("hidden")
        logger.warning("shown")

        assert "hidden" not in stream.getvalue()
        assert "shown" in stream.getvalue()

    def test_set_level(self, request):
        logger = ConsoleLogger(f"batchsim.test.{request.node.nodeid}", level=logging.INFO, stream=io.StringIO())
        logger.set_level(logging.ERROR)
        assert logger.level == logging.ERROR

    def test_same_name_does_not_duplicate_handlers(self, request):
        name = f"batchsim.test.{request.node.nodeid}"
        stream = io.StringIO()
        ConsoleLogger(name, stream=stream)
        logger = ConsoleLogger(name, stream=stream)

        logger.info("once")

        assert stream.getvalue().count("once") == 1
