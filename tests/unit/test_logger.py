"""Unit tests for logger utilities."""

import io
import logging
import re

import pytest

from briefbutler_connector.utils.logger import resolve_log_level, setup_logger


@pytest.fixture
def make_logger(request):
    """Build an isolated logger writing to a buffer."""

    def _make(level: str | None):
        stream = io.StringIO()
        name = f"briefbutler.tests.{request.node.name}.{level}"
        return setup_logger(name, level=level, stream=stream), stream

    return _make


def _emit_all(log: logging.Logger) -> None:
    log.debug("Debug message")
    log.info("Info message")
    log.warning("Warning message")
    log.error("Error message")


class TestLogLevels:
    """Test cases for level filtering."""

    def test_debug_logs_everything(self, make_logger):
        log, stream = make_logger("DEBUG")
        _emit_all(log)

        output = stream.getvalue()
        assert "Debug message" in output
        assert "Info message" in output
        assert "Warning message" in output
        assert "Error message" in output

    def test_warn_suppresses_debug_and_info(self, make_logger):
        """Given WARN, debug and info produce no output while warn and error do."""
        log, stream = make_logger("WARN")
        _emit_all(log)

        output = stream.getvalue()
        assert "Debug message" not in output
        assert "Info message" not in output
        assert "Warning message" in output
        assert "Error message" in output

    def test_error_only(self, make_logger):
        log, stream = make_logger("error")
        _emit_all(log)

        output = stream.getvalue()
        assert "Warning message" not in output
        assert "Error message" in output

    @pytest.mark.parametrize("level", ["INVALID_LEVEL", "", "basicConfig"])
    def test_unknown_level_behaves_as_info(self, make_logger, level):
        log, stream = make_logger(level)
        _emit_all(log)

        output = stream.getvalue()
        assert "Debug message" not in output
        assert "Info message" in output
        assert "Error message" in output

    @pytest.mark.parametrize(
        "name,expected",
        [
            ("DEBUG", logging.DEBUG),
            ("info", logging.INFO),
            ("WARN", logging.WARNING),
            ("Warning", logging.WARNING),
            ("ERROR", logging.ERROR),
            ("CRITICAL", logging.INFO),
            (None, logging.INFO),
        ],
    )
    def test_resolve_log_level(self, name, expected):
        assert resolve_log_level(name) == expected


class TestFormatting:
    """Test cases for line formatting."""

    def test_line_has_timestamp_and_level(self, make_logger):
        log, stream = make_logger("DEBUG")
        log.debug("Test message")

        line = stream.getvalue().strip()
        assert re.match(r"^\d{4}-\d{2}-\d{2} \d{2}:\d{2}:\d{2} - \S+ - DEBUG - Test message$", line)

    def test_object_argument_serialized_as_json(self, make_logger):
        log, stream = make_logger("DEBUG")
        log.error("Response data:", {"test": "value", "nested": {"prop": 123}})

        assert 'Response data: [{"test": "value", "nested": {"prop": 123}}]' in stream.getvalue()

    def test_dict_argument_with_placeholder(self, make_logger):
        log, stream = make_logger("DEBUG")
        log.error("Response data: %s", {"message": "bad"})

        output = stream.getvalue()
        assert "Response data: {'message': 'bad'}" in output
        assert "%s" not in output
        assert '[{"message": "bad"}]' not in output

    def test_dict_argument_with_named_placeholder(self, make_logger):
        log, stream = make_logger("DEBUG")
        log.error("Spool %(spool_id)s failed", {"spool_id": "sp-1"})

        assert "Spool sp-1 failed" in stream.getvalue()

    def test_dict_argument_with_escaped_percent(self, make_logger):
        log, stream = make_logger("DEBUG")
        log.error("100%% failed:", {"message": "bad"})

        assert '100%% failed: [{"message": "bad"}]' in stream.getvalue()

    def test_multiple_arguments(self, make_logger):
        log, stream = make_logger("DEBUG")
        log.info("Message 1", "Message 2", 123)

        assert 'Message 1 ["Message 2", 123]' in stream.getvalue()

    def test_percent_format_arguments_still_interpolated(self, make_logger):
        log, stream = make_logger("DEBUG")
        log.info("Spool %s is %s", "sp-1", "processing")

        output = stream.getvalue()
        assert "Spool sp-1 is processing" in output
        assert "[" not in output.split(" - ", 3)[-1]
