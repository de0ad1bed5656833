"""Tests for Cairn structured logging."""

import pytest
import structlog

from cairn.logging import (
    bind_context,
    configure_logging,
    get_logger,
    propagation_context,
    unbind_context,
)


class TestConfigureLogging:
    """Tests for logging configuration."""

    def test_configure_with_defaults(self):
        """Should configure from settings when no arguments are given."""
        configure_logging()
        logger = get_logger("test")
        logger.info("test message")

    def test_configure_with_debug_level(self):
        """Should accept DEBUG level."""
        configure_logging(level="DEBUG")
        logger = get_logger("test")
        logger.debug("debug message")

    def test_configure_with_text_format(self):
        """Should accept text format for development."""
        configure_logging(level="INFO", format="text")
        logger = get_logger("test")
        logger.info("text format message")

    def test_configure_with_json_format(self):
        """Should accept json format for production."""
        configure_logging(level="INFO", format="json")
        logger = get_logger("test")
        logger.info("json format message")

    def test_configure_multiple_times(self):
        """Should handle multiple configuration calls."""
        configure_logging(level="INFO")
        configure_logging(level="DEBUG")
        logger = get_logger("test")
        logger.info("after reconfigure")


class TestGetLogger:
    """Tests for logger creation."""

    def test_get_logger_with_name(self):
        """Should create logger with specified name."""
        assert get_logger("cairn.graph") is not None

    def test_get_logger_without_name(self):
        """Should create logger without name."""
        assert get_logger() is not None

    def test_loggers_are_callable(self):
        """Should return callable logger instances."""
        logger = get_logger("test")
        assert callable(getattr(logger, "info", None))
        assert callable(getattr(logger, "warning", None))
        assert callable(getattr(logger, "debug", None))


class TestContextBinding:
    """Tests for context variable binding."""

    def setup_method(self):
        """Clear context before each test."""
        structlog.contextvars.clear_contextvars()

    def teardown_method(self):
        """Clear context after each test."""
        structlog.contextvars.clear_contextvars()

    def test_bind_context(self):
        """Bound values appear in the context."""
        bind_context(puzzle="four_row", rows=4)
        context = structlog.contextvars.get_contextvars()
        assert context == {"puzzle": "four_row", "rows": 4}

    def test_unbind_context(self):
        """Unbinding removes only the named keys."""
        bind_context(puzzle="four_row", rows=4)
        unbind_context("rows")
        assert structlog.contextvars.get_contextvars() == {"puzzle": "four_row"}

    def test_propagation_context_binds_inside_block(self):
        """Values are bound inside the block and removed on exit."""
        with propagation_context(rows=4, slots=10):
            assert structlog.contextvars.get_contextvars() == {"rows": 4, "slots": 10}
        assert structlog.contextvars.get_contextvars() == {}

    def test_propagation_context_keeps_outer_keys(self):
        """Only the block's own keys are removed."""
        bind_context(puzzle="four_row")
        with propagation_context(rows=4):
            pass
        assert structlog.contextvars.get_contextvars() == {"puzzle": "four_row"}

    def test_propagation_context_unbinds_on_error(self):
        """Keys are removed even when the block raises."""
        with pytest.raises(RuntimeError):
            with propagation_context(rows=4):
                raise RuntimeError("boom")
        assert structlog.contextvars.get_contextvars() == {}
