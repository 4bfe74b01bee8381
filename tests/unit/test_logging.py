"""Unit tests for diagnostic logging."""

import io
import json

from xcexport.core.config import Config
from xcexport.core.logging import bind_context, clear_context, get_logger, setup_logging


class TestSetupLogging:
    """Tests for structlog configuration."""

    def test_json_events_with_bound_step(self):
        """Test that redirected output is JSON and carries bound context."""
        stream = io.StringIO()
        setup_logging(Config(log_level="DEBUG"), stream=stream)

        bind_context(step="ARCHIVE")
        try:
            get_logger("test").debug("Discovered archives", total=2)
        finally:
            clear_context()

        event = json.loads(stream.getvalue().strip().splitlines()[-1])
        assert event["event"] == "Discovered archives"
        assert event["step"] == "ARCHIVE"
        assert event["total"] == 2
        assert event["level"] == "debug"

    def test_default_level_filters_debug(self):
        """Test that debug events are dropped by default."""
        stream = io.StringIO()
        setup_logging(Config(), stream=stream)

        get_logger("test").debug("hidden")
        get_logger("test").warning("shown")

        output = stream.getvalue()
        assert "hidden" not in output
        assert "shown" in output
