"""Unit tests for feature logging and observability.

This module tests the logging setup, the JSON formatter, operation
logging and observability hooks.
"""

import json
import logging
import sys
from pathlib import Path
from unittest.mock import MagicMock

import pytest

from speckfeature.feature_logging import (
    JsonFormatter,
    ObservabilityHooks,
    log_error_with_context,
    log_operation,
    setup_logging,
)


class TestSetupLogging:
    """Test cases for setup_logging."""

    def test_console_handler_only(self):
        """Test default setup installs a single console handler."""
        logger = setup_logging("WARNING")

        assert logger.name == "speckfeature"
        assert logger.level == logging.WARNING
        assert len(logger.handlers) == 1
        assert isinstance(logger.handlers[0], logging.StreamHandler)

    def test_repeated_setup_does_not_duplicate(self):
        """Test handlers are replaced, not accumulated."""
        setup_logging()
        logger = setup_logging()
        assert len(logger.handlers) == 1

    def test_file_handler_writes_json(self, tmp_path):
        """Test the log file receives JSON records."""
        log_file = tmp_path / "feature.log"
        logger = setup_logging("ERROR", log_file)

        logging.getLogger("speckfeature.test").debug("detail for the file")
        for handler in logger.handlers:
            handler.flush()

        lines = log_file.read_text(encoding="utf-8").strip().splitlines()
        messages = [json.loads(line)["message"] for line in lines]
        assert "detail for the file" in messages


class TestJsonFormatter:
    """Test cases for JsonFormatter."""

    def test_json_formatter_basic(self):
        """Test basic JSON formatting."""
        formatter = JsonFormatter()
        record = logging.getLogger("test").makeRecord("test", logging.INFO, __file__, 1, "Test message", (), None)

        data = json.loads(formatter.format(record))

        assert data["level"] == "INFO"
        assert data["logger"] == "test"
        assert data["message"] == "Test message"
        for key in ("timestamp", "module", "function", "line"):
            assert key in data

    def test_json_formatter_extra_fields(self):
        """Test extra fields are merged and paths serialized."""
        formatter = JsonFormatter()
        record = logging.getLogger("test").makeRecord("test", logging.INFO, __file__, 1, "msg", (), None)
        record.extra_fields = {"operation": "create_feature", "path": Path("/repo")}

        data = json.loads(formatter.format(record))

        assert data["operation"] == "create_feature"
        assert data["path"] == "/repo"

    def test_json_formatter_with_exception(self):
        """Test exception info is included."""
        formatter = JsonFormatter()
        try:
            raise ValueError("boom")
        except ValueError:
            record = logging.getLogger("test").makeRecord(
                "test", logging.ERROR, __file__, 1, "failed", (), sys.exc_info()
            )

        data = json.loads(formatter.format(record))
        assert "ValueError: boom" in data["exception"]


class TestLogOperation:
    """Test cases for log_operation."""

    def test_success(self, caplog):
        """Test start and completion are logged."""
        with caplog.at_level(logging.DEBUG, logger="speckfeature.operations"):
            with log_operation("seed", feature="x"):
                pass

        messages = [r.getMessage() for r in caplog.records]
        assert "Starting operation: seed" in messages
        assert any(m.startswith("Completed operation: seed") for m in messages)

    def test_failure_is_logged_and_raised(self, caplog):
        """Test failures are logged at ERROR and re-raised."""
        with caplog.at_level(logging.DEBUG, logger="speckfeature.operations"):
            with pytest.raises(RuntimeError):
                with log_operation("seed"):
                    raise RuntimeError("disk full")

        errors = [r for r in caplog.records if r.levelno == logging.ERROR]
        assert errors
        assert errors[0].extra_fields["error_type"] == "RuntimeError"


class TestObservabilityHooks:
    """Test cases for ObservabilityHooks."""

    def test_hooks_receive_event_data(self):
        """Test registered callbacks receive event data without event_type."""
        hooks = ObservabilityHooks()
        callback = MagicMock()
        hooks.register_hook("feature_created", callback)

        hooks.log_workflow_event("feature_created", feature_id="user-auth", action="create")

        callback.assert_called_once()
        kwargs = callback.call_args.kwargs
        assert kwargs["feature_id"] == "user-auth"
        assert kwargs["action"] == "create"
        assert "event_type" not in kwargs

    def test_failing_hook_is_logged(self, caplog):
        """Test a failing hook does not interrupt others."""
        hooks = ObservabilityHooks()
        good = MagicMock()
        hooks.register_hook("spec_seeded", MagicMock(side_effect=RuntimeError("bad hook")))
        hooks.register_hook("spec_seeded", good)

        with caplog.at_level(logging.ERROR, logger="speckfeature.observability"):
            hooks.trigger_hooks("spec_seeded", feature_id="x")

        good.assert_called_once_with(feature_id="x")
        assert any("bad hook" in r.getMessage() for r in caplog.records)

    def test_unregister(self):
        """Test callbacks can be removed."""
        hooks = ObservabilityHooks()
        callback = MagicMock()
        hooks.register_hook("feature_created", callback)
        hooks.unregister_hook("feature_created", callback)

        hooks.trigger_hooks("feature_created")
        callback.assert_not_called()


def test_log_error_with_context(caplog):
    """Test errors are logged with their context."""
    with caplog.at_level(logging.ERROR, logger="speckfeature.errors"):
        log_error_with_context(ValueError("bad input"), {"operation": "create_feature"})

    record = caplog.records[0]
    assert record.getMessage() == "Error in create_feature: bad input"
    assert record.extra_fields["error_type"] == "ValueError"
