"""Unit tests for ConsoleAdapter (structured console logging).

Tests cover:
- LoggerProtocol methods forward message and context
- Exception details on error/critical
- Context binding
- Renderer selection (JSON vs console)

Architecture:
- Unit tests with mocked structlog
"""

from unittest.mock import MagicMock, patch

import pytest

from accessgate.infrastructure.logging.console_adapter import (
    REDACTED,
    ConsoleAdapter,
    redact_sensitive,
)

STRUCTLOG = "accessgate.infrastructure.logging.console_adapter.structlog"


@pytest.mark.unit
class TestConsoleAdapterLogging:
    @pytest.mark.parametrize("level", ["debug", "info", "warning"])
    def test_level_methods_forward_context(self, level):
        with patch(STRUCTLOG) as mock_structlog:
            mock_logger = MagicMock()
            mock_structlog.get_logger.return_value = mock_logger

            adapter = ConsoleAdapter()
            getattr(adapter, level)("policy_added", role="admin", path="/x")

            getattr(mock_logger, level).assert_called_once_with(
                "policy_added", role="admin", path="/x"
            )

    def test_error_includes_exception_details(self):
        with patch(STRUCTLOG) as mock_structlog:
            mock_logger = MagicMock()
            mock_structlog.get_logger.return_value = mock_logger

            adapter = ConsoleAdapter()
            adapter.error("policy_evaluation_error", error=ValueError("bad"), path="/x")

            mock_logger.error.assert_called_once_with(
                "policy_evaluation_error",
                path="/x",
                error_type="ValueError",
                error_message="bad",
            )

    def test_critical_without_exception(self):
        with patch(STRUCTLOG) as mock_structlog:
            mock_logger = MagicMock()
            mock_structlog.get_logger.return_value = mock_logger

            adapter = ConsoleAdapter()
            adapter.critical("policy_engine_not_initialized", path="/x")

            mock_logger.critical.assert_called_once_with(
                "policy_engine_not_initialized", path="/x"
            )


@pytest.mark.unit
class TestConsoleAdapterBinding:
    def test_bind_returns_new_adapter_with_bound_logger(self):
        with patch(STRUCTLOG) as mock_structlog:
            mock_logger = MagicMock()
            bound_logger = MagicMock()
            mock_logger.bind.return_value = bound_logger
            mock_structlog.get_logger.return_value = mock_logger

            adapter = ConsoleAdapter()
            bound = adapter.bind(subject="user:1")
            bound.info("access_denied")

            assert bound is not adapter
            mock_logger.bind.assert_called_once_with(subject="user:1")
            bound_logger.info.assert_called_once_with("access_denied")


@pytest.mark.unit
class TestConsoleAdapterConfiguration:
    def test_json_renderer_when_requested(self):
        with patch(STRUCTLOG) as mock_structlog:
            ConsoleAdapter(use_json=True)

            mock_structlog.processors.JSONRenderer.assert_called_once()
            mock_structlog.dev.ConsoleRenderer.assert_not_called()

    def test_console_renderer_by_default(self):
        with patch(STRUCTLOG) as mock_structlog:
            ConsoleAdapter()

            mock_structlog.dev.ConsoleRenderer.assert_called_once()
            mock_structlog.processors.JSONRenderer.assert_not_called()


@pytest.mark.unit
class TestRedaction:
    def test_masks_credentials(self):
        event = {"event": "authentication_failed", "token": "eyJ...", "path": "/x"}

        result = redact_sensitive(None, "warning", event)

        assert result == {
            "event": "authentication_failed",
            "token": REDACTED,
            "path": "/x",
        }

    def test_leaves_other_events_untouched(self):
        event = {"event": "policy_added", "role": "admin"}

        assert redact_sensitive(None, "info", dict(event)) == event
