"""Unit tests for ConsoleAdapter.

Tests cover:
- JSON output carries event name, level and structured context
- Level filtering
- error()/critical() add error_type and error_message
- bind() returns a new adapter with bound context
"""

import json

import pytest
import structlog

from authcore.infrastructure.logging.console_adapter import ConsoleAdapter


@pytest.fixture(autouse=True)
def reset_structlog():
    yield
    structlog.reset_defaults()


def read_lines(capsys):
    return [json.loads(line) for line in capsys.readouterr().out.splitlines() if line]


@pytest.mark.unit
class TestConsoleAdapter:
    def test_json_output_includes_context(self, capsys):
        adapter = ConsoleAdapter(use_json=True)

        adapter.info("auth_login_started", email="a***@example.com")

        (line,) = read_lines(capsys)
        assert line["event"] == "auth_login_started"
        assert line["level"] == "info"
        assert line["email"] == "a***@example.com"
        assert "timestamp" in line

    def test_level_filtering(self, capsys):
        adapter = ConsoleAdapter(use_json=True, level="WARNING")

        adapter.debug("hidden_debug")
        adapter.info("hidden_info")
        adapter.warning("shown_warning")

        assert [line["event"] for line in read_lines(capsys)] == ["shown_warning"]

    def test_error_adds_exception_details(self, capsys):
        adapter = ConsoleAdapter(use_json=True)

        adapter.error("auth_logout_remote_failed", error=ValueError("network down"))
        adapter.critical("auth_state_corrupted")

        error_line, critical_line = read_lines(capsys)
        assert error_line["level"] == "error"
        assert error_line["error_type"] == "ValueError"
        assert error_line["error_message"] == "network down"
        assert critical_line["level"] == "critical"
        assert "error_type" not in critical_line

    def test_bind_returns_new_adapter(self, capsys):
        adapter = ConsoleAdapter(use_json=True)

        bound = adapter.bind(handler="LoginUserHandler")
        bound.info("bound_event")
        adapter.info("plain_event")

        bound_line, plain_line = read_lines(capsys)
        assert bound is not adapter
        assert bound_line["handler"] == "LoginUserHandler"
        assert "handler" not in plain_line

    def test_console_renderer_is_human_readable(self, capsys):
        adapter = ConsoleAdapter(use_json=False)

        adapter.info("readable_event", user_id="user-1")

        out = capsys.readouterr().out
        assert "readable_event" in out
        assert "user-1" in out
