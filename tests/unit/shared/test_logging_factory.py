"""Tests for structlog configuration."""

import json
import logging

from shieldlog.shared.logging import EnvironmentAdder, configure_logging, get_logger
from shieldlog.shared.logging.sanitizers import REDACTED


def last_json_line(captured: str) -> dict:
    return json.loads(captured.strip().splitlines()[-1])


class TestConfigureLogging:
    """Test rendered output of configured loggers."""

    def test_environment_comes_from_configuration(self, capsys, restore_root_logging, monkeypatch):
        monkeypatch.setenv("ENVIRONMENT", "development")
        configure_logging(
            environment="test",
            json_logs=True,
            include_caller_info=False,
            cache_logger_on_first_use=False,
        )

        get_logger("shieldlog.tests").info("hello")

        line = last_json_line(capsys.readouterr().err)
        assert line["event"] == "hello"
        assert line["environment"] == "test"
        assert line["service"] == "shieldlog"
        assert line["level"] == "info"

    def test_stdlib_records_are_redacted(self, capsys, restore_root_logging):
        configure_logging(
            environment="staging",
            json_logs=True,
            include_caller_info=False,
            cache_logger_on_first_use=False,
        )

        logging.getLogger("httpx").warning(
            'HTTP Request: GET http://testserver/api/users?token=abc "HTTP/1.1 200 OK"'
        )

        line = last_json_line(capsys.readouterr().err)
        assert "abc" not in line["event"]
        assert f"token={REDACTED}" in line["event"]
        assert line["environment"] == "staging"

    def test_level_filtering(self, capsys, restore_root_logging):
        configure_logging(
            environment="test",
            log_level="WARNING",
            json_logs=True,
            include_caller_info=False,
            cache_logger_on_first_use=False,
        )

        get_logger("shieldlog.tests").info("dropped")

        assert capsys.readouterr().err == ""


def test_environment_adder_overrides_bound_value():
    processor = EnvironmentAdder("production")

    assert processor(None, "info", {"event": "e", "environment": "dev"}) == {
        "event": "e",
        "environment": "production",
    }
