"""Tests for the structlog configuration."""

import json

import pytest
import structlog

from cyclone_scm.config import Settings
from cyclone_scm.logger import redact_secrets, setup_logging


def test_redact_secrets() -> None:
    event = {
        "event": "request",
        "PRIVATE-TOKEN": "t0k",
        "Authorization": "Bearer t0k",
        "password": "hunter2",
        "server": "https://gitlab.example.com",
    }

    result = redact_secrets(None, "info", event)

    assert result == {
        "event": "request",
        "PRIVATE-TOKEN": "<redacted>",
        "Authorization": "<redacted>",
        "password": "<redacted>",
        "server": "https://gitlab.example.com",
    }


def test_setup_logging_json(capsys: pytest.CaptureFixture[str]) -> None:
    setup_logging(Settings(_env_file=None, log_format_json=True, log_level="INFO"))

    structlog.get_logger().info("probed", server="https://x", token="t0k")

    line = json.loads(capsys.readouterr().out.strip())
    assert line["event"] == "probed"
    assert line["level"] == "info"
    assert line["token"] == "<redacted>"
    assert "timestamp" in line


def test_setup_logging_filters_level(capsys: pytest.CaptureFixture[str]) -> None:
    setup_logging(Settings(_env_file=None, log_format_json=True, log_level="warning"))

    structlog.get_logger().info("hidden")
    structlog.get_logger().warning("shown")

    out = capsys.readouterr().out
    assert "hidden" not in out
    assert "shown" in out
