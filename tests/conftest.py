"""Global test configuration for cyclone_scm tests."""

from collections.abc import Callable, Generator
from typing import Any
from unittest.mock import MagicMock

import httpx
import pytest
import structlog

from cyclone_scm.models import ConnectionConfig

SERVER = "https://gitlab.example.com"


@pytest.fixture(autouse=True)
def reset_structlog() -> Generator[None, None, None]:
    """Restore the default structlog configuration after each test."""
    yield
    structlog.reset_defaults()


@pytest.fixture
def mock_http_client() -> MagicMock:
    """Mock httpx.Client."""
    return MagicMock(spec=httpx.Client)


@pytest.fixture
def make_response() -> Callable[..., httpx.Response]:
    """Factory for real httpx responses with JSON or raw bodies."""

    def _make_response(
        status_code: int = 200,
        json: Any = None,
        text: str | None = None,
        headers: dict[str, str] | None = None,
    ) -> httpx.Response:
        if text is not None:
            return httpx.Response(status_code, text=text, headers=headers)
        if json is not None:
            return httpx.Response(status_code, json=json, headers=headers)
        return httpx.Response(status_code, headers=headers)

    return _make_response


@pytest.fixture
def token_config() -> ConnectionConfig:
    """Connection config with a private token."""
    return ConnectionConfig(server=SERVER, token="private-token")


@pytest.fixture
def password_config() -> ConnectionConfig:
    """Connection config with username/password and no token."""
    return ConnectionConfig(server=SERVER, username="alice", password="secret")
