"""Tests for GitLab API version detection."""

from collections.abc import Callable
from unittest.mock import MagicMock

import httpx
import pytest
from structlog.testing import capture_logs

from cyclone_scm.exceptions import (
    MissingCredentialsError,
    ProbeError,
    ServerUnreachableError,
)
from cyclone_scm.gitlab.prober import probe
from cyclone_scm.models import APIVersion, ConnectionConfig


@pytest.mark.parametrize(
    ("status_code", "expected"),
    [
        pytest.param(404, APIVersion.V3, id="not-found"),
        pytest.param(302, APIVersion.V3, id="redirect"),
        pytest.param(500, APIVersion.V3, id="server-error"),
        pytest.param(401, APIVersion.V3, id="unauthorized"),
    ],
)
def test_probe_classifies_older_servers(
    status_code: int,
    expected: APIVersion,
    token_config: ConnectionConfig,
    mock_http_client: MagicMock,
    make_response: Callable[..., httpx.Response],
) -> None:
    mock_http_client.get.return_value = make_response(status_code)

    assert probe(token_config, mock_http_client) == expected


def test_probe_v4(
    token_config: ConnectionConfig,
    mock_http_client: MagicMock,
    make_response: Callable[..., httpx.Response],
) -> None:
    mock_http_client.get.return_value = make_response(
        200, json={"version": "16.4.1", "revision": "abc123"}
    )

    assert probe(token_config, mock_http_client) == APIVersion.V4

    mock_http_client.get.assert_called_once_with(
        "https://gitlab.example.com/api/v4/version",
        headers={"Content-Type": "application/json", "PRIVATE-TOKEN": "private-token"},
        follow_redirects=False,
    )


def test_probe_uses_bearer_token_with_username(
    mock_http_client: MagicMock, make_response: Callable[..., httpx.Response]
) -> None:
    config = ConnectionConfig(
        server="https://gitlab.example.com", username="alice", token="oauth-token"
    )
    mock_http_client.get.return_value = make_response(404)

    probe(config, mock_http_client)

    headers = mock_http_client.get.call_args.kwargs["headers"]
    assert headers["Authorization"] == "Bearer oauth-token"
    assert "PRIVATE-TOKEN" not in headers


def test_probe_fallback_is_logged(
    token_config: ConnectionConfig,
    mock_http_client: MagicMock,
    make_response: Callable[..., httpx.Response],
) -> None:
    mock_http_client.get.return_value = make_response(500)

    with capture_logs() as logs:
        probe(token_config, mock_http_client)

    warnings = [log for log in logs if log["log_level"] == "warning"]
    assert len(warnings) == 1
    assert warnings[0]["status_code"] == 500


def test_probe_clean_detection_is_not_a_warning(
    token_config: ConnectionConfig,
    mock_http_client: MagicMock,
    make_response: Callable[..., httpx.Response],
) -> None:
    mock_http_client.get.return_value = make_response(404)

    with capture_logs() as logs:
        probe(token_config, mock_http_client)

    assert not [log for log in logs if log["log_level"] == "warning"]


def test_probe_unreachable(
    token_config: ConnectionConfig, mock_http_client: MagicMock
) -> None:
    mock_http_client.get.side_effect = httpx.ConnectError("connection refused")

    with pytest.raises(ServerUnreachableError):
        probe(token_config, mock_http_client)


def test_probe_timeout_is_unreachable(
    token_config: ConnectionConfig, mock_http_client: MagicMock
) -> None:
    mock_http_client.get.side_effect = httpx.ReadTimeout("timed out")

    with pytest.raises(ServerUnreachableError):
        probe(token_config, mock_http_client)


def test_probe_undecodable_version_body(
    token_config: ConnectionConfig,
    mock_http_client: MagicMock,
    make_response: Callable[..., httpx.Response],
) -> None:
    mock_http_client.get.return_value = make_response(200, text="<html></html>")

    with pytest.raises(ProbeError):
        probe(token_config, mock_http_client)


def test_probe_v4_with_partial_version_body(
    token_config: ConnectionConfig,
    mock_http_client: MagicMock,
    make_response: Callable[..., httpx.Response],
) -> None:
    mock_http_client.get.return_value = make_response(200, json={})

    assert probe(token_config, mock_http_client) == APIVersion.V4


@pytest.mark.parametrize(
    "body",
    [
        pytest.param("<html></html>", id="html"),
        pytest.param('["16.4.1"]', id="array"),
    ],
)
def test_probe_non_object_version_body(
    body: str,
    token_config: ConnectionConfig,
    mock_http_client: MagicMock,
    make_response: Callable[..., httpx.Response],
) -> None:
    mock_http_client.get.return_value = make_response(200, text=body)

    with pytest.raises(ProbeError):
        probe(token_config, mock_http_client)


def test_probe_resolves_token_first(
    password_config: ConnectionConfig,
    mock_http_client: MagicMock,
    make_response: Callable[..., httpx.Response],
) -> None:
    mock_http_client.post.return_value = make_response(200, json={"access_token": "T"})
    mock_http_client.get.return_value = make_response(302)

    assert probe(password_config, mock_http_client) == APIVersion.V3

    assert password_config.token == "T"
    headers = mock_http_client.get.call_args.kwargs["headers"]
    assert headers["Authorization"] == "Bearer T"


def test_probe_propagates_auth_error(mock_http_client: MagicMock) -> None:
    config = ConnectionConfig(server="https://gitlab.example.com")

    with pytest.raises(MissingCredentialsError):
        probe(config, mock_http_client)

    mock_http_client.get.assert_not_called()
