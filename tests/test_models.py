"""Tests for the shared models."""

import pytest

from cyclone_scm.models import ConnectionConfig, FileKind, RepoFile, ServerIdentity


@pytest.mark.parametrize(
    "server",
    [
        pytest.param("https://gitlab.example.com", id="plain"),
        pytest.param("https://gitlab.example.com/", id="trailing-slash"),
        pytest.param("HTTPS://GitLab.Example.COM", id="casing"),
        pytest.param("https://gitlab.example.com:443", id="default-port"),
        pytest.param("  https://gitlab.example.com  ", id="whitespace"),
    ],
)
def test_server_identity_normalization(server: str) -> None:
    assert ServerIdentity.from_server(server) == ServerIdentity(
        scheme="https", host="gitlab.example.com"
    )


def test_server_identity_keeps_port_and_path() -> None:
    identity = ServerIdentity.from_server("http://git.internal:8080/gitlab/")

    assert identity.port == 8080
    assert identity.path == "/gitlab"
    assert str(identity) == "http://git.internal:8080/gitlab"


def test_server_identity_distinguishes_schemes() -> None:
    assert ServerIdentity.from_server("http://gitlab.com") != ServerIdentity.from_server(
        "https://gitlab.com"
    )


def test_auth_headers_private_token() -> None:
    config = ConnectionConfig(server="https://gitlab.example.com", token="t0k")

    assert not config.uses_oauth
    assert config.auth_headers() == {
        "Content-Type": "application/json",
        "PRIVATE-TOKEN": "t0k",
    }


def test_auth_headers_oauth() -> None:
    config = ConnectionConfig(
        server="https://gitlab.example.com", username="alice", token="t0k"
    )

    assert config.uses_oauth
    assert config.auth_headers() == {
        "Content-Type": "application/json",
        "Authorization": "Bearer t0k",
    }


def test_connection_config_repr_hides_credentials() -> None:
    config = ConnectionConfig(
        server="https://gitlab.example.com",
        username="alice",
        password="hunter2",
        token="t0k",
    )

    assert "hunter2" not in repr(config)
    assert "t0k" not in repr(config)


def test_repo_file_from_api_payload() -> None:
    item = RepoFile.model_validate({
        "id": "a1b2",
        "name": "vendor",
        "type": "commit",
        "path": "vendor",
        "mode": "160000",
    })

    assert item.kind == FileKind.SUBMODULE
    assert RepoFile(name="a", kind=FileKind.FILE, path="a").kind == FileKind.FILE
