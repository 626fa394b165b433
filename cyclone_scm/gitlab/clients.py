"""GitLab API clients, one per API version.

v4 is served by python-gitlab. python-gitlab dropped API v3, so the v3 client
is a thin httpx client bound to ``<server>/api/v3``.
"""

from collections.abc import Sequence
from typing import Protocol

import gitlab
import httpx
import requests
import structlog

from cyclone_scm.exceptions import (
    ClientConstructionError,
    HTTPFailureError,
    OperationError,
)
from cyclone_scm.gitlab.api import encode_project
from cyclone_scm.gitlab.instrumentation import GitLabApiHook, gitlab_api_call
from cyclone_scm.models import APIVersion, ConnectionConfig

logger = structlog.get_logger(__name__)

TIMEOUT = 30


class GitLabApiProtocol(Protocol):
    """Interface of the version-specific GitLab API clients."""

    api_version: APIVersion
    base_url: str

    def set_commit_status(
        self,
        project: str,
        sha: str,
        state: str,
        description: str,
        target_url: str,
        context: str,
    ) -> None: ...

    def close(self) -> None: ...


def validate_server_url(server: str) -> httpx.URL:
    """Parse ``server`` as an absolute http(s) URL.

    Raises:
        ClientConstructionError: The server is not an absolute http(s) URL
    """
    try:
        url = httpx.URL(server.strip())
    except httpx.InvalidURL as exc:
        logger.error("Invalid GitLab server URL", server=server, error=str(exc))
        raise ClientConstructionError(f"Invalid GitLab server URL {server!r}") from exc
    if url.scheme not in {"http", "https"} or not url.host:
        logger.error("Invalid GitLab server URL", server=server)
        raise ClientConstructionError(f"Invalid GitLab server URL {server!r}")
    return url


def api_base_url(server: str, version: APIVersion) -> str:
    """Return ``<server>/api/<version>`` after validating the server URL.

    Raises:
        ClientConstructionError: The server is not an absolute http(s) URL
    """
    validate_server_url(server)
    return f"{server.rstrip('/')}/api/{version}"


class GitLabV4Api:
    """GitLab API v4 client backed by python-gitlab.

    Args:
        config: Resolved connection config; OAuth tokens are used when a
            username is set, private tokens otherwise
        timeout: Request timeout in seconds
        pre_hooks: Hooks called before each API call
    """

    api_version = APIVersion.V4

    def __init__(
        self,
        config: ConnectionConfig,
        timeout: float = TIMEOUT,
        pre_hooks: Sequence[GitLabApiHook] | None = None,
    ) -> None:
        self.base_url = api_base_url(config.server, self.api_version)
        self.server = config.server.rstrip("/")
        self._pre_hooks = list(pre_hooks or [])
        if config.uses_oauth:
            self._gitlab = gitlab.Gitlab(
                url=self.server, oauth_token=config.token, timeout=timeout
            )
        else:
            self._gitlab = gitlab.Gitlab(
                url=self.server, private_token=config.token, timeout=timeout
            )

    def set_commit_status(
        self,
        project: str,
        sha: str,
        state: str,
        description: str,
        target_url: str,
        context: str,
    ) -> None:
        """Create or update the status of commit ``sha`` in ``project``."""
        commit = self._gitlab.projects.get(project, lazy=True).commits.get(
            sha, lazy=True
        )
        try:
            with gitlab_api_call(
                "commit_status.create", "POST", self.server, self._pre_hooks
            ):
                commit.statuses.create({
                    "state": state,
                    "description": description,
                    "target_url": target_url,
                    "context": context,
                })
        except gitlab.GitlabError as exc:
            raise HTTPFailureError(
                f"Failed to set commit status of {project}@{sha}",
                exc.response_code or 0,
                str(exc.error_message),
            ) from exc
        except requests.RequestException as exc:
            raise OperationError(
                f"Failed to set commit status of {project}@{sha}: {exc}"
            ) from exc

    def close(self) -> None:
        self._gitlab.session.close()


class GitLabV3Api:
    """GitLab API v3 client for servers older than GitLab 9.0.

    Args:
        config: Resolved connection config; OAuth tokens are used when a
            username is set, private tokens otherwise
        timeout: Request timeout in seconds
        pre_hooks: Hooks called before each API call
    """

    api_version = APIVersion.V3

    def __init__(
        self,
        config: ConnectionConfig,
        timeout: float = TIMEOUT,
        pre_hooks: Sequence[GitLabApiHook] | None = None,
    ) -> None:
        self.base_url = api_base_url(config.server, self.api_version)
        self.server = config.server.rstrip("/")
        self._pre_hooks = list(pre_hooks or [])
        self._client = httpx.Client(
            base_url=self.base_url,
            headers=config.auth_headers(),
            timeout=timeout,
        )

    def set_commit_status(
        self,
        project: str,
        sha: str,
        state: str,
        description: str,
        target_url: str,
        context: str,
    ) -> None:
        """Create or update the status of commit ``sha`` in ``project``."""
        path = f"/projects/{encode_project(project)}/statuses/{sha}"
        try:
            with gitlab_api_call(
                "commit_status.create", "POST", self.server, self._pre_hooks
            ):
                response = self._client.post(
                    path,
                    json={
                        "state": state,
                        "description": description,
                        "target_url": target_url,
                        "name": context,
                    },
                )
        except httpx.HTTPError as exc:
            raise OperationError(
                f"Failed to set commit status of {project}@{sha}: {exc}"
            ) from exc

        if not response.is_success:
            raise HTTPFailureError(
                f"Failed to set commit status of {project}@{sha}",
                response.status_code,
                response.text,
            )

    def close(self) -> None:
        """Close the underlying httpx client."""
        self._client.close()
