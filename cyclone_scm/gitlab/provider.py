"""GitLab provider adapters.

``GitLabV3Provider`` and ``GitLabV4Provider`` expose the same operations; the
factory picks one of them once, based on the detected API version.
"""

from collections.abc import Sequence
from urllib.parse import urlparse

import httpx

from cyclone_scm.config import DEFAULT_STATUS_CONTEXT
from cyclone_scm.gitlab import api
from cyclone_scm.gitlab.clients import GitLabApiProtocol, GitLabV3Api, GitLabV4Api
from cyclone_scm.gitlab.instrumentation import GitLabApiHook
from cyclone_scm.models import APIVersion, BuildStatus, ConnectionConfig, RepoFile


def parse_repo_url(url: str) -> str:
    """Return the ``owner/name`` project path of a repository URL.

    Raises:
        ValueError: If the URL has no owner and name

    Examples:
        >>> parse_repo_url("https://gitlab.com/group/project.git")
        'group/project'
    """
    path = urlparse(url).path.rstrip("/").removesuffix(".git")
    parts = [p for p in path.split("/") if p]

    min_parts = 2
    if len(parts) < min_parts:
        msg = f"Invalid GitLab repository URL (expected owner/name): {url}"
        raise ValueError(msg)

    return "/".join(parts)


class GitLabProvider:
    """Operations shared by both API versions.

    Args:
        config: Resolved connection config, shared with the factory
        client: Version-specific API client, owned by the provider
        http_client: HTTP client for the raw REST helpers
        status_context: Context name of the commit statuses
        pre_hooks: Hooks called before each API call
    """

    api_version: APIVersion

    def __init__(
        self,
        config: ConnectionConfig,
        client: GitLabApiProtocol,
        http_client: httpx.Client,
        status_context: str = DEFAULT_STATUS_CONTEXT,
        pre_hooks: Sequence[GitLabApiHook] | None = None,
    ) -> None:
        self.config = config
        self.client = client
        self.status_context = status_context
        self._http_client = http_client
        self._pre_hooks = list(pre_hooks or [])

    def report_status(
        self,
        status: BuildStatus | str,
        target_url: str,
        repo_url: str,
        commit_sha: str,
    ) -> None:
        """Publish the build status as commit status of ``commit_sha``.

        Args:
            status: Build status, translated to a GitLab commit state
            target_url: Link to the build record
            repo_url: Repository URL (e.g., https://gitlab.com/group/project)
            commit_sha: Commit to set the status on
        """
        state, description = api.translate_status(status)
        self.client.set_commit_status(
            project=parse_repo_url(repo_url),
            sha=commit_sha,
            state=state,
            description=description,
            target_url=target_url,
            context=self.status_context,
        )

    def list_contents(self, project: str) -> list[RepoFile]:
        """List the repository root of ``project`` (e.g., "group/project")."""
        return api.list_contents(
            self.config,
            self.api_version,
            project,
            self._http_client,
            pre_hooks=self._pre_hooks,
        )

    def get_languages(self, project: str) -> dict[str, float]:
        """Return the language breakdown of ``project`` in percent."""
        return api.get_languages(
            self.config,
            self.api_version,
            project,
            self._http_client,
            pre_hooks=self._pre_hooks,
        )

    def detect_language(self, project: str) -> str:
        """Return the main language of ``project``, or "" if none is known."""
        return api.get_top_language(self.get_languages(project))

    def close(self) -> None:
        self.client.close()


class GitLabV3Provider(GitLabProvider):
    """Provider for GitLab servers speaking API v3."""

    api_version = APIVersion.V3
    client: GitLabV3Api


class GitLabV4Provider(GitLabProvider):
    """Provider for GitLab servers speaking API v4."""

    api_version = APIVersion.V4
    client: GitLabV4Api
