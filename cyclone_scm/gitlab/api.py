"""Version-independent GitLab API helpers.

These helpers talk to the REST API directly with the credential of a resolved
``ConnectionConfig``; only the ``/api/<version>`` path segment differs between
v3 and v4.
"""

from collections.abc import Mapping, Sequence
from urllib.parse import quote

import httpx
import structlog
from pydantic import TypeAdapter, ValidationError

from cyclone_scm.exceptions import HTTPFailureError, OperationError
from cyclone_scm.gitlab.instrumentation import GitLabApiHook, gitlab_api_call
from cyclone_scm.models import APIVersion, BuildStatus, ConnectionConfig, RepoFile

logger = structlog.get_logger(__name__)

_LANGUAGES = TypeAdapter(dict[str, float])
_TREE = TypeAdapter(list[RepoFile])

# GitLab commit status states: pending, running, success, failed, canceled
DEFAULT_STATUS = ("pending", "")
STATUS_MAPPING: dict[BuildStatus, tuple[str, str]] = {
    BuildStatus.RUNNING: ("running", "The Cyclone CI build is in progress."),
    BuildStatus.SUCCESS: ("success", "The Cyclone CI build passed."),
    BuildStatus.FAILED: ("failed", "The Cyclone CI build failed."),
    BuildStatus.ABORTED: ("canceled", "The Cyclone CI build failed."),
}


def encode_project(project: str) -> str:
    """Percent-encode a project path for use as a single URL path segment.

    Examples:
        >>> encode_project("group/sub group/project")
        'group%2Fsub%20group%2Fproject'
    """
    return quote(project, safe="")


def project_api_url(
    config: ConnectionConfig, version: APIVersion, project: str, resource: str
) -> str:
    """Build ``<server>/api/<version>/projects/<project>/<resource>``."""
    return (
        f"{config.server.rstrip('/')}/api/{version}/projects/"
        f"{encode_project(project)}/{resource}"
    )


def _get_content(
    config: ConnectionConfig,
    url: str,
    method: str,
    client: httpx.Client,
    pre_hooks: Sequence[GitLabApiHook] | None,
) -> bytes:
    try:
        with gitlab_api_call(method, "GET", config.server, pre_hooks):
            response = client.get(url, headers=config.auth_headers())
    except httpx.HTTPError as exc:
        logger.error("GitLab request failed", method=method, url=url, error=str(exc))
        raise OperationError(f"Failed to request {url}: {exc}") from exc

    if not response.is_success:
        raise HTTPFailureError(
            f"Failed to request {url}", response.status_code, response.text
        )
    return response.content


def get_languages(
    config: ConnectionConfig,
    version: APIVersion,
    project: str,
    client: httpx.Client,
    pre_hooks: Sequence[GitLabApiHook] | None = None,
) -> dict[str, float]:
    """Fetch the language breakdown of a project.

    Returns:
        Mapping of language name to its share in percent, e.g.
        ``{"Go": 80.0, "Python": 20.0}``

    Raises:
        HTTPFailureError: GitLab answered with a non-2xx status
        OperationError: Transport or decode failure
    """
    url = project_api_url(config, version, project, "languages")
    content = _get_content(config, url, "languages.get", client, pre_hooks)
    try:
        return _LANGUAGES.validate_json(content)
    except ValidationError as exc:
        raise OperationError(f"Failed to decode project languages: {exc}") from exc


def get_top_language(languages: Mapping[str, float]) -> str:
    """Return the language with the greatest share, or "" for no languages.

    Ties are resolved in favor of the language seen first.
    """
    language = ""
    top = 0.0
    for name, share in languages.items():
        if share > top:
            top = share
            language = name
    return language


def list_contents(
    config: ConnectionConfig,
    version: APIVersion,
    project: str,
    client: httpx.Client,
    pre_hooks: Sequence[GitLabApiHook] | None = None,
) -> list[RepoFile]:
    """List the entries of the repository root of a project.

    Raises:
        HTTPFailureError: GitLab answered with a non-2xx status
        OperationError: Transport or decode failure
    """
    url = project_api_url(config, version, project, "repository/tree")
    content = _get_content(config, url, "repository_tree.get", client, pre_hooks)
    try:
        return _TREE.validate_json(content)
    except ValidationError as exc:
        raise OperationError(f"Failed to decode repository tree: {exc}") from exc


def translate_status(status: BuildStatus | str) -> tuple[str, str]:
    """Translate a build status into a GitLab commit state and description.

    Statuses without a GitLab counterpart, Pending included, are logged and
    reported as pending so that a status update never blocks the pipeline.
    """
    try:
        return STATUS_MAPPING[BuildStatus(status)]
    except (KeyError, ValueError):
        logger.warning("Unsupported build status", status=str(status))
        return DEFAULT_STATUS
