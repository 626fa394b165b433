"""Detection of the GitLab API version spoken by a server.

GitLab 9.0 introduced API v4 together with ``/api/v4/version``. Older servers
either answer that path with 404 or redirect it to the sign-in page, so the
probe must not follow redirects.
"""

from collections.abc import Sequence

import httpx
import structlog
from pydantic import ValidationError

from cyclone_scm.exceptions import ProbeError, ServerUnreachableError
from cyclone_scm.gitlab.auth import resolve_token
from cyclone_scm.gitlab.instrumentation import GitLabApiHook, gitlab_api_call
from cyclone_scm.metrics import gitlab_version_probes
from cyclone_scm.models import APIVersion, ConnectionConfig, VersionInfo

logger = structlog.get_logger(__name__)

VERSION_PATH = "/api/v4/version"

OUTCOME_DETECTED = "detected"
OUTCOME_FALLBACK = "fallback"


def probe(
    config: ConnectionConfig,
    client: httpx.Client,
    pre_hooks: Sequence[GitLabApiHook] | None = None,
) -> APIVersion:
    """Detect whether the server of ``config`` speaks API v3 or v4.

    Classification:
        - 200 with a version body: v4
        - 404 or 302: v3
        - any other status: v3, logged as a fallback

    Raises:
        AuthError: No token could be resolved for the probe
        ServerUnreachableError: The request failed on the transport level
        ProbeError: The 200 response body is not a version object
    """
    resolve_token(config, client, pre_hooks=pre_hooks)

    url = f"{config.server.rstrip('/')}{VERSION_PATH}"
    try:
        with gitlab_api_call("version.get", "GET", config.server, pre_hooks):
            response = client.get(
                url, headers=config.auth_headers(), follow_redirects=False
            )
    except httpx.HTTPError as exc:
        logger.error("GitLab server unreachable", server=config.server, error=str(exc))
        raise ServerUnreachableError(
            f"Failed to detect API version of {config.server}: {exc}"
        ) from exc

    match response.status_code:
        case httpx.codes.OK:
            try:
                info = VersionInfo.model_validate_json(response.content)
            except ValidationError as exc:
                raise ProbeError(
                    f"Unexpected version response from {config.server}: {response.text}"
                ) from exc
            logger.info(
                "Detected GitLab version",
                server=config.server,
                gitlab_version=info.version,
                api_version=APIVersion.V4,
            )
            return _classified(APIVersion.V4, OUTCOME_DETECTED)
        case httpx.codes.NOT_FOUND | httpx.codes.FOUND:
            logger.info(
                "GitLab server does not serve the v4 version API",
                server=config.server,
                status_code=response.status_code,
                api_version=APIVersion.V3,
            )
            return _classified(APIVersion.V3, OUTCOME_DETECTED)
        case _:
            logger.warning(
                "Unexpected status of GitLab API version request, using v3",
                server=config.server,
                status_code=response.status_code,
            )
            return _classified(APIVersion.V3, OUTCOME_FALLBACK)


def _classified(version: APIVersion, outcome: str) -> APIVersion:
    gitlab_version_probes.labels(version.value, outcome).inc()
    return version
