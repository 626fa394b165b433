"""Factory building GitLab providers for the API version a server speaks."""

from collections.abc import Sequence

import httpx
import structlog

from cyclone_scm.config import Settings
from cyclone_scm.exceptions import UnsupportedAPIVersionError
from cyclone_scm.gitlab.auth import resolve_token
from cyclone_scm.gitlab.clients import GitLabV3Api, GitLabV4Api, validate_server_url
from cyclone_scm.gitlab.instrumentation import GitLabApiHook
from cyclone_scm.gitlab.prober import probe
from cyclone_scm.gitlab.provider import (
    GitLabProvider,
    GitLabV3Provider,
    GitLabV4Provider,
)
from cyclone_scm.gitlab.version_cache import VersionCache
from cyclone_scm.models import APIVersion, ConnectionConfig, ServerIdentity

logger = structlog.get_logger(__name__)


class GitLabProviderFactory:
    """Factory for creating GitLab providers.

    The API version of each server is probed once and remembered in the
    version cache; later providers for the same server skip the probe.

    Args:
        cache: Version cache, share one instance to share detected versions
        settings: Timeout and commit status settings
        http_client: HTTP client for probes, token exchanges and REST helpers
        pre_hooks: Hooks called before each GitLab API call (e.g., rate limiting)

    Example:
        >>> factory = GitLabProviderFactory(cache=VersionCache())
        >>> provider = factory.new_provider(
        ...     ConnectionConfig(server="https://gitlab.example.com", token="...")
        ... )
        >>> provider.detect_language("group/project")
        'Go'
    """

    def __init__(
        self,
        cache: VersionCache | None = None,
        settings: Settings | None = None,
        http_client: httpx.Client | None = None,
        pre_hooks: Sequence[GitLabApiHook] | None = None,
    ) -> None:
        self.cache = cache if cache is not None else VersionCache()
        self.settings = settings or Settings()
        self.http_client = http_client or httpx.Client(
            timeout=self.settings.api_timeout
        )
        self._pre_hooks = list(pre_hooks or [])

    def api_version(self, config: ConnectionConfig) -> APIVersion:
        """Return the API version of the server of ``config``.

        Raises:
            AuthError: A token was needed for the probe but could not be resolved
            ProbeError: The server could not be probed
            ClientConstructionError: The server is not an absolute http(s) URL
        """
        validate_server_url(config.server)
        identity = ServerIdentity.from_server(config.server)
        if (version := self.cache.get(identity)) is not None:
            return version

        version = probe(config, self.http_client, pre_hooks=self._pre_hooks)
        self.cache.put(identity, version)
        return version

    def new_provider(self, config: ConnectionConfig) -> GitLabProvider:
        """Build the provider matching the API version of the server.

        ``config`` is shared with the returned provider and updated in place
        with the resolved token.

        Raises:
            AuthError: No token could be resolved
            ProbeError: The server could not be probed
            ProviderError: The API client could not be built
        """
        version = self.api_version(config)
        resolve_token(config, self.http_client, pre_hooks=self._pre_hooks)
        logger.info("New GitLab client", server=config.server, api_version=version)

        match version:
            case APIVersion.V3:
                return GitLabV3Provider(
                    config,
                    GitLabV3Api(
                        config,
                        timeout=self.settings.api_timeout,
                        pre_hooks=self._pre_hooks,
                    ),
                    self.http_client,
                    status_context=self.settings.status_context,
                    pre_hooks=self._pre_hooks,
                )
            case APIVersion.V4:
                return GitLabV4Provider(
                    config,
                    GitLabV4Api(
                        config,
                        timeout=self.settings.api_timeout,
                        pre_hooks=self._pre_hooks,
                    ),
                    self.http_client,
                    status_context=self.settings.status_context,
                    pre_hooks=self._pre_hooks,
                )
            case _:
                msg = (
                    f"GitLab API version {version} is not supported, "
                    f"only {APIVersion.V3} and {APIVersion.V4} are"
                )
                raise UnsupportedAPIVersionError(msg)

    def close(self) -> None:
        """Close the shared httpx client."""
        self.http_client.close()
