"""GitLab support for both API v3 and API v4 servers.

The API version of a server is detected with a probe of ``/api/v4/version``
and cached per server; providers for either version expose the same
operations (commit status, repository tree, languages).

Example:
    >>> from cyclone_scm.gitlab import GitLabProviderFactory, VersionCache
    >>> factory = GitLabProviderFactory(cache=VersionCache())
    >>> provider = factory.new_provider(
    ...     ConnectionConfig(server="https://gitlab.com", token="...")
    ... )
    >>> provider.list_contents("group/project")
"""

from cyclone_scm.gitlab.api import (
    get_languages,
    get_top_language,
    list_contents,
    translate_status,
)
from cyclone_scm.gitlab.auth import enforce_public_https, resolve_token
from cyclone_scm.gitlab.clients import GitLabV3Api, GitLabV4Api
from cyclone_scm.gitlab.factory import GitLabProviderFactory
from cyclone_scm.gitlab.instrumentation import GitLabApiCallContext
from cyclone_scm.gitlab.prober import probe
from cyclone_scm.gitlab.provider import (
    GitLabProvider,
    GitLabV3Provider,
    GitLabV4Provider,
    parse_repo_url,
)
from cyclone_scm.gitlab.version_cache import VersionCache

__all__ = [
    "GitLabApiCallContext",
    "GitLabProvider",
    "GitLabProviderFactory",
    "GitLabV3Api",
    "GitLabV3Provider",
    "GitLabV4Api",
    "GitLabV4Provider",
    "VersionCache",
    "enforce_public_https",
    "get_languages",
    "get_top_language",
    "list_contents",
    "parse_repo_url",
    "probe",
    "resolve_token",
    "translate_status",
]
