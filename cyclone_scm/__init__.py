"""SCM provider layer of the Cyclone CI pipeline service.

Provides a uniform interface (commit status, repository tree, languages) over
GitLab servers speaking different major versions of the GitLab API.
"""

from cyclone_scm.config import Settings
from cyclone_scm.exceptions import (
    AuthError,
    ClientConstructionError,
    HTTPFailureError,
    MissingCredentialsError,
    OperationError,
    ProbeError,
    ProviderError,
    SCMError,
    ServerUnreachableError,
    TokenExchangeFailedError,
    UnsupportedAPIVersionError,
)
from cyclone_scm.models import (
    APIVersion,
    BuildStatus,
    ConnectionConfig,
    FileKind,
    RepoFile,
    SCMType,
    ServerIdentity,
)
from cyclone_scm.provider_protocol import (
    SCMProviderFactoryProtocol,
    SCMProviderProtocol,
)
from cyclone_scm.registry import SCMProviderRegistry, get_default_registry

__all__ = [
    "APIVersion",
    "AuthError",
    "BuildStatus",
    "ClientConstructionError",
    "ConnectionConfig",
    "FileKind",
    "HTTPFailureError",
    "MissingCredentialsError",
    "OperationError",
    "ProbeError",
    "ProviderError",
    "RepoFile",
    "SCMError",
    "SCMProviderFactoryProtocol",
    "SCMProviderProtocol",
    "SCMProviderRegistry",
    "SCMType",
    "ServerIdentity",
    "ServerUnreachableError",
    "Settings",
    "TokenExchangeFailedError",
    "UnsupportedAPIVersionError",
    "get_default_registry",
]
