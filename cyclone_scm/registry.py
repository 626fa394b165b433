"""SCM provider registry.

Maps each SCM type to the factory that builds its providers, so the pipeline
subsystem can ask for a provider without knowing which SCM is behind a
connection.
"""

from cyclone_scm.gitlab.factory import GitLabProviderFactory
from cyclone_scm.gitlab.version_cache import VersionCache
from cyclone_scm.models import ConnectionConfig, SCMType
from cyclone_scm.provider_protocol import (
    SCMProviderFactoryProtocol,
    SCMProviderProtocol,
)


class SCMProviderRegistry:
    """Registry for SCM provider factories.

    Example:
        >>> registry = SCMProviderRegistry()
        >>> registry.register(SCMType.GITLAB, GitLabProviderFactory())
        >>> provider = registry.new_provider(
        ...     SCMType.GITLAB, ConnectionConfig(server="https://gitlab.com", token="...")
        ... )
    """

    def __init__(self) -> None:
        """Initialize empty provider registry."""
        self._factories: dict[SCMType, SCMProviderFactoryProtocol] = {}

    def register(
        self, scm_type: SCMType, factory: SCMProviderFactoryProtocol
    ) -> None:
        """Register the provider factory of an SCM type.

        Raises:
            ValueError: If the SCM type is already registered
        """
        if scm_type in self._factories:
            msg = f"Provider already registered: {scm_type.value}"
            raise ValueError(msg)

        self._factories[scm_type] = factory

    def get_factory(self, scm_type: SCMType) -> SCMProviderFactoryProtocol:
        """Get the provider factory of an SCM type.

        Raises:
            ValueError: If the SCM type is not registered
        """
        if scm_type not in self._factories:
            msg = f"Provider not found: {scm_type.value}"
            raise ValueError(msg)

        return self._factories[scm_type]

    def new_provider(
        self, scm_type: SCMType, config: ConnectionConfig
    ) -> SCMProviderProtocol:
        """Build a provider of ``scm_type`` for ``config``."""
        return self.get_factory(scm_type).new_provider(config)

    def list_providers(self) -> list[SCMType]:
        """List all registered SCM types."""
        return list(self._factories.keys())


def get_default_registry(cache: VersionCache | None = None) -> SCMProviderRegistry:
    """Create a registry with the GitLab provider registered.

    Args:
        cache: Version cache for the GitLab factory; a fresh one if omitted
    """
    registry = SCMProviderRegistry()
    registry.register(SCMType.GITLAB, GitLabProviderFactory(cache=cache))
    return registry
