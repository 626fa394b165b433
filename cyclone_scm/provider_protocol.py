"""Protocols for SCM provider abstraction.

Defines the operations the pipeline subsystem relies on, whatever SCM and
API version is behind them, and the factory used by the provider registry.
"""

from typing import Protocol

from cyclone_scm.models import BuildStatus, ConnectionConfig, RepoFile


class SCMProviderProtocol(Protocol):
    """Protocol for SCM providers.

    Defines the uniform operation set every provider adapter implements.
    """

    def report_status(
        self,
        status: BuildStatus | str,
        target_url: str,
        repo_url: str,
        commit_sha: str,
    ) -> None:
        """Publish a build status as commit status.

        Args:
            status: Build status of the pipeline record
            target_url: Link to the build record
            repo_url: Repository URL
            commit_sha: Commit to set the status on
        """
        ...

    def list_contents(self, project: str) -> list[RepoFile]:
        """List the repository root of a project.

        Args:
            project: Project path (e.g., "group/project")

        Returns:
            Files and directories in the repository root
        """
        ...

    def get_languages(self, project: str) -> dict[str, float]:
        """Return the language breakdown of a project.

        Args:
            project: Project path (e.g., "group/project")

        Returns:
            Mapping of language name to share in percent
        """
        ...

    def detect_language(self, project: str) -> str:
        """Return the main language of a project, or "" if none is known."""
        ...

    def close(self) -> None:
        """Release the resources held by the provider."""
        ...


class SCMProviderFactoryProtocol(Protocol):
    """Protocol for factories building providers from a connection config."""

    def new_provider(self, config: ConnectionConfig) -> SCMProviderProtocol:
        """Build a provider for ``config``.

        Raises:
            SCMError: If no provider can be built for the config
        """
        ...
