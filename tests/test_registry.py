"""Tests for the SCM provider registry."""

from unittest.mock import MagicMock

import pytest

from cyclone_scm.gitlab.factory import GitLabProviderFactory
from cyclone_scm.gitlab.version_cache import VersionCache
from cyclone_scm.models import ConnectionConfig, SCMType
from cyclone_scm.registry import SCMProviderRegistry, get_default_registry


def test_register_and_get_factory() -> None:
    registry = SCMProviderRegistry()
    factory = MagicMock()

    registry.register(SCMType.GITLAB, factory)

    assert registry.get_factory(SCMType.GITLAB) is factory
    assert registry.list_providers() == [SCMType.GITLAB]


def test_register_duplicate() -> None:
    registry = SCMProviderRegistry()
    registry.register(SCMType.GITLAB, MagicMock())

    with pytest.raises(ValueError, match="Provider already registered: Gitlab"):
        registry.register(SCMType.GITLAB, MagicMock())


def test_get_factory_unknown() -> None:
    with pytest.raises(ValueError, match="Provider not found: Gitlab"):
        SCMProviderRegistry().get_factory(SCMType.GITLAB)


def test_new_provider_delegates_to_factory() -> None:
    registry = SCMProviderRegistry()
    factory = MagicMock()
    registry.register(SCMType.GITLAB, factory)
    config = ConnectionConfig(server="https://gitlab.example.com", token="t")

    provider = registry.new_provider(SCMType.GITLAB, config)

    factory.new_provider.assert_called_once_with(config)
    assert provider is factory.new_provider.return_value


def test_default_registry() -> None:
    cache = VersionCache()

    registry = get_default_registry(cache=cache)

    factory = registry.get_factory(SCMType.GITLAB)
    assert isinstance(factory, GitLabProviderFactory)
    assert factory.cache is cache
    factory.close()
