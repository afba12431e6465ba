"""SuiteForge - test-support toolkit.

Selector registry, fixture store, authenticated API client and entity
builders for automated test suites.

Usage:
    from suiteforge import AuthenticatedClient, ClientConfig, UserBuilder

    async with AuthenticatedClient(ClientConfig(base_url="https://api.test")) as client:
        user = await UserBuilder().with_name("John").build(client)
"""

from suiteforge.core.fixtures import FixtureStore, fixture_store
from suiteforge.core.selectors import SelectorMap, load_selector_file, load_selectors, resolve
from suiteforge.models import ClientConfig, Credential, Entity, User
from suiteforge.services.builder import EntityBuilder, UserBuilder
from suiteforge.services.client import AuthenticatedClient

__version__ = "0.1.0"

__all__ = [
    "AuthenticatedClient",
    "ClientConfig",
    "Credential",
    "Entity",
    "EntityBuilder",
    "FixtureStore",
    "SelectorMap",
    "User",
    "UserBuilder",
    "fixture_store",
    "load_selector_file",
    "load_selectors",
    "resolve",
]
