"""pytest plugin exposing SuiteForge components as fixtures.

Registered through the ``pytest11`` entry point, so installing the
package is enough:

    async def test_create_user(api_client, fixture_store):
        payload = fixture_store.get("default_user", name="John")
        user = await UserBuilder().with_fields(**payload).build(api_client)
        assert user.name == "John"

At session start the plugin also configures structlog from Settings so
toolkit events appear in pytest's captured logs. Set
SUITEFORGE_SETUP_LOGGING=false to keep an existing logging setup.
"""

from collections.abc import AsyncGenerator, Generator

import pytest
import pytest_asyncio

from suiteforge.config.logging import configure_logging
from suiteforge.config.settings import Settings, get_settings
from suiteforge.core.fixtures import FixtureStore, load_fixture_file
from suiteforge.core.fixtures import fixture_store as default_fixture_store
from suiteforge.core.selectors import SelectorMap, load_selector_file
from suiteforge.models.credential import Credential
from suiteforge.services.client import AuthenticatedClient
from suiteforge.services.credentials import SettingsCredentialSource


def pytest_configure(config: pytest.Config) -> None:
    settings = get_settings()
    if settings.setup_logging:
        # pytest installs its own capturing handlers
        configure_logging(settings, install_handler=False)


@pytest.fixture(scope="session")
def suiteforge_settings() -> Settings:
    """Settings read once per session from SUITEFORGE_* env vars."""
    return get_settings()


@pytest.fixture(scope="session")
def selector_map(suiteforge_settings: Settings) -> SelectorMap:
    """Selector map loaded from SUITEFORGE_SELECTORS_PATH.

    Skips the requesting test when no selector file is configured.
    """
    if suiteforge_settings.selectors_path is None:
        pytest.skip("SUITEFORGE_SELECTORS_PATH is not set")
    return load_selector_file(suiteforge_settings.selectors_path)


@pytest.fixture
def fixture_store(suiteforge_settings: Settings) -> Generator[FixtureStore, None, None]:
    """Process-wide fixture store, loaded before and reset after each test."""
    if suiteforge_settings.fixtures_path is not None:
        default_fixture_store.load_all(load_fixture_file(suiteforge_settings.fixtures_path))

    yield default_fixture_store

    default_fixture_store.reset()


@pytest.fixture
def credential(suiteforge_settings: Settings) -> Credential:
    """Credential from SUITEFORGE_API_TOKEN; skips when it is not set."""
    if suiteforge_settings.api_token is None:
        pytest.skip("SUITEFORGE_API_TOKEN is not set")
    return SettingsCredentialSource(suiteforge_settings).get_credential()


@pytest_asyncio.fixture
async def api_client(suiteforge_settings: Settings) -> AsyncGenerator[AuthenticatedClient, None]:
    """AuthenticatedClient for the configured API, closed after the test."""
    async with AuthenticatedClient.from_settings(suiteforge_settings) as client:
        yield client
