"""Shared pytest fixtures for SuiteForge tests.

This module provides fixtures for:
- Test environment variables
- Client configuration and credentials
- respx-mocked HTTP transport wired into AuthenticatedClient
- Test data factories

Usage:
    @pytest.mark.unit
    async def test_something(client, mock_api):
        mock_api.get("/health").respond(200, json={"status": "ok"})
        outcome = await client.get("/health")
        assert outcome.ok
"""

import os
from collections.abc import AsyncGenerator, Generator

import httpx
import pytest
import pytest_asyncio
import respx

from suiteforge.core.fixtures import FixtureStore
from suiteforge.models import ClientConfig, Credential
from suiteforge.services.client import AuthenticatedClient
from suiteforge.services.reporting import RecordingReporter
from tests.factories.fixture_record import FixtureRecordFactory
from tests.factories.user import UserPayloadFactory

BASE_URL = "https://api.test.local"

# =============================================================================
# Environment Configuration
# =============================================================================


@pytest.fixture(scope="session", autouse=True)
def setup_test_environment() -> Generator[None, None, None]:
    """Set up test environment variables.

    Loads .env file first, then sets defaults for any missing variables.
    """
    from dotenv import load_dotenv

    from suiteforge.config.settings import get_settings

    original_env = os.environ.copy()

    # Load .env file if it exists (won't override existing env vars)
    load_dotenv()

    os.environ.setdefault("SUITEFORGE_BASE_URL", BASE_URL)
    os.environ.setdefault("SUITEFORGE_LOG_LEVEL", "DEBUG")
    get_settings.cache_clear()

    yield

    # Restore original environment
    os.environ.clear()
    os.environ.update(original_env)
    get_settings.cache_clear()


# =============================================================================
# Factory Fixtures
# =============================================================================


@pytest.fixture
def user_payload_factory() -> type[UserPayloadFactory]:
    """Provide factory for user creation payloads."""
    return UserPayloadFactory


@pytest.fixture
def fixture_record_factory() -> type[FixtureRecordFactory]:
    """Provide factory for fixture store records."""
    return FixtureRecordFactory


# =============================================================================
# Client Fixtures
# =============================================================================


@pytest.fixture
def client_config() -> ClientConfig:
    """Client config with instant backoff so retry tests stay fast."""
    return ClientConfig(base_url=BASE_URL, max_attempts=3, base_backoff_ms=0, backoff_cap_ms=0)


@pytest.fixture
def bearer_credential() -> Credential:
    return Credential.bearer("test-token-123")


@pytest.fixture
def reporter() -> RecordingReporter:
    return RecordingReporter()


@pytest.fixture
def mock_api() -> Generator[respx.MockRouter, None, None]:
    """respx router for the test API; unmatched requests fail the test."""
    with respx.mock(base_url=BASE_URL, assert_all_called=False) as router:
        yield router


@pytest_asyncio.fixture
async def client(
    client_config: ClientConfig,
    bearer_credential: Credential,
    reporter: RecordingReporter,
    mock_api: respx.MockRouter,
) -> AsyncGenerator[AuthenticatedClient, None]:
    """AuthenticatedClient whose transport is intercepted by `mock_api`."""
    async with httpx.AsyncClient(base_url=BASE_URL) as transport:
        yield AuthenticatedClient(
            client_config,
            credential=bearer_credential,
            transport=transport,
            reporter=reporter,
        )


@pytest.fixture
def store() -> FixtureStore:
    """Fresh, test-local fixture store."""
    return FixtureStore(name="test-fixtures")


# =============================================================================
# Markers for Test Selection
# =============================================================================

# Usage:
# pytest -m unit          # Run only unit tests
# pytest -m integration   # Run only integration tests
