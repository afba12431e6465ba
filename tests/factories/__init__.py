"""Test data factories using factory_boy.

These factories generate realistic payloads for SuiteForge tests.
"""

from tests.factories.fixture_record import FixtureRecordFactory
from tests.factories.user import UserPayloadFactory, UserResponseFactory

__all__ = [
    "FixtureRecordFactory",
    "UserPayloadFactory",
    "UserResponseFactory",
]
