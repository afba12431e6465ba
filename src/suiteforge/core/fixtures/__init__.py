"""Fixture store: named, isolated test-data records."""

from suiteforge.core.fixtures.store import FixtureStore, fixture_store, load_fixture_file

__all__ = ["FixtureStore", "fixture_store", "load_fixture_file"]
