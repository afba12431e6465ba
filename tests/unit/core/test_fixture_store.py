"""Unit tests for FixtureStore."""

import json
from pathlib import Path

import pytest

from suiteforge.core.exceptions import ConfigError, DuplicateError, NotFoundError
from suiteforge.core.fixtures import FixtureStore, load_fixture_file


@pytest.mark.unit
class TestRegisterAndGet:
    """Tests for register/get round trips and isolation."""

    def test_get_returns_equal_record(self, store: FixtureStore, fixture_record_factory) -> None:
        record = fixture_record_factory()
        store.register("customer", record)

        assert store.get("customer") == record

    def test_mutating_returned_copy_does_not_leak(self, store: FixtureStore, fixture_record_factory) -> None:
        """
        Given: A registered nested record
        When: A test mutates the copy it received
        Then: The next get() returns the original values
        """
        record = fixture_record_factory()
        store.register("customer", record)

        first = store.get("customer")
        first["username"] = "changed"
        first["profile"]["address"]["city"] = "Nowhere"
        first["tags"].append("leaked")

        assert store.get("customer") == record

    def test_mutating_registered_source_does_not_leak(self, store: FixtureStore) -> None:
        record = {"name": "John", "roles": ["viewer"]}
        store.register("john", record)

        record["roles"].append("admin")

        assert store.get("john")["roles"] == ["viewer"]

    def test_register_same_name_twice_raises_duplicate(self, store: FixtureStore) -> None:
        store.register("admin", {"role": "admin"})

        with pytest.raises(DuplicateError) as exc_info:
            store.register("admin", {"role": "other"})

        assert exc_info.value.name == "admin"
        assert store.get("admin") == {"role": "admin"}

    def test_get_missing_raises_not_found(self, store: FixtureStore) -> None:
        with pytest.raises(NotFoundError, match="test-fixtures: no entry named 'ghost'"):
            store.get("ghost")

    @pytest.mark.parametrize("name", ["", "   "])
    def test_blank_name_raises_config_error(self, store: FixtureStore, name: str) -> None:
        with pytest.raises(ConfigError):
            store.register(name, {})

    def test_non_mapping_record_raises_config_error(self, store: FixtureStore) -> None:
        with pytest.raises(ConfigError, match="must be a mapping"):
            store.register("bad", ["a", "b"])  # type: ignore[arg-type]


@pytest.mark.unit
class TestOverrides:
    """Tests for scoped overrides on get()."""

    def test_overrides_are_applied_to_copy(self, store: FixtureStore) -> None:
        store.register("user", {"name": "John", "email": "j@x.com"})

        user = store.get("user", email="other@x.com", active=False)

        assert user == {"name": "John", "email": "other@x.com", "active": False}

    def test_overrides_do_not_persist(self, store: FixtureStore) -> None:
        store.register("user", {"name": "John"})

        store.get("user", name="Jane")

        assert store.get("user") == {"name": "John"}


@pytest.mark.unit
class TestLifecycle:
    """Tests for load_all and reset."""

    def test_load_all_registers_every_record(self, store: FixtureStore) -> None:
        count = store.load_all({"a": {"x": 1}, "b": {"y": 2}})

        assert count == 2
        assert store.names() == ["a", "b"]
        assert "a" in store
        assert len(store) == 2

    def test_load_all_rejects_existing_names(self, store: FixtureStore) -> None:
        store.register("a", {})
        with pytest.raises(DuplicateError):
            store.load_all({"a": {"x": 1}})

    def test_failed_load_all_registers_nothing(self, store: FixtureStore) -> None:
        """
        Given: A store already holding "b"
        When: load_all is given "a" followed by the clashing "b"
        Then: DuplicateError is raised and "a" was not registered
        """
        store.register("b", {"v": 1})

        with pytest.raises(DuplicateError):
            store.load_all({"a": {}, "b": {}})

        assert store.names() == ["b"]
        assert store.get("b") == {"v": 1}

    def test_invalid_record_in_load_all_registers_nothing(self, store: FixtureStore) -> None:
        with pytest.raises(ConfigError):
            store.load_all({"a": {"x": 1}, "b": "not-a-record"})  # type: ignore[dict-item]

        assert len(store) == 0

    def test_reset_clears_records(self, store: FixtureStore) -> None:
        store.load_all({"a": {}, "b": {}})

        store.reset()

        assert len(store) == 0
        with pytest.raises(NotFoundError):
            store.get("a")

    def test_reset_is_idempotent(self, store: FixtureStore) -> None:
        store.reset()
        store.reset()
        assert store.names() == []

    def test_name_can_be_registered_again_after_reset(self, store: FixtureStore) -> None:
        store.register("a", {"v": 1})
        store.reset()
        store.register("a", {"v": 2})
        assert store.get("a") == {"v": 2}


@pytest.mark.unit
class TestLoadFixtureFile:
    """Tests for the JSON fixture source."""

    def test_reads_named_records(self, tmp_path: Path) -> None:
        path = tmp_path / "fixtures.json"
        path.write_text(json.dumps({"admin": {"role": "admin"}}), encoding="utf-8")

        assert load_fixture_file(path) == {"admin": {"role": "admin"}}

    def test_non_object_record_raises(self, tmp_path: Path) -> None:
        path = tmp_path / "fixtures.json"
        path.write_text(json.dumps({"admin": "role=admin"}), encoding="utf-8")

        with pytest.raises(ConfigError, match="'admin' must be a JSON object"):
            load_fixture_file(path)

    def test_top_level_array_raises(self, tmp_path: Path) -> None:
        path = tmp_path / "fixtures.json"
        path.write_text("[]", encoding="utf-8")

        with pytest.raises(ConfigError, match="must contain a JSON object"):
            load_fixture_file(path)

    def test_invalid_json_raises(self, tmp_path: Path) -> None:
        path = tmp_path / "fixtures.json"
        path.write_text("{", encoding="utf-8")

        with pytest.raises(ConfigError, match="Invalid JSON"):
            load_fixture_file(path)

    def test_duplicate_fixture_name_raises(self, tmp_path: Path) -> None:
        """
        Given: A fixture file defining "admin" twice
        When: load_fixture_file is called
        Then: ConfigError names the duplicate and the file
        """
        path = tmp_path / "fixtures.json"
        path.write_text('{"admin": {"role": "admin"}, "admin": {"role": "viewer"}}', encoding="utf-8")

        with pytest.raises(ConfigError, match="Duplicate fixture key: admin") as exc_info:
            load_fixture_file(path)

        assert exc_info.value.source == str(path)

    def test_duplicate_key_inside_record_raises(self, tmp_path: Path) -> None:
        path = tmp_path / "fixtures.json"
        path.write_text('{"admin": {"role": "admin", "role": "viewer"}}', encoding="utf-8")

        with pytest.raises(ConfigError, match="Duplicate fixture key: role"):
            load_fixture_file(path)
