"""Fixture store for reusable named test-data records.

The store is process-wide state with two mutation entry points:
`load_all` / `register` during setup and `reset` during teardown.
Reads always hand out deep copies, so a test mutating its record can
never leak into another test.

Note:
    register/reset take no lock. They belong to setup and teardown
    phases and must not run concurrently with tests reading the store.
"""

from __future__ import annotations

import copy
import json
from collections.abc import Iterator, Mapping
from pathlib import Path
from typing import Any

import structlog

from suiteforge.core.exceptions import ConfigError, DuplicateError, NotFoundError

log = structlog.get_logger(__name__)


class FixtureStore:
    """Named fixture records with copy-on-read isolation.

    Example:
        store = FixtureStore()
        store.register("admin_user", {"name": "Admin", "role": "admin"})

        user = store.get("admin_user", name="Other Admin")
        user["role"] = "viewer"  # does not affect the stored record
    """

    def __init__(self, name: str = "fixtures") -> None:
        self.name = name
        self._records: dict[str, dict[str, Any]] = {}

    def _check_entry(self, name: str, record: Mapping[str, Any]) -> None:
        if not isinstance(name, str) or not name.strip():
            raise ConfigError(f"Invalid fixture name: {name!r}", source=self.name)
        if not isinstance(record, Mapping):
            raise ConfigError(
                f"Fixture '{name}' must be a mapping, got {type(record).__name__}",
                source=self.name,
            )
        if name in self._records:
            raise DuplicateError(name=name, registry=self.name)

    def register(self, name: str, record: Mapping[str, Any]) -> None:
        """Register a record under `name`.

        The record is deep-copied, so later changes to the caller's object
        are not visible through the store.

        Raises:
            DuplicateError: If `name` is already registered.
            ConfigError: If `name` is empty or `record` is not a mapping.
        """
        self._check_entry(name, record)
        self._records[name] = copy.deepcopy(dict(record))
        log.debug("fixture_registered", store=self.name, fixture=name)

    def load_all(self, source: Mapping[str, Mapping[str, Any]]) -> int:
        """Register every record in `source`, or none of them.

        Returns:
            Number of records registered.

        Raises:
            ConfigError: If `source` is not a mapping of mappings.
            DuplicateError: If a record name is already registered.
        """
        if not isinstance(source, Mapping):
            raise ConfigError(
                f"Fixture source must be a mapping, got {type(source).__name__}",
                source=self.name,
            )
        # Validate everything first so a failed load leaves the store untouched
        for name, record in source.items():
            self._check_entry(name, record)
        for name, record in source.items():
            self.register(name, record)

        log.info("fixtures_loaded", store=self.name, count=len(source))
        return len(source)

    def get(self, name: str, /, **overrides: Any) -> dict[str, Any]:
        """Return an independent copy of the record, with optional overrides.

        Overrides are merged at the top level of the copy only; the stored
        record is never changed.

        Raises:
            NotFoundError: If `name` is not registered.
        """
        try:
            record = self._records[name]
        except KeyError:
            raise NotFoundError(name=name, registry=self.name) from None

        result = copy.deepcopy(record)
        result.update(copy.deepcopy(overrides))
        return result

    def reset(self) -> None:
        """Remove all records. Safe to call on an empty store."""
        count = len(self._records)
        self._records.clear()
        if count:
            log.debug("fixtures_reset", store=self.name, count=count)

    def names(self) -> list[str]:
        return sorted(self._records)

    def __contains__(self, name: object) -> bool:
        return name in self._records

    def __len__(self) -> int:
        return len(self._records)

    def __iter__(self) -> Iterator[str]:
        return iter(self.names())


def _reject_duplicate_keys(pairs: list[tuple[str, Any]]) -> dict[str, Any]:
    seen: dict[str, Any] = {}
    for key, value in pairs:
        if key in seen:
            raise ConfigError(f"Duplicate fixture key: {key}")
        seen[key] = value
    return seen


def load_fixture_file(path: str | Path) -> dict[str, dict[str, Any]]:
    """Read a JSON document of named fixture records.

    Returns the parsed records for `FixtureStore.load_all`; the store
    itself never touches the filesystem. A key repeated inside one JSON
    object is rejected rather than silently keeping the last value.

    Raises:
        ConfigError: If the file cannot be read, is not valid JSON, or is
            not an object of objects.
    """
    path = Path(path)
    try:
        text = path.read_text(encoding="utf-8")
    except OSError as e:
        raise ConfigError(f"Cannot read fixture file: {e}", source=str(path)) from e

    try:
        data = json.loads(text, object_pairs_hook=_reject_duplicate_keys)
    except json.JSONDecodeError as e:
        raise ConfigError(f"Invalid JSON: {e}", source=str(path)) from e
    except ConfigError as e:
        raise ConfigError(str(e), source=str(path)) from e

    if not isinstance(data, dict):
        raise ConfigError("Fixture file must contain a JSON object", source=str(path))
    for name, record in data.items():
        if not isinstance(record, dict):
            raise ConfigError(f"Fixture '{name}' must be a JSON object", source=str(path))
    return data


# Process-wide default store
fixture_store = FixtureStore()
