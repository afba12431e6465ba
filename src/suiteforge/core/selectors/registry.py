"""Selector registry.

Maps dotted logical names (``login.username``) to locator strings for a
UI automation tool. A SelectorMap is built once from a static source and
never mutated, so any number of tests may read it concurrently.

Sources may be flat or nested:

    {"login.username": "#user-input"}
    {"login": {"username": "#user-input", "password": "#pass-input"}}

Both forms produce the same dotted keys; a collision between them is a
ConfigError.
"""

from __future__ import annotations

import json
from collections.abc import Iterator, Mapping
from pathlib import Path
from types import MappingProxyType
from typing import Any

import structlog

from suiteforge.core.exceptions import ConfigError, NotFoundError

log = structlog.get_logger(__name__)

_MISSING = object()


class SelectorMap(Mapping[str, str]):
    """Immutable mapping of dotted selector names to locators.

    A missing name is always an error: `map[name]`, `resolve(name)` and
    `get(name)` raise NotFoundError. Only `get(name, default)` with an
    explicit default returns a fallback.

    Attributes:
        name: Registry label used in error messages.
    """

    __slots__ = ("_entries", "name")

    def __init__(self, entries: Mapping[str, str], name: str = "selectors") -> None:
        self._entries = MappingProxyType(dict(entries))
        self.name = name

    def __getitem__(self, key: str) -> str:
        try:
            return self._entries[key]
        except KeyError:
            raise NotFoundError(name=key, registry=self.name) from None

    def __iter__(self) -> Iterator[str]:
        return iter(self._entries)

    def __len__(self) -> int:
        return len(self._entries)

    def get(self, key: str, default: Any = _MISSING) -> Any:
        if default is _MISSING:
            return self[key]
        return self._entries.get(key, default)

    def __repr__(self) -> str:
        return f"SelectorMap(name={self.name!r}, entries={len(self)})"

    def resolve(self, name: str) -> str:
        """Return the locator stored under `name`.

        Raises:
            NotFoundError: If `name` has no entry.
        """
        return self[name]

    def scoped(self, prefix: str) -> SelectorMap:
        """Return the entries under `prefix` with the prefix stripped.

        Useful for page objects:

            login = selectors.scoped("login")
            page.fill(login["username"], "john")

        Raises:
            NotFoundError: If no entry lives under `prefix`.
        """
        head = prefix.rstrip(".") + "."
        entries = {key[len(head):]: value for key, value in self._entries.items() if key.startswith(head)}
        if not entries:
            raise NotFoundError(name=prefix, registry=self.name)
        return SelectorMap(entries, name=f"{self.name}:{prefix.rstrip('.')}")


def _flatten(node: Mapping[str, Any], prefix: str, out: dict[str, str], source: str | None) -> None:
    for key, value in node.items():
        if not isinstance(key, str) or not key.strip(". "):
            raise ConfigError(f"Invalid selector name {key!r} under '{prefix or '<root>'}'", source=source)

        dotted = f"{prefix}.{key}" if prefix else key
        if isinstance(value, Mapping):
            _flatten(value, dotted, out, source)
            continue
        if not isinstance(value, str):
            raise ConfigError(
                f"Selector '{dotted}' must map to a string, got {type(value).__name__}",
                source=source,
            )
        if dotted in out:
            raise ConfigError(f"Duplicate selector name: {dotted}", source=source)
        out[dotted] = value


def load_selectors(
    source: Mapping[str, Any],
    *,
    name: str = "selectors",
    origin: str | None = None,
) -> SelectorMap:
    """Build a SelectorMap from a key-value source.

    Args:
        source: Flat or nested mapping of names to locator strings.
        name: Registry label used in lookup errors.
        origin: Where the source came from (file path), for error messages.

    Returns:
        An immutable SelectorMap.

    Raises:
        ConfigError: If the source is not a mapping, a value is not a string,
            or two entries resolve to the same dotted name.
    """
    if not isinstance(source, Mapping):
        raise ConfigError(
            f"Selector source must be a mapping, got {type(source).__name__}",
            source=origin,
        )

    entries: dict[str, str] = {}
    _flatten(source, "", entries, origin)

    log.debug("selectors_loaded", registry=name, count=len(entries), origin=origin)
    return SelectorMap(entries, name=name)


def _reject_duplicate_keys(pairs: list[tuple[str, Any]]) -> dict[str, Any]:
    seen: dict[str, Any] = {}
    for key, value in pairs:
        if key in seen:
            raise ConfigError(f"Duplicate selector name: {key}")
        seen[key] = value
    return seen


def load_selector_file(path: str | Path, *, name: str = "selectors") -> SelectorMap:
    """Load a SelectorMap from a JSON document.

    Duplicate keys inside one JSON object are rejected (the json module
    would otherwise keep the last one silently).

    Raises:
        ConfigError: If the file cannot be read or parsed, or holds invalid entries.
    """
    path = Path(path)
    try:
        text = path.read_text(encoding="utf-8")
    except OSError as e:
        raise ConfigError(f"Cannot read selector file: {e}", source=str(path)) from e

    try:
        data = json.loads(text, object_pairs_hook=_reject_duplicate_keys)
    except json.JSONDecodeError as e:
        raise ConfigError(f"Invalid JSON: {e}", source=str(path)) from e
    except ConfigError as e:
        raise ConfigError(str(e), source=str(path)) from e

    return load_selectors(data, name=name, origin=str(path))


def resolve(selectors: SelectorMap, name: str) -> str:
    """Return the locator for `name`.

    Raises:
        NotFoundError: If `name` has no entry.
    """
    return selectors.resolve(name)
