"""Selector registry: dotted names to UI locators."""

from suiteforge.core.selectors.registry import (
    SelectorMap,
    load_selector_file,
    load_selectors,
    resolve,
)

__all__ = ["SelectorMap", "load_selector_file", "load_selectors", "resolve"]
