"""Tests for sdlpatterns/patterns/registry.py."""

from __future__ import annotations

import pytest

from sdlpatterns.patterns.matchers import BUILTIN_MATCHERS, ValueObject
from sdlpatterns.patterns.registry import PatternRegistry, default_registry
from tests.conftest import StubMatcher


class TestPatternRegistry:
    def test_register_and_lookup(self) -> None:
        registry = PatternRegistry()
        stub = registry.register(StubMatcher())
        assert "stub" in registry
        assert registry.get("stub") is stub
        assert registry.get("missing") is None
        assert len(registry) == 1

    def test_duplicate_name_rejected(self) -> None:
        registry = PatternRegistry([StubMatcher()])
        with pytest.raises(ValueError, match="already registered"):
            registry.register(StubMatcher())

    def test_same_pattern_under_two_names(self) -> None:
        registry = PatternRegistry([StubMatcher(), StubMatcher(name="stub-2")])
        assert len(registry) == 2
        assert registry.pattern_ids == ["stub"]

    def test_unregister(self) -> None:
        registry = PatternRegistry([StubMatcher(), ValueObject()])
        removed = registry.unregister("stub")
        assert removed.name == "stub"
        assert [m.name for m in registry] == ["value-object"]
        with pytest.raises(KeyError, match="no matcher named 'stub'"):
            registry.unregister("stub")

    def test_iteration_survives_mutation(self) -> None:
        registry = PatternRegistry([StubMatcher(), ValueObject()])
        for matcher in registry:
            registry.unregister(matcher.name)
        assert len(registry) == 0


class TestSelect:
    def test_only(self) -> None:
        selected = default_registry().select(only=["value-object", "cursor-connection"])
        assert selected.pattern_ids == ["cursor-connection", "value-object"]

    def test_skip(self) -> None:
        registry = default_registry()
        selected = registry.select(skip=["value-object"])
        assert len(selected) == len(registry) - 1
        assert "value-object" not in selected

    def test_select_by_matcher_name(self) -> None:
        registry = PatternRegistry([StubMatcher(name="custom")])
        assert len(registry.select(only=["custom"])) == 1
        assert len(registry.select(only=["stub"])) == 1

    def test_unknown_ids(self) -> None:
        with pytest.raises(ValueError, match="unknown pattern"):
            default_registry().select(only=["no-such-pattern"])

    def test_select_leaves_original_untouched(self) -> None:
        registry = default_registry()
        registry.select(only=["value-object"])
        assert len(registry) == len(BUILTIN_MATCHERS)


class TestDefaultRegistry:
    def test_all_builtins_in_order(self) -> None:
        registry = default_registry()
        assert registry.pattern_ids == [cls.pattern_id for cls in BUILTIN_MATCHERS]

    def test_fresh_each_call(self) -> None:
        first = default_registry()
        first.unregister("value-object")
        assert "value-object" in default_registry()
