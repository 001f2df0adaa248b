"""Tests for sdlpatterns/patterns/engine.py."""

from __future__ import annotations

import threading

import pytest

from sdlpatterns.patterns.base import Matcher
from sdlpatterns.patterns.engine import CancelToken, analyze
from sdlpatterns.patterns.errors import AnalysisCancelled, AnalysisError
from sdlpatterns.patterns.matchers import ArgumentAsSelector
from sdlpatterns.patterns.registry import PatternRegistry
from sdlpatterns.patterns.types import Finding, MatcherFailure
from sdlpatterns.sdl.graph import SchemaGraph
from sdlpatterns.sdl.parser import parse_sdl
from tests.conftest import BoomMatcher, StubMatcher

SCENARIO_SDL = "type Query { user(id: ID): User }\ntype User { id: ID }"


class WrongReturnMatcher(Matcher):
    pattern_id = "wrong-return"

    def detect(self, graph: SchemaGraph) -> list[Finding]:
        return "nope"  # type: ignore[return-value]


class SlowMatcher(Matcher):
    """Blocks until released, or gives up after a few seconds."""

    pattern_id = "slow"

    def __init__(self) -> None:
        super().__init__()
        self.release = threading.Event()

    def detect(self, graph: SchemaGraph) -> list[Finding]:
        self.release.wait(timeout=5)
        return []


class CancellingMatcher(Matcher):
    """Fires the cancel token from inside a run."""

    pattern_id = "cancelling"

    def __init__(self, token: CancelToken) -> None:
        super().__init__()
        self.token = token

    def detect(self, graph: SchemaGraph) -> list[Finding]:
        self.token.cancel()
        return [self.finding("Query", "cancelled the run")]


class TestAnalyze:
    def test_default_registry(self) -> None:
        result = analyze(parse_sdl(SCENARIO_SDL))
        selector = result.by_pattern("argument-as-selector")
        assert [f.subject for f in selector] == ["Query.user"]
        assert result.failures == []

    def test_findings_sorted(self, catalog_graph) -> None:
        result = analyze(catalog_graph)
        keys = [f.sort_key() for f in result.findings]
        assert keys == sorted(keys)
        assert len(result) == len(result.findings) > 0
        assert list(result) == result.findings

    def test_deterministic(self, catalog_graph) -> None:
        first = analyze(catalog_graph)
        second = analyze(catalog_graph)
        sequential = analyze(catalog_graph, max_workers=1)
        assert first.findings == second.findings == sequential.findings

    def test_order_independent_of_registration(self, catalog_graph) -> None:
        forward = PatternRegistry([StubMatcher("B", name="b"), StubMatcher("A", name="a")])
        backward = PatternRegistry([StubMatcher("A", name="a"), StubMatcher("B", name="b")])
        assert analyze(catalog_graph, forward).findings == analyze(catalog_graph, backward).findings
        assert [f.subject_type for f in analyze(catalog_graph, forward)] == ["A", "B"]

    def test_duplicate_findings_keep_provenance(self) -> None:
        registry = PatternRegistry([ArgumentAsSelector(), ArgumentAsSelector(name="selector-copy")])
        result = analyze(parse_sdl(SCENARIO_SDL), registry)
        assert [(f.subject, f.matcher) for f in result] == [
            ("Query.user", "argument-as-selector"),
            ("Query.user", "selector-copy"),
        ]

    def test_empty_registry(self, catalog_graph) -> None:
        result = analyze(catalog_graph, PatternRegistry())
        assert result.findings == [] and result.failures == []


class TestMatcherIsolation:
    @pytest.mark.parametrize("workers", [1, None])
    def test_faulty_matcher_does_not_hide_others(self, workers: int | None) -> None:
        registry = PatternRegistry([BoomMatcher(), ArgumentAsSelector()])
        result = analyze(parse_sdl(SCENARIO_SDL), registry, max_workers=workers)
        assert [f.subject for f in result] == ["Query.user"]
        assert result.failed_patterns == ["boom"]
        failure = result.failures[0]
        assert isinstance(failure.error, AnalysisError)
        assert isinstance(failure.error.__cause__, RuntimeError)
        assert failure.message == "matcher 'boom' failed: RuntimeError: boom"
        assert failure.error.pattern_id == "boom"

    def test_wrong_return_type(self) -> None:
        result = analyze(parse_sdl(SCENARIO_SDL), PatternRegistry([WrongReturnMatcher()]))
        assert result.findings == []
        assert "detect() returned str, expected a list" in result.failures[0].message

    def test_on_failure_callback(self) -> None:
        seen: list[MatcherFailure] = []
        registry = PatternRegistry([BoomMatcher(), StubMatcher()])
        analyze(parse_sdl(SCENARIO_SDL), registry, on_failure=seen.append)
        assert [f.matcher for f in seen] == ["boom"]


class TestCancellation:
    def test_token_states(self) -> None:
        token = CancelToken()
        assert not token.cancelled
        token.cancel()
        assert token.cancelled
        with pytest.raises(AnalysisCancelled):
            token.raise_if_cancelled()

    def test_deadline(self) -> None:
        assert CancelToken(timeout=0).cancelled
        assert not CancelToken(timeout=60).cancelled

    @pytest.mark.parametrize("workers", [1, 4])
    def test_cancelled_before_start(self, catalog_graph, workers: int) -> None:
        token = CancelToken()
        token.cancel()
        with pytest.raises(AnalysisCancelled):
            analyze(catalog_graph, max_workers=workers, cancel=token)

    def test_cancelled_mid_run_returns_nothing(self, catalog_graph) -> None:
        token = CancelToken()
        registry = PatternRegistry([CancellingMatcher(token), StubMatcher()])
        with pytest.raises(AnalysisCancelled):
            analyze(catalog_graph, registry, max_workers=1, cancel=token)

    def test_deadline_stops_waiting_on_slow_matcher(self, catalog_graph) -> None:
        slow = SlowMatcher()
        registry = PatternRegistry([slow, StubMatcher()])
        try:
            with pytest.raises(AnalysisCancelled):
                analyze(catalog_graph, registry, max_workers=2, cancel=CancelToken(timeout=0.1))
        finally:
            slow.release.set()

    def test_cancelled_is_an_analysis_error(self) -> None:
        assert issubclass(AnalysisCancelled, AnalysisError)
