"""Run every registered matcher over a schema graph and merge the findings.

Matchers only read the graph, so they run side by side on a thread pool
without locking. The merge is the single synchronization point: findings
are sorted into a total order so output never depends on which matcher
finished first.
"""

from __future__ import annotations

import threading
import time
from collections.abc import Callable
from concurrent.futures import FIRST_COMPLETED, Future, ThreadPoolExecutor, wait

from sdlpatterns.patterns.base import Matcher
from sdlpatterns.patterns.errors import AnalysisCancelled, AnalysisError
from sdlpatterns.patterns.registry import PatternRegistry, default_registry
from sdlpatterns.patterns.types import AnalysisResult, Finding, MatcherFailure
from sdlpatterns.sdl.graph import SchemaGraph

# How often a waiting engine re-checks the cancel token, in seconds.
_POLL_INTERVAL = 0.05


class CancelToken:
    """Caller-owned cancellation flag with an optional deadline."""

    def __init__(self, timeout: float | None = None):
        self._event = threading.Event()
        self._deadline = time.monotonic() + timeout if timeout is not None else None

    def cancel(self) -> None:
        self._event.set()

    @property
    def cancelled(self) -> bool:
        if self._event.is_set():
            return True
        if self._deadline is not None and time.monotonic() >= self._deadline:
            self._event.set()
            return True
        return False

    def raise_if_cancelled(self) -> None:
        if self.cancelled:
            raise AnalysisCancelled("analysis cancelled")


def analyze(
    graph: SchemaGraph,
    registry: PatternRegistry | None = None,
    *,
    max_workers: int | None = None,
    cancel: CancelToken | None = None,
    on_failure: Callable[[MatcherFailure], None] | None = None,
) -> AnalysisResult:
    """Evaluate ``registry`` (the built-in matchers by default) on ``graph``.

    A matcher that raises, or returns anything but Findings, is recorded as a
    MatcherFailure and the run continues. Raises AnalysisCancelled when
    ``cancel`` fires before every matcher has reported.
    """
    if registry is None:
        registry = default_registry()
    matchers = list(registry)
    if cancel is not None:
        cancel.raise_if_cancelled()

    outcomes: dict[str, list[Finding] | MatcherFailure] = {}
    if max_workers == 1 or len(matchers) <= 1:
        for matcher in matchers:
            if cancel is not None:
                cancel.raise_if_cancelled()
            outcomes[matcher.name] = _evaluate(matcher, graph)
    else:
        outcomes = _evaluate_concurrently(matchers, graph, max_workers, cancel)

    if cancel is not None:
        cancel.raise_if_cancelled()

    result = AnalysisResult()
    for matcher in matchers:
        outcome = outcomes[matcher.name]
        if isinstance(outcome, MatcherFailure):
            result.failures.append(outcome)
            if on_failure:
                on_failure(outcome)
        else:
            result.findings.extend(outcome)
    result.findings.sort(key=Finding.sort_key)
    result.failures.sort(key=lambda f: (f.pattern_id, f.matcher))
    return result


def _evaluate_concurrently(
    matchers: list[Matcher],
    graph: SchemaGraph,
    max_workers: int | None,
    cancel: CancelToken | None,
) -> dict[str, list[Finding] | MatcherFailure]:
    outcomes: dict[str, list[Finding] | MatcherFailure] = {}
    executor = ThreadPoolExecutor(max_workers=max_workers, thread_name_prefix="matcher")
    try:
        pending: dict[Future[list[Finding] | MatcherFailure], Matcher] = {
            executor.submit(_evaluate, matcher, graph): matcher for matcher in matchers
        }
        while pending:
            timeout = _POLL_INTERVAL if cancel is not None else None
            done, _ = wait(pending, timeout=timeout, return_when=FIRST_COMPLETED)
            if cancel is not None and cancel.cancelled:
                raise AnalysisCancelled("analysis cancelled")
            for future in done:
                matcher = pending.pop(future)
                outcomes[matcher.name] = future.result()
    except AnalysisCancelled:
        executor.shutdown(wait=False, cancel_futures=True)
        raise
    executor.shutdown(wait=True)
    return outcomes


def _evaluate(matcher: Matcher, graph: SchemaGraph) -> list[Finding] | MatcherFailure:
    """Run one matcher, turning any fault into a MatcherFailure."""
    try:
        findings = matcher.detect(graph)
    except AnalysisCancelled:
        raise
    except Exception as e:
        return _failure(matcher, f"{type(e).__name__}: {e}", e)

    if not isinstance(findings, (list, tuple)):
        return _failure(matcher, f"detect() returned {type(findings).__name__}, expected a list")
    for item in findings:
        if not isinstance(item, Finding):
            return _failure(matcher, f"detect() returned a {type(item).__name__}, expected Finding")
    return list(findings)


def _failure(matcher: Matcher, message: str, cause: BaseException | None = None) -> MatcherFailure:
    error = AnalysisError(
        f"matcher {matcher.name!r} failed: {message}",
        pattern_id=matcher.pattern_id,
        matcher=matcher.name,
    )
    error.__cause__ = cause
    return MatcherFailure(matcher=matcher.name, pattern_id=matcher.pattern_id, error=error)
