"""Errors raised by the detection engine."""

from __future__ import annotations


class AnalysisError(Exception):
    """An internal failure while evaluating matchers.

    When one matcher breaks, the engine wraps the cause in an AnalysisError
    attached to a MatcherFailure and carries on with the others.
    """

    def __init__(self, message: str, pattern_id: str | None = None, matcher: str | None = None):
        super().__init__(message)
        self.pattern_id = pattern_id
        self.matcher = matcher


class AnalysisCancelled(AnalysisError):
    """The caller's cancel token fired; no findings are returned."""
