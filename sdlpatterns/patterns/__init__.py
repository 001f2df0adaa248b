"""Pattern registry and detection engine."""

from __future__ import annotations

from sdlpatterns.patterns.base import Matcher as Matcher
from sdlpatterns.patterns.engine import CancelToken as CancelToken, analyze as analyze
from sdlpatterns.patterns.errors import (
    AnalysisCancelled as AnalysisCancelled,
    AnalysisError as AnalysisError,
)
from sdlpatterns.patterns.registry import (
    PatternRegistry as PatternRegistry,
    default_registry as default_registry,
)
from sdlpatterns.patterns.types import (
    AnalysisResult as AnalysisResult,
    Confidence as Confidence,
    Finding as Finding,
    MatcherFailure as MatcherFailure,
)

__all__ = [
    "AnalysisCancelled",
    "AnalysisError",
    "AnalysisResult",
    "CancelToken",
    "Confidence",
    "Finding",
    "Matcher",
    "MatcherFailure",
    "PatternRegistry",
    "analyze",
    "default_registry",
]
