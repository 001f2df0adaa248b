"""Records produced by the detection engine."""

from __future__ import annotations

from collections.abc import Iterator
from dataclasses import dataclass, field
from enum import Enum

from sdlpatterns.patterns.errors import AnalysisError


class Confidence(str, Enum):
    HIGH = "high"
    MEDIUM = "medium"
    LOW = "low"


@dataclass(frozen=True)
class Finding:
    """One detected pattern occurrence."""

    pattern_id: str
    subject_type: str
    rationale: str
    subject_field: str | None = None
    confidence: Confidence = Confidence.HIGH
    matcher: str = ""  # provenance: name of the registered matcher

    @property
    def subject(self) -> str:
        if self.subject_field:
            return f"{self.subject_type}.{self.subject_field}"
        return self.subject_type

    def sort_key(self) -> tuple[str, str, str, str, str]:
        return (
            self.subject_type,
            self.pattern_id,
            self.subject_field or "",
            self.matcher,
            self.rationale,
        )


@dataclass(frozen=True)
class MatcherFailure:
    """A matcher that could not be evaluated."""

    matcher: str
    pattern_id: str
    error: AnalysisError

    @property
    def message(self) -> str:
        return str(self.error)


@dataclass
class AnalysisResult:
    """Ordered findings plus the matchers that failed along the way."""

    findings: list[Finding] = field(default_factory=lambda: list[Finding]())
    failures: list[MatcherFailure] = field(default_factory=lambda: list[MatcherFailure]())

    def __iter__(self) -> Iterator[Finding]:
        return iter(self.findings)

    def __len__(self) -> int:
        return len(self.findings)

    @property
    def failed_patterns(self) -> list[str]:
        return sorted({f.pattern_id for f in self.failures})

    def by_pattern(self, pattern_id: str) -> list[Finding]:
        return [f for f in self.findings if f.pattern_id == pattern_id]
