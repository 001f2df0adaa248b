"""Pydantic models for the analysis report format (.json / .yaml)."""

from __future__ import annotations

from typing import Any

import yaml
from pydantic import BaseModel

from sdlpatterns.patterns.types import AnalysisResult, Finding, MatcherFailure


class FindingRecord(BaseModel):
    pattern_id: str
    subject: str
    subject_type: str
    subject_field: str | None = None
    confidence: str = "high"
    matcher: str = ""
    rationale: str

    @classmethod
    def from_finding(cls, finding: Finding) -> FindingRecord:
        return cls(
            pattern_id=finding.pattern_id,
            subject=finding.subject,
            subject_type=finding.subject_type,
            subject_field=finding.subject_field,
            confidence=finding.confidence.value,
            matcher=finding.matcher,
            rationale=finding.rationale,
        )


class MatcherWarning(BaseModel):
    matcher: str
    pattern_id: str
    message: str

    @classmethod
    def from_failure(cls, failure: MatcherFailure) -> MatcherWarning:
        return cls(
            matcher=failure.matcher,
            pattern_id=failure.pattern_id,
            message=failure.message,
        )


class ReportSummary(BaseModel):
    types: int = 0
    findings: int = 0
    by_pattern: dict[str, int] = {}


class PatternReport(BaseModel):
    source: str | None = None
    summary: ReportSummary = ReportSummary()
    findings: list[FindingRecord] = []
    warnings: list[MatcherWarning] = []

    @classmethod
    def from_result(
        cls,
        result: AnalysisResult,
        *,
        source: str | None = None,
        type_count: int = 0,
    ) -> PatternReport:
        by_pattern: dict[str, int] = {}
        for finding in result.findings:
            by_pattern[finding.pattern_id] = by_pattern.get(finding.pattern_id, 0) + 1
        return cls(
            source=source,
            summary=ReportSummary(
                types=type_count,
                findings=len(result.findings),
                by_pattern=dict(sorted(by_pattern.items())),
            ),
            findings=[FindingRecord.from_finding(f) for f in result.findings],
            warnings=[MatcherWarning.from_failure(f) for f in result.failures],
        )

    def to_json(self) -> str:
        return self.model_dump_json(indent=2)

    def to_yaml(self) -> str:
        data: dict[str, Any] = self.model_dump(mode="json")
        return yaml.dump(
            data, default_flow_style=False, sort_keys=False, allow_unicode=True
        )
