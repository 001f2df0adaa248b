"""Base class for pattern matchers."""

from __future__ import annotations

from abc import ABC, abstractmethod

from sdlpatterns.patterns.types import Confidence, Finding
from sdlpatterns.sdl.graph import SchemaGraph


class Matcher(ABC):
    """Detects one cataloged pattern in a SchemaGraph.

    Subclasses set ``pattern_id`` and implement ``detect``. Matchers only
    read the graph and keep no state between calls, so the engine may run
    them concurrently. ``name`` identifies the matcher in a registry and in
    each Finding's provenance; it defaults to ``pattern_id``.
    """

    pattern_id: str = "pattern"
    title: str = ""
    description: str = ""

    def __init__(self, name: str | None = None):
        self.name = name or self.pattern_id

    def __repr__(self) -> str:
        return f"{type(self).__name__}(name={self.name!r})"

    @abstractmethod
    def detect(self, graph: SchemaGraph) -> list[Finding]:
        """Return every occurrence of the pattern in ``graph``."""
        ...

    def finding(
        self,
        subject_type: str,
        rationale: str,
        subject_field: str | None = None,
        confidence: Confidence = Confidence.HIGH,
    ) -> Finding:
        return Finding(
            pattern_id=self.pattern_id,
            subject_type=subject_type,
            subject_field=subject_field,
            rationale=rationale,
            confidence=confidence,
            matcher=self.name,
        )
