"""Matchers looking at sibling fields within one type."""

from __future__ import annotations

from sdlpatterns.helpers.naming import split_representation
from sdlpatterns.patterns.base import Matcher
from sdlpatterns.patterns.types import Confidence, Finding
from sdlpatterns.sdl.graph import SchemaGraph
from sdlpatterns.sdl.types import FieldDef, TypeKind


class DifferentFieldsSameValue(Matcher):
    pattern_id = "different-fields-same-value"
    title = "Different fields for the semantically same value"
    description = (
        "Sibling scalar fields expose one value in several representations "
        "(createdAt, createdAtIso, createdAtUnix)."
    )

    def detect(self, graph: SchemaGraph) -> list[Finding]:
        findings: list[Finding] = []
        for owner in graph:
            if owner.kind not in (TypeKind.OBJECT, TypeKind.INTERFACE):
                continue
            groups: dict[str, list[tuple[FieldDef, str]]] = {}
            for field_def in owner.fields:
                if field_def.type.is_list or not graph.is_scalar_like(field_def.type.named):
                    continue
                stem, suffix = split_representation(field_def.name)
                groups.setdefault(stem, []).append((field_def, suffix))

            for members in groups.values():
                if len(members) < 2:
                    continue
                base = next((f for f, suffix in members if not suffix), None)
                reference = base or members[0][0]
                for field_def, suffix in members:
                    if field_def is reference:
                        continue
                    findings.append(
                        self.finding(
                            owner.name,
                            f"'{field_def.name}' exposes the value of "
                            f"'{reference.name}' in another representation ({suffix})",
                            subject_field=field_def.name,
                            confidence=Confidence.MEDIUM if base else Confidence.LOW,
                        )
                    )
        return findings
