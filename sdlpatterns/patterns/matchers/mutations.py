"""Matchers for mutation input and payload shaping."""

from __future__ import annotations

from collections import Counter

from sdlpatterns.patterns.base import Matcher
from sdlpatterns.patterns.types import Confidence, Finding
from sdlpatterns.sdl.graph import SchemaGraph
from sdlpatterns.sdl.types import FieldDef, TypeKind


def _single_input_argument(graph: SchemaGraph, field_def: FieldDef) -> str | None:
    """Name of the input type when the field takes exactly one, unwrapped."""
    if len(field_def.arguments) != 1:
        return None
    arg = field_def.arguments[0]
    if arg.type.is_list or graph.kind_of(arg.type.named) != TypeKind.INPUT:
        return None
    return arg.type.named


class SpecificMutationPayload(Matcher):
    pattern_id = "specific-mutation-payload"
    title = "Specific mutation payload"
    description = (
        "Each mutation takes one input object and returns a payload type "
        "no other mutation returns."
    )

    def detect(self, graph: SchemaGraph) -> list[Finding]:
        mutation = graph.root_type("mutation")
        if mutation is None:
            return []
        returned = Counter(f.type.named for f in mutation.fields)
        findings: list[Finding] = []
        for field_def in mutation.fields:
            input_name = _single_input_argument(graph, field_def)
            if input_name is None:
                continue
            payload = field_def.type.named
            if field_def.type.is_list or graph.kind_of(payload) != TypeKind.OBJECT:
                continue
            if returned[payload] != 1:
                continue
            conventional = payload.endswith(("Payload", "Result", "Response"))
            findings.append(
                self.finding(
                    mutation.name,
                    f"takes a single '{input_name}' input and returns {payload}, "
                    f"which no other mutation returns",
                    subject_field=field_def.name,
                    confidence=Confidence.HIGH if conventional else Confidence.MEDIUM,
                )
            )
        return findings


class DedicatedMutationInput(Matcher):
    pattern_id = "dedicated-mutation-input"
    title = "Dedicated mutation input type"
    description = "Each mutation's single argument is an input type used by no other mutation."

    def detect(self, graph: SchemaGraph) -> list[Finding]:
        mutation = graph.root_type("mutation")
        if mutation is None:
            return []
        uses = Counter(
            arg.type.named for f in mutation.fields for arg in f.arguments
        )
        findings: list[Finding] = []
        for field_def in mutation.fields:
            input_name = _single_input_argument(graph, field_def)
            if input_name is None or uses[input_name] != 1:
                continue
            arg = field_def.arguments[0]
            elsewhere = sorted(
                {
                    f"{owner.name}.{f.name}"
                    for owner, f, _ in graph.arguments_typed(input_name)
                    if owner.name != mutation.name
                }
            )
            rationale = (
                f"single argument '{arg.name}: {arg.type}' is an input type "
                f"dedicated to this mutation"
            )
            if elsewhere:
                rationale += f" (also taken by {', '.join(elsewhere)})"
            findings.append(
                self.finding(
                    mutation.name,
                    rationale,
                    subject_field=field_def.name,
                    confidence=Confidence.MEDIUM if elsewhere else Confidence.HIGH,
                )
            )
        return findings
