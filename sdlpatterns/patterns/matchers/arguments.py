"""Matchers for the two uses of field arguments: selecting and formatting."""

from __future__ import annotations

from sdlpatterns.patterns.base import Matcher
from sdlpatterns.patterns.heuristics import (
    is_format_argument,
    is_mutation_field,
    is_pagination_argument,
    wraps_single_scalar,
)
from sdlpatterns.patterns.types import Confidence, Finding
from sdlpatterns.sdl.graph import SchemaGraph
from sdlpatterns.sdl.types import TypeKind

_FIELD_OWNERS = (TypeKind.OBJECT, TypeKind.INTERFACE)


class ArgumentAsSelector(Matcher):
    pattern_id = "argument-as-selector"
    title = "Argument as selector"
    description = (
        "A field returning an object takes arguments that choose which "
        "object (or which items of a list) come back."
    )

    def detect(self, graph: SchemaGraph) -> list[Finding]:
        findings: list[Finding] = []
        for owner in graph:
            if owner.kind not in _FIELD_OWNERS or is_mutation_field(graph, owner):
                continue
            for field_def in owner.fields:
                target = field_def.type.named
                if not graph.is_composite(target):
                    continue
                selectors = [
                    arg.name
                    for arg in field_def.arguments
                    if not is_format_argument(graph, arg) and not is_pagination_argument(arg)
                ]
                if not selectors:
                    continue
                args = ", ".join(f"'{name}'" for name in selectors)
                if field_def.type.is_list:
                    rationale = f"argument {args} filters which {target} items are returned"
                else:
                    rationale = f"argument {args} selects which {target} is returned"
                findings.append(
                    self.finding(owner.name, rationale, subject_field=field_def.name)
                )
        return findings


class ArgumentAsFormatter(Matcher):
    pattern_id = "argument-as-formatter"
    title = "Argument as formatter"
    description = (
        "A field returning a scalar takes only format-hint arguments that "
        "change how the same value is represented."
    )

    def detect(self, graph: SchemaGraph) -> list[Finding]:
        findings: list[Finding] = []
        for owner in graph:
            if owner.kind not in _FIELD_OWNERS or is_mutation_field(graph, owner):
                continue
            for field_def in owner.fields:
                if not field_def.arguments:
                    continue
                returns = self._describe_return(graph, field_def.type.named)
                if returns is None:
                    continue
                if not all(is_format_argument(graph, arg) for arg in field_def.arguments):
                    continue
                typed = all(
                    graph.kind_of(arg.type.named) == TypeKind.ENUM
                    or arg.type.named == "Boolean"
                    for arg in field_def.arguments
                )
                args = ", ".join(f"'{arg.name}: {arg.type}'" for arg in field_def.arguments)
                findings.append(
                    self.finding(
                        owner.name,
                        f"argument {args} only changes the representation of {returns}",
                        subject_field=field_def.name,
                        confidence=Confidence.HIGH if typed else Confidence.MEDIUM,
                    )
                )
        return findings

    @staticmethod
    def _describe_return(graph: SchemaGraph, named: str) -> str | None:
        if graph.is_scalar_like(named):
            return f"the returned {named}"
        if graph.kind_of(named) != TypeKind.INTERFACE:
            return None
        implementers = graph.object_implementers(named)
        if not implementers:
            return None
        for name in implementers:
            type_def = graph.get(name)
            if type_def is None or not wraps_single_scalar(graph, type_def):
                return None
        return f"the value wrapped by {named}"
