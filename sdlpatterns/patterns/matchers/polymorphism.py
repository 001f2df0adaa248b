"""Matchers for polymorphic type modeling: interfaces, unions, type fields."""

from __future__ import annotations

from sdlpatterns.helpers.naming import split_words
from sdlpatterns.patterns.base import Matcher
from sdlpatterns.patterns.heuristics import (
    mentioned_values,
    named_after_value,
    variant_note,
    wraps_single_scalar,
)
from sdlpatterns.patterns.types import Confidence, Finding
from sdlpatterns.sdl.graph import SchemaGraph
from sdlpatterns.sdl.types import FieldDef, TypeDef, TypeKind

_MIN_WEAK_IMPLEMENTERS = 3
_MAX_SHARED_EXTRA_FIELDS = 1

_ERROR_WORDS = frozenset({"error", "errors", "problem", "failure", "exception", "fault", "rejection"})


def _scalar_type_field(graph: SchemaGraph, type_def: TypeDef) -> FieldDef | None:
    field_def = type_def.field("type")
    if field_def is None or field_def.type.is_list:
        return None
    if not graph.is_scalar(field_def.type.named):
        return None
    return field_def


class GenericObjectWithTypeField(Matcher):
    pattern_id = "generic-object-with-type-field"
    title = "Generic object with type field"
    description = (
        "One object type models several variants through an enum 'type' "
        "field, with fields that only apply to some variants."
    )

    def detect(self, graph: SchemaGraph) -> list[Finding]:
        findings: list[Finding] = []
        for type_def in graph.of_kind(TypeKind.OBJECT):
            type_field = type_def.field("type")
            if type_field is None or type_field.type.is_list:
                continue
            enum = graph.get(type_field.type.named)
            if enum is None or enum.kind != TypeKind.ENUM:
                continue

            noted: list[tuple[FieldDef, str]] = []
            named: list[tuple[FieldDef, str]] = []
            for field_def in type_def.fields:
                if field_def is type_field:
                    continue
                note = variant_note(field_def)
                if note is not None:
                    noted.append((field_def, note))
                    continue
                value = named_after_value(field_def.name, enum.values)
                if value is not None:
                    named.append((field_def, value))

            if noted:
                names = ", ".join(f"'{f.name}'" for f, _ in noted)
                first_field, first_note = noted[0]
                values = mentioned_values(first_note, enum.values)
                hint = f" ({', '.join(values)})" if values else ""
                rationale = (
                    f"'type: {enum.name}' distinguishes variants and {names} "
                    f"apply only to some of them; '{first_field.name}' is noted "
                    f"\"{first_note}\"{hint}"
                )
                confidence = Confidence.HIGH
            elif named:
                names = ", ".join(f"'{f.name}' ({value})" for f, value in named)
                rationale = (
                    f"'type: {enum.name}' distinguishes variants and fields named "
                    f"after a variant suggest they do not apply to all of them: {names}"
                )
                confidence = Confidence.MEDIUM
            else:
                continue
            findings.append(self.finding(type_def.name, rationale, confidence=confidence))
        return findings


class UnionWithWeakInterface(Matcher):
    pattern_id = "union-with-weak-interface"
    title = "Union with weak interface"
    description = (
        "An interface shared by otherwise unrelated types that no query field "
        "returns directly; the types are consumed through unions instead."
    )

    def detect(self, graph: SchemaGraph) -> list[Finding]:
        findings: list[Finding] = []
        for iface in graph.of_kind(TypeKind.INTERFACE):
            implementers = graph.object_implementers(iface.name)
            if len(implementers) < _MIN_WEAK_IMPLEMENTERS:
                continue
            if any(f.type.named == iface.name for f in graph.root_fields("query")):
                continue
            field_sets = [set(graph.types[name].field_names) for name in implementers]
            shared = set.intersection(*field_sets) - set(iface.field_names)
            if len(shared) > _MAX_SHARED_EXTRA_FIELDS:
                continue
            unions = sorted({u for name in implementers for u in graph.unions_containing(name)})
            if not unions:
                continue
            extra = f", plus {', '.join(sorted(shared))}" if shared else ""
            rationale = (
                f"implemented by {len(implementers)} unrelated types "
                f"({', '.join(implementers)}) sharing only the interface's own "
                f"fields{extra}; no query field returns {iface.name}, its implementers "
                f"are reached through union {', '.join(unions)}"
            )
            findings.append(self.finding(iface.name, rationale))
        return findings


class ExplicitTypeField(Matcher):
    pattern_id = "explicit-type-field"
    title = "Explicit type field"
    description = (
        "Abstract types expose a scalar 'type' field that duplicates the "
        "built-in __typename."
    )

    def detect(self, graph: SchemaGraph) -> list[Finding]:
        findings: list[Finding] = []
        for iface in graph.of_kind(TypeKind.INTERFACE):
            declared = _scalar_type_field(graph, iface)
            if declared is not None:
                findings.append(
                    self.finding(
                        iface.name,
                        f"interface declares 'type: {declared.type}', which "
                        f"restates what __typename already reports",
                        subject_field="type",
                    )
                )
                continue
            implementers = graph.object_implementers(iface.name)
            if len(implementers) >= 2 and all(
                _scalar_type_field(graph, graph.types[name]) for name in implementers
            ):
                findings.append(
                    self.finding(
                        iface.name,
                        f"every implementer ({', '.join(implementers)}) declares a "
                        f"scalar 'type' field, which restates __typename",
                        confidence=Confidence.MEDIUM,
                    )
                )
        for union in graph.of_kind(TypeKind.UNION):
            members = union.members
            if len(members) >= 2 and all(
                _scalar_type_field(graph, graph.types[name]) for name in members
            ):
                findings.append(
                    self.finding(
                        union.name,
                        f"every member ({', '.join(members)}) declares a scalar "
                        f"'type' field, which restates __typename",
                        confidence=Confidence.MEDIUM,
                    )
                )
        return findings


class GlobalObjectIdentification(Matcher):
    pattern_id = "global-object-identification"
    title = "Global object identification"
    description = (
        "A Node-style interface exposing only a global id, with a root "
        "query field refetching any implementer by that id."
    )

    def detect(self, graph: SchemaGraph) -> list[Finding]:
        findings: list[Finding] = []
        query_fields = graph.root_fields("query")
        for iface in graph.of_kind(TypeKind.INTERFACE):
            if len(iface.fields) != 1:
                continue
            id_field = iface.fields[0]
            if id_field.name != "id" or id_field.type.is_list or id_field.type.named != "ID":
                continue
            fetchers = []
            for field_def in query_fields:
                id_arg = field_def.argument("id") or field_def.argument("ids")
                if field_def.type.named == iface.name and id_arg is not None:
                    fetchers.append(f"{graph.roots.query}.{field_def.name}({id_arg.name}:)")
            if not fetchers:
                continue
            count = len(graph.object_implementers(iface.name))
            rationale = (
                f"only field is 'id: {id_field.type}' and {', '.join(fetchers)} "
                f"refetches any of its {count} implementer(s)"
            )
            findings.append(self.finding(iface.name, rationale))
        return findings


class ErrorResultUnion(Matcher):
    pattern_id = "error-result-union"
    title = "Errors as result union members"
    description = "A union mixing a success type with error types, modeling failures as data."

    def detect(self, graph: SchemaGraph) -> list[Finding]:
        findings: list[Finding] = []
        for union in graph.of_kind(TypeKind.UNION):
            errors = [m for m in union.members if self._is_error_type(graph, m)]
            successes = [m for m in union.members if m not in errors]
            if not errors or not successes:
                continue
            rationale = (
                f"success type(s) {', '.join(successes)} sit beside error "
                f"type(s) {', '.join(errors)} in one result union"
            )
            findings.append(self.finding(union.name, rationale))
        return findings

    @staticmethod
    def _is_error_type(graph: SchemaGraph, name: str) -> bool:
        words = split_words(name)
        if words and words[-1] in _ERROR_WORDS:
            return True
        type_def = graph.get(name)
        if type_def is None:
            return False
        for iface in type_def.interfaces:
            iface_words = split_words(iface)
            if iface_words and iface_words[-1] in _ERROR_WORDS:
                return True
        return False


class SingleImplementationInterface(Matcher):
    pattern_id = "single-implementation-interface"
    title = "Interface with a single implementation"
    description = "An interface only one object type implements, adding indirection without polymorphism."

    def detect(self, graph: SchemaGraph) -> list[Finding]:
        findings: list[Finding] = []
        for iface in graph.of_kind(TypeKind.INTERFACE):
            implementers = graph.implementers(iface.name)
            if len(implementers) != 1:
                continue
            findings.append(
                self.finding(
                    iface.name,
                    f"only {implementers[0]} implements this interface",
                    confidence=Confidence.MEDIUM,
                )
            )
        return findings


class ValueObject(Matcher):
    pattern_id = "value-object"
    title = "Value object"
    description = "An object whose single field 'value' wraps a scalar."

    def detect(self, graph: SchemaGraph) -> list[Finding]:
        findings: list[Finding] = []
        for type_def in graph.of_kind(TypeKind.OBJECT):
            if graph.is_root(type_def.name) or not wraps_single_scalar(graph, type_def):
                continue
            value = type_def.fields[0]
            rationale = f"single field 'value: {value.type}' wraps a scalar"
            if type_def.interfaces:
                rationale += f" behind {', '.join(type_def.interfaces)}"
            findings.append(self.finding(type_def.name, rationale))
        return findings
