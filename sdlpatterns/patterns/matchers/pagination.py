"""Matchers for list pagination conventions."""

from __future__ import annotations

from sdlpatterns.patterns.base import Matcher
from sdlpatterns.patterns.heuristics import OFFSET_ARGS, PAGE_SIZE_ARGS
from sdlpatterns.patterns.types import Confidence, Finding
from sdlpatterns.sdl.graph import SchemaGraph
from sdlpatterns.sdl.types import TypeKind


class CursorConnection(Matcher):
    pattern_id = "cursor-connection"
    title = "Cursor connection"
    description = (
        "Relay-style connection type: a list of edges carrying a node and a "
        "cursor, plus page info."
    )

    def detect(self, graph: SchemaGraph) -> list[Finding]:
        findings: list[Finding] = []
        for conn in graph.of_kind(TypeKind.OBJECT):
            edges = conn.field("edges")
            page_info = conn.field("pageInfo")
            if edges is None or page_info is None or not edges.type.is_list:
                continue
            edge = graph.get(edges.type.named)
            if edge is None or edge.kind != TypeKind.OBJECT:
                continue
            node = edge.field("node")
            if node is None or edge.field("cursor") is None:
                continue

            rationale = (
                f"edges: {edges.type} carries node: {node.type} and a cursor, "
                f"beside pageInfo: {page_info.type}"
            )
            users = graph.fields_returning(conn.name)
            if users:
                rationale += "; returned by " + ", ".join(
                    f"{owner.name}.{f.name}" for owner, f in users
                )
            unpaged = [
                f"{owner.name}.{f.name}"
                for owner, f in users
                if f.argument("first") is None and f.argument("last") is None
            ]
            if unpaged:
                rationale += f" ({', '.join(unpaged)} take no first/last argument)"
            findings.append(
                self.finding(
                    conn.name,
                    rationale,
                    confidence=Confidence.MEDIUM if unpaged else Confidence.HIGH,
                )
            )
        return findings


class OffsetPagination(Matcher):
    pattern_id = "offset-pagination"
    title = "Offset pagination"
    description = "A list field paged with a size argument and an offset or page number."

    def detect(self, graph: SchemaGraph) -> list[Finding]:
        findings: list[Finding] = []
        for owner in graph:
            if owner.kind not in (TypeKind.OBJECT, TypeKind.INTERFACE):
                continue
            for field_def in owner.fields:
                if not field_def.type.is_list:
                    continue
                names = [arg.name for arg in field_def.arguments]
                size = [n for n in names if n in PAGE_SIZE_ARGS]
                offset = [n for n in names if n in OFFSET_ARGS]
                if not size or not offset:
                    continue
                findings.append(
                    self.finding(
                        owner.name,
                        f"list of {field_def.type.named} paged by '{size[0]}' "
                        f"and '{offset[0]}' instead of cursors",
                        subject_field=field_def.name,
                    )
                )
        return findings
