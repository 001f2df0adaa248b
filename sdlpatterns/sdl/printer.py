"""Render a SchemaGraph back to SDL text.

Declaration order, descriptions, ``#`` comments, directives and default
values are all kept, so that parsing the output yields an equal graph.
"""

from __future__ import annotations

from graphql.language.print_string import print_string

from sdlpatterns.sdl.graph import SchemaGraph
from sdlpatterns.sdl.types import (
    ArgumentDef,
    DirectiveDef,
    DirectiveUse,
    EnumValueDef,
    FieldDef,
    SchemaRoots,
    TypeDef,
    TypeKind,
)

_KEYWORDS = {
    TypeKind.OBJECT: "type",
    TypeKind.INTERFACE: "interface",
    TypeKind.UNION: "union",
    TypeKind.ENUM: "enum",
    TypeKind.INPUT: "input",
    TypeKind.SCALAR: "scalar",
}


def print_sdl(graph: SchemaGraph) -> str:
    """Build a complete SDL document from a graph."""
    parts: list[str] = []

    schema_block = _render_schema(graph.roots)
    if schema_block:
        parts.append(schema_block)

    for directive in graph.directives.values():
        parts.append(_render_directive_def(directive))

    for type_def in graph.types.values():
        parts.append(_render_type(type_def))

    return "\n\n".join(parts) + "\n" if parts else ""


def _render_schema(roots: SchemaRoots) -> str:
    if roots == SchemaRoots():
        return ""
    lines = ["schema {"]
    for operation in ("query", "mutation", "subscription"):
        name = getattr(roots, operation)
        if name:
            lines.append(f"  {operation}: {name}")
    lines.append("}")
    return "\n".join(lines)


def _render_directive_def(directive: DirectiveDef) -> str:
    text = _render_description(directive.description, "")
    text += f"directive @{directive.name}{_render_arguments(directive.arguments)}"
    if directive.repeatable:
        text += " repeatable"
    text += " on " + " | ".join(directive.locations)
    return text


def _render_type(type_def: TypeDef) -> str:
    """Render one type definition, header plus body."""
    lines = [f"# {c}" if c else "#" for c in type_def.comments]
    header = _render_description(type_def.description, "")
    header += f"{_KEYWORDS[type_def.kind]} {type_def.name}"
    if type_def.interfaces:
        header += " implements " + " & ".join(type_def.interfaces)
    header += _render_directives(type_def.directives)

    if type_def.kind == TypeKind.UNION:
        if type_def.members:
            header += " = " + " | ".join(type_def.members)
        lines.append(header)
    elif type_def.kind == TypeKind.ENUM:
        if type_def.values:
            header += " {"
        lines.append(header)
        if type_def.values:
            lines.extend(_render_enum_value(v) for v in type_def.enum_values)
            lines.append("}")
    elif type_def.kind == TypeKind.SCALAR:
        lines.append(header)
    else:
        if type_def.fields:
            header += " {"
        lines.append(header)
        if type_def.fields:
            lines.extend(_render_field(f) for f in type_def.fields)
            lines.append("}")
    return "\n".join(lines)


def _render_field(field_def: FieldDef) -> str:
    """Render a field with its comments and description on the lines above."""
    parts = [f"  # {c}" if c else "  #" for c in field_def.comments]
    line = _render_description(field_def.description, "  ")
    line += f"  {field_def.name}{_render_arguments(field_def.arguments)}: {field_def.type}"
    if field_def.default_value is not None:
        line += f" = {field_def.default_value}"
    line += _render_directives(field_def.directives)
    parts.append(line)
    return "\n".join(parts)


def _render_enum_value(value: EnumValueDef) -> str:
    line = _render_description(value.description, "  ")
    return line + f"  {value.name}{_render_directives(value.directives)}"


def _render_arguments(arguments: tuple[ArgumentDef, ...]) -> str:
    if not arguments:
        return ""
    rendered: list[str] = []
    for arg in arguments:
        text = f"{print_string(arg.description)} " if arg.description is not None else ""
        text += f"{arg.name}: {arg.type}"
        if arg.default_value is not None:
            text += f" = {arg.default_value}"
        text += _render_directives(arg.directives)
        rendered.append(text)
    return "(" + ", ".join(rendered) + ")"


def _render_directives(directives: tuple[DirectiveUse, ...]) -> str:
    out = ""
    for use in directives:
        out += f" @{use.name}"
        if use.arguments:
            out += "(" + ", ".join(f"{k}: {v}" for k, v in use.arguments) + ")"
    return out


def _render_description(description: str | None, indent: str) -> str:
    """Descriptions go on their own line as a single-line string literal."""
    if description is None:
        return ""
    return f"{indent}{print_string(description)}\n"
