"""Shape tests shared by several matchers.

These encode the catalog's informal vocabulary ("format-hint argument",
"pagination argument", "variant-specific field") as predicates over
definitions.
"""

from __future__ import annotations

import re

from sdlpatterns.helpers.naming import mentions, split_words
from sdlpatterns.sdl.graph import SchemaGraph
from sdlpatterns.sdl.types import ArgumentDef, FieldDef, TypeDef, TypeKind

# Argument names that ask for a representation of a value rather than a
# different value.
FORMAT_WORDS = frozenset({
    "format",
    "formatted",
    "unit",
    "units",
    "locale",
    "lang",
    "language",
    "timezone",
    "tz",
    "currency",
    "precision",
    "decimals",
    "scale",
    "size",
    "width",
    "height",
    "style",
    "case",
    "pattern",
    "truncate",
    "encoding",
    "resolution",
    "quality",
    "round",
    "rounded",
    "uppercase",
    "lowercase",
    "capitalize",
    "abbreviate",
    "abbreviated",
    "pretty",
    "html",
    "markdown",
})

PAGE_SIZE_ARGS = frozenset({"first", "last", "limit", "pageSize", "perPage", "take", "count"})
PAGE_POSITION_ARGS = frozenset({"after", "before", "offset", "skip", "page", "cursor"})
OFFSET_ARGS = frozenset({"offset", "skip", "page"})
PAGINATION_ARGS = PAGE_SIZE_ARGS | PAGE_POSITION_ARGS

# "# only available for Movies", "Only set when kind is BOOK", "(books only)"
_VARIANT_NOTE_RE = re.compile(
    r"\bonly\s+(?:available|applicable|present|set|populated|valid|used|relevant|returned)?"
    r"\s*(?:for|when|if|on|with)\s+(?P<subject>.+)"
    r"|\((?P<subject2>[^)]+?)\s+only\)",
    re.IGNORECASE,
)


def is_format_argument(graph: SchemaGraph, arg: ArgumentDef) -> bool:
    """Enum-typed arguments, or ones named like a format hint.

    A Boolean alone is not enough: ``active: Boolean`` picks which records
    come back, ``uppercase: Boolean`` only changes how they read.
    """
    if arg.type.is_list:
        return False
    if graph.kind_of(arg.type.named) == TypeKind.ENUM:
        return True
    return bool(FORMAT_WORDS.intersection(split_words(arg.name)))


def is_pagination_argument(arg: ArgumentDef) -> bool:
    return arg.name in PAGINATION_ARGS


def is_mutation_field(graph: SchemaGraph, owner: TypeDef) -> bool:
    return bool(graph.roots.mutation) and owner.name == graph.roots.mutation


def variant_note(field_def: FieldDef) -> str | None:
    """The comment or description marking a field as variant-specific."""
    for note in field_def.notes:
        match = _VARIANT_NOTE_RE.search(note)
        if match:
            return note
    return None


def mentioned_values(text: str, values: tuple[str, ...]) -> list[str]:
    return [v for v in values if mentions(text, v)]


def named_after_value(field_name: str, values: tuple[str, ...]) -> str | None:
    """The enum value a field name starts with, e.g. ``movieDirector`` -> ``MOVIE``."""
    words = split_words(field_name)
    for value in values:
        value_words = split_words(value)
        if value_words and len(words) > len(value_words) and words[: len(value_words)] == value_words:
            return value
    return None


def wraps_single_scalar(graph: SchemaGraph, type_def: TypeDef) -> bool:
    """Objects whose only field is a scalar-like ``value``."""
    if len(type_def.fields) != 1:
        return False
    only = type_def.fields[0]
    return only.name == "value" and not only.type.is_list and graph.is_scalar_like(only.type.named)
