"""Value types shared by the lexer, the parser and the pattern matchers.

Two layers:
1. Tokens: what the lexer hands to the parser
2. Schema definitions: the frozen records a SchemaGraph is made of

Everything here is immutable once built. Collections are tuples so that
definitions compare by value, which the SDL round trip relies on.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum

# -- Tokens -------------------------------------------------------------------


class TokenKind(str, Enum):
    NAME = "NAME"
    INT = "INT"
    FLOAT = "FLOAT"
    STRING = "STRING"
    PUNCT = "PUNCT"
    COMMENT = "COMMENT"
    EOF = "EOF"


@dataclass(frozen=True)
class Comment:
    """A ``#`` comment, text stripped of the marker and surrounding blanks."""

    text: str
    line: int
    column: int


@dataclass(frozen=True)
class Token:
    kind: TokenKind
    value: str
    line: int
    column: int
    comments: tuple[Comment, ...] = ()  # comments seen since the previous token
    block: bool = False  # STRING only: came from a """block string"""
    raw: str = field(default="", compare=False, repr=False)  # source text, empty if built by hand

    def __str__(self) -> str:
        if self.kind == TokenKind.EOF:
            return "<EOF>"
        if self.kind == TokenKind.STRING:
            return f"string {self.value!r}"
        return f"{self.kind.value.lower()} {self.value!r}"


# -- Schema definitions -------------------------------------------------------

BUILTIN_SCALARS = frozenset({"Int", "Float", "String", "Boolean", "ID"})


class TypeKind(str, Enum):
    OBJECT = "OBJECT"
    INTERFACE = "INTERFACE"
    UNION = "UNION"
    ENUM = "ENUM"
    INPUT = "INPUT"
    SCALAR = "SCALAR"


@dataclass(frozen=True)
class TypeRef:
    """A field or argument type: a named type wrapped in lists and ``!``.

    Exactly one of ``name`` and ``of_type`` is set: ``of_type`` holds the
    item type of a list.
    """

    name: str | None = None
    of_type: TypeRef | None = None
    non_null: bool = False

    @property
    def named(self) -> str:
        ref = self
        while ref.of_type is not None:
            ref = ref.of_type
        return ref.name or ""

    @property
    def is_list(self) -> bool:
        return self.of_type is not None

    def __str__(self) -> str:
        inner = f"[{self.of_type}]" if self.of_type is not None else (self.name or "")
        return inner + ("!" if self.non_null else "")


@dataclass(frozen=True)
class DirectiveUse:
    """``@name(arg: literal, ...)`` applied to a definition."""

    name: str
    arguments: tuple[tuple[str, str], ...] = ()

    def argument(self, name: str) -> str | None:
        for arg_name, literal in self.arguments:
            if arg_name == name:
                return literal
        return None


@dataclass(frozen=True)
class ArgumentDef:
    name: str
    type: TypeRef
    default_value: str | None = None  # canonical SDL literal
    description: str | None = None
    directives: tuple[DirectiveUse, ...] = ()


@dataclass(frozen=True)
class FieldDef:
    name: str
    type: TypeRef
    arguments: tuple[ArgumentDef, ...] = ()
    default_value: str | None = None  # input fields only
    description: str | None = None
    comments: tuple[str, ...] = ()
    directives: tuple[DirectiveUse, ...] = ()

    def argument(self, name: str) -> ArgumentDef | None:
        for arg in self.arguments:
            if arg.name == name:
                return arg
        return None

    @property
    def notes(self) -> tuple[str, ...]:
        """Comment lines plus the description, i.e. all annotated intent."""
        if self.description:
            return self.comments + (self.description,)
        return self.comments


@dataclass(frozen=True)
class EnumValueDef:
    name: str
    description: str | None = None
    directives: tuple[DirectiveUse, ...] = ()


@dataclass(frozen=True)
class TypeDef:
    kind: TypeKind
    name: str
    interfaces: tuple[str, ...] = ()
    members: tuple[str, ...] = ()  # union member names
    fields: tuple[FieldDef, ...] = ()
    enum_values: tuple[EnumValueDef, ...] = ()
    description: str | None = None
    comments: tuple[str, ...] = ()
    directives: tuple[DirectiveUse, ...] = ()

    def field(self, name: str) -> FieldDef | None:
        for f in self.fields:
            if f.name == name:
                return f
        return None

    @property
    def field_names(self) -> tuple[str, ...]:
        return tuple(f.name for f in self.fields)

    @property
    def values(self) -> tuple[str, ...]:
        """Enum value names in declaration order."""
        return tuple(v.name for v in self.enum_values)


@dataclass(frozen=True)
class DirectiveDef:
    name: str
    locations: tuple[str, ...]
    arguments: tuple[ArgumentDef, ...] = ()
    repeatable: bool = False
    description: str | None = None


@dataclass(frozen=True)
class SchemaRoots:
    """Root operation type names, overridable with a ``schema { }`` block."""

    query: str = "Query"
    mutation: str = "Mutation"
    subscription: str = "Subscription"
    explicit: bool = field(default=False, compare=False)
