"""Build a SchemaGraph from SDL tokens.

graphql-core does the grammar: the token stream is laid back out at its
recorded positions and handed to ``graphql.parse``, so syntax errors point
at the same line and column the lexer reported. Walking the DocumentNode
then adds what the GraphQL parser leaves to schema validation: duplicate
names, extensions merged into their base type, and a resolution pass that
reports every dangling reference in a single ParseError.
"""

from __future__ import annotations

import re
from dataclasses import dataclass, replace

from graphql import parse as gql_parse
from graphql.error import GraphQLSyntaxError
from graphql.language import Source
from graphql.language.ast import (
    BooleanValueNode,
    ConstValueNode,
    DirectiveDefinitionNode,
    DirectiveNode,
    DocumentNode,
    EnumTypeDefinitionNode,
    EnumTypeExtensionNode,
    EnumValueDefinitionNode,
    EnumValueNode,
    ExecutableDefinitionNode,
    FieldDefinitionNode,
    FloatValueNode,
    InputObjectTypeDefinitionNode,
    InputObjectTypeExtensionNode,
    InputValueDefinitionNode,
    InterfaceTypeDefinitionNode,
    InterfaceTypeExtensionNode,
    IntValueNode,
    ListTypeNode,
    ListValueNode,
    NamedTypeNode,
    Node,
    NonNullTypeNode,
    NullValueNode,
    ObjectTypeDefinitionNode,
    ObjectTypeExtensionNode,
    ObjectValueNode,
    ScalarTypeDefinitionNode,
    ScalarTypeExtensionNode,
    SchemaDefinitionNode,
    SchemaExtensionNode,
    StringValueNode,
    TypeNode,
    UnionTypeDefinitionNode,
    UnionTypeExtensionNode,
)
from graphql.language.print_string import print_string

from sdlpatterns.sdl.errors import ParseError
from sdlpatterns.sdl.graph import SchemaGraph
from sdlpatterns.sdl.lexer import tokenize
from sdlpatterns.sdl.types import (
    BUILTIN_SCALARS,
    ArgumentDef,
    DirectiveDef,
    DirectiveUse,
    EnumValueDef,
    FieldDef,
    SchemaRoots,
    Token,
    TokenKind,
    TypeDef,
    TypeKind,
    TypeRef,
)

_DEFINITION_KINDS: dict[type[Node], TypeKind] = {
    ObjectTypeDefinitionNode: TypeKind.OBJECT,
    InterfaceTypeDefinitionNode: TypeKind.INTERFACE,
    UnionTypeDefinitionNode: TypeKind.UNION,
    EnumTypeDefinitionNode: TypeKind.ENUM,
    InputObjectTypeDefinitionNode: TypeKind.INPUT,
    ScalarTypeDefinitionNode: TypeKind.SCALAR,
}

_EXTENSION_KINDS: dict[type[Node], TypeKind] = {
    ObjectTypeExtensionNode: TypeKind.OBJECT,
    InterfaceTypeExtensionNode: TypeKind.INTERFACE,
    UnionTypeExtensionNode: TypeKind.UNION,
    EnumTypeExtensionNode: TypeKind.ENUM,
    InputObjectTypeExtensionNode: TypeKind.INPUT,
    ScalarTypeExtensionNode: TypeKind.SCALAR,
}

_KIND_LABELS = {
    TypeKind.OBJECT: "an object type",
    TypeKind.INTERFACE: "an interface",
    TypeKind.UNION: "a union",
    TypeKind.ENUM: "an enum",
    TypeKind.INPUT: "an input type",
    TypeKind.SCALAR: "a scalar",
}

_EXPECTED_RE = re.compile(r"^Expected (.+?), found (.+)$")
_LINE_BREAK_RE = re.compile(r"\r\n|[\n\r]")


def parse(tokens: list[Token], source_name: str | None = None) -> SchemaGraph:
    """Build a SchemaGraph from a token stream produced by ``tokenize``."""
    if not tokens or tokens[-1].kind != TokenKind.EOF:
        raise ValueError("token stream must end with an EOF token")
    tokens = [t for t in tokens if t.kind != TokenKind.COMMENT]
    if len(tokens) == 1:
        # graphql-core wants at least one definition
        return SchemaGraph({})
    text, positions = _layout(tokens)
    try:
        document = gql_parse(Source(text, source_name or "GraphQL request"))
    except GraphQLSyntaxError as e:
        raise _grammar_error(e, tokens, positions, source_name) from e
    return _Builder(tokens, positions, source_name).build(document)


def parse_sdl(text: str, source_name: str | None = None) -> SchemaGraph:
    """Tokenize and parse SDL text in one go."""
    return parse(tokenize(text, source_name), source_name)


# -- Token stream to text -----------------------------------------------------


def _layout(tokens: list[Token]) -> tuple[str, dict[tuple[int, int], int]]:
    """Write tokens back out where they were read.

    Returns the text and, for each token, the position it was written at.
    Tokens built by hand, without positions that fit, are separated by a
    single space instead.
    """
    out: list[str] = []
    positions: dict[tuple[int, int], int] = {}
    line, column = 1, 1
    prev: Token | None = None
    for index, token in enumerate(tokens):
        for comment in token.comments:
            line, column = _place(out, f"#{comment.text}", comment.line, comment.column, line, column)
            # a comment runs to the end of its line
            out.append("\n")
            line, column = line + 1, 1
        at_line, at_column = token.line, token.column
        touching = (at_line, at_column) == (line, column) and _is_word(prev) and _is_word(token)
        if (at_line, at_column) < (line, column) or touching:
            at_line, at_column = line, column + 1
        positions[(at_line, at_column)] = index
        line, column = _place(out, _source_text(token), at_line, at_column, line, column)
        prev = token
    return "".join(out), positions


def _is_word(token: Token | None) -> bool:
    return token is not None and token.kind in (TokenKind.NAME, TokenKind.INT, TokenKind.FLOAT)


def _place(out: list[str], text: str, at_line: int, at_column: int, line: int, column: int) -> tuple[int, int]:
    if (at_line, at_column) < (line, column):
        at_line, at_column = line, column + 1
    if at_line > line:
        out.append("\n" * (at_line - line))
        line, column = at_line, 1
    out.append(" " * (at_column - column))
    out.append(text)
    pieces = _LINE_BREAK_RE.split(text)
    if len(pieces) > 1:
        return line + len(pieces) - 1, len(pieces[-1]) + 1
    return line, at_column + len(text)


def _source_text(token: Token) -> str:
    if token.raw or token.kind == TokenKind.EOF:
        return token.raw
    if token.kind == TokenKind.STRING:
        return print_string(token.value)
    return token.value


def _grammar_error(
    e: GraphQLSyntaxError,
    tokens: list[Token],
    positions: dict[tuple[int, int], int],
    source_name: str | None,
) -> ParseError:
    line, column = 1, 1
    if e.locations:
        line, column = e.locations[0].line, e.locations[0].column
    got: Token | None = None
    if (line, column) in positions:
        got = tokens[positions[(line, column)]]
        line, column = got.line, got.column
    message = e.description.removesuffix(".")
    match = _EXPECTED_RE.match(message)
    return ParseError(
        message,
        line,
        column,
        source_name,
        expected=match.group(1) if match else None,
        got=got,
    )


# -- DocumentNode to SchemaGraph ----------------------------------------------


@dataclass
class _Reference:
    name: str
    token: Token
    context: str
    kinds: tuple[TypeKind, ...] = ()  # allowed kinds, empty for any


class _Builder:
    def __init__(
        self,
        tokens: list[Token],
        positions: dict[tuple[int, int], int],
        source_name: str | None,
    ):
        self.tokens = tokens
        self.positions = positions
        self.source_name = source_name
        self.types: dict[str, TypeDef] = {}
        self.directives: dict[str, DirectiveDef] = {}
        self.roots: dict[str, Token] = {}
        self.schema_token: Token | None = None
        self.references: list[_Reference] = []
        self.extensions: list[tuple[TypeKind, Node]] = []

    def build(self, document: DocumentNode) -> SchemaGraph:
        for node in document.definitions:
            if isinstance(node, ExecutableDefinitionNode):
                raise self.fail_at(
                    self.first(node), "executable definitions are not allowed in a schema"
                )
            if type(node) in _DEFINITION_KINDS:
                self.add_type(node, _DEFINITION_KINDS[type(node)])
            elif type(node) in _EXTENSION_KINDS:
                self.extensions.append((_EXTENSION_KINDS[type(node)], node))
            elif isinstance(node, SchemaDefinitionNode):
                if self.schema_token is not None:
                    raise self.fail_at(self.first(node), "duplicate schema definition")
                self.schema_token = self.first(node)
                self.add_roots(node)
            elif isinstance(node, SchemaExtensionNode):
                self.add_roots(node)
            elif isinstance(node, DirectiveDefinitionNode):
                self.add_directive(node)
        self.apply_extensions()
        self.resolve()
        return SchemaGraph(self.types, self.directives, self.build_roots())

    # -- Positions and comments ---------------------------------------------------

    def index(self, node: Node) -> int:
        assert node.loc is not None
        start = node.loc.start_token
        return self.positions[(start.line, start.column)]

    def first(self, node: Node) -> Token:
        return self.tokens[self.index(node)]

    def last_index(self, node: Node) -> int:
        assert node.loc is not None
        end = node.loc.end_token
        return self.positions[(end.line, end.column)]

    def fail_at(self, token: Token, message: str) -> ParseError:
        return ParseError(message, token.line, token.column, self.source_name, got=token)

    def leading_comments(self, index: int) -> tuple[str, ...]:
        """Comments on their own lines before the token at ``index``.

        A comment sharing a line with the previous token trails that token
        and is collected by ``trailing_comments`` instead.
        """
        prev = self.tokens[index - 1] if index > 0 else None
        return tuple(
            c.text for c in self.tokens[index].comments
            if prev is None or c.line > prev.line
        )

    def trailing_comments(self, last: int) -> tuple[str, ...]:
        if last + 1 >= len(self.tokens):
            return ()
        line = self.tokens[last].line
        return tuple(c.text for c in self.tokens[last + 1].comments if c.line == line)

    def notes(self, node: Node, description: StringValueNode | None, trailing: bool) -> tuple[str, ...]:
        comments = self.leading_comments(self.index(node))
        if description is not None:
            # between the description and the definition itself
            comments += tuple(c.text for c in self.tokens[self.last_index(description) + 1].comments)
        if trailing:
            comments += self.trailing_comments(self.last_index(node))
        return comments

    # -- Types ---------------------------------------------------------------------

    def add_type(self, node: Node, kind: TypeKind) -> None:
        name_token = self.first(node.name)  # type: ignore[attr-defined]
        type_def = self.type_body(node, kind)
        description = node.description  # type: ignore[attr-defined]
        type_def = replace(
            type_def,
            description=description.value if description else None,
            comments=self.notes(node, description, trailing=False),
        )
        if type_def.name in self.types:
            raise self.fail_at(name_token, f"duplicate type name '{type_def.name}'")
        self.types[type_def.name] = type_def

    def type_body(self, node: Node, kind: TypeKind) -> TypeDef:
        """Everything a definition or an extension declares after its name."""
        name = node.name.value  # type: ignore[attr-defined]
        interfaces: tuple[str, ...] = ()
        members: tuple[str, ...] = ()
        fields: tuple[FieldDef, ...] = ()
        enum_values: tuple[EnumValueDef, ...] = ()

        if kind in (TypeKind.OBJECT, TypeKind.INTERFACE):
            interfaces = self.named_list(
                node.interfaces, name, "implements", f"{name} implements", TypeKind.INTERFACE  # type: ignore[attr-defined]
            )
        if kind in (TypeKind.OBJECT, TypeKind.INTERFACE, TypeKind.INPUT):
            fields = self.fields(node.fields or (), name, is_input=kind == TypeKind.INPUT)  # type: ignore[attr-defined]
        elif kind == TypeKind.UNION:
            members = self.named_list(
                node.types, name, "member", f"union {name}", TypeKind.OBJECT  # type: ignore[attr-defined]
            )
        elif kind == TypeKind.ENUM:
            enum_values = self.enum_values(node.values or (), name)  # type: ignore[attr-defined]

        return TypeDef(
            kind=kind,
            name=name,
            interfaces=interfaces,
            members=members,
            fields=fields,
            enum_values=enum_values,
            directives=self.directive_uses(node.directives),  # type: ignore[attr-defined]
        )

    def named_list(
        self,
        nodes: tuple[NamedTypeNode, ...] | None,
        owner: str,
        label: str,
        context: str,
        kind: TypeKind,
    ) -> tuple[str, ...]:
        names: list[str] = []
        for named in nodes or ():
            token = self.first(named)
            if named.name.value in names:
                if label == "implements":
                    message = f"'{owner}' implements '{named.name.value}' twice"
                else:
                    message = f"duplicate member '{named.name.value}' in union '{owner}'"
                raise self.fail_at(token, message)
            names.append(named.name.value)
            self.references.append(_Reference(named.name.value, token, context, (kind,)))
        return tuple(names)

    def fields(self, nodes, owner: str, is_input: bool) -> tuple[FieldDef, ...]:
        fields: list[FieldDef] = []
        seen: set[str] = set()
        for node in nodes:
            name = node.name.value
            if name in seen:
                raise self.fail_at(self.first(node.name), f"duplicate field '{owner}.{name}'")
            seen.add(name)
            path = f"{owner}.{name}"
            arguments: tuple[ArgumentDef, ...] = ()
            default_value = None
            if is_input:
                assert isinstance(node, InputValueDefinitionNode)
                if node.default_value is not None:
                    default_value = _literal(node.default_value)
            else:
                assert isinstance(node, FieldDefinitionNode)
                arguments = self.argument_defs(node.arguments or (), path)
            fields.append(
                FieldDef(
                    name=name,
                    type=self.type_ref(node.type, path),
                    arguments=arguments,
                    default_value=default_value,
                    description=node.description.value if node.description else None,
                    comments=self.notes(node, node.description, trailing=True),
                    directives=self.directive_uses(node.directives),
                )
            )
        return tuple(fields)

    def argument_defs(
        self, nodes: tuple[InputValueDefinitionNode, ...], path: str
    ) -> tuple[ArgumentDef, ...]:
        arguments: list[ArgumentDef] = []
        seen: set[str] = set()
        for node in nodes:
            name = node.name.value
            if name in seen:
                raise self.fail_at(self.first(node.name), f"duplicate argument '{name}' on {path}")
            seen.add(name)
            arguments.append(
                ArgumentDef(
                    name=name,
                    type=self.type_ref(node.type, f"{path}({name}:)"),
                    default_value=_literal(node.default_value) if node.default_value else None,
                    description=node.description.value if node.description else None,
                    directives=self.directive_uses(node.directives),
                )
            )
        return tuple(arguments)

    def type_ref(self, node: TypeNode, context: str) -> TypeRef:
        if isinstance(node, NonNullTypeNode):
            return replace(self.type_ref(node.type, context), non_null=True)
        if isinstance(node, ListTypeNode):
            return TypeRef(of_type=self.type_ref(node.type, context))
        assert isinstance(node, NamedTypeNode)
        self.references.append(_Reference(node.name.value, self.first(node), context))
        return TypeRef(name=node.name.value)

    def enum_values(
        self, nodes: tuple[EnumValueDefinitionNode, ...], owner: str
    ) -> tuple[EnumValueDef, ...]:
        values: list[EnumValueDef] = []
        for node in nodes:
            name = node.name.value
            if any(v.name == name for v in values):
                raise self.fail_at(self.first(node.name), f"duplicate value '{owner}.{name}'")
            values.append(
                EnumValueDef(
                    name=name,
                    description=node.description.value if node.description else None,
                    directives=self.directive_uses(node.directives),
                )
            )
        return tuple(values)

    def directive_uses(self, nodes: tuple[DirectiveNode, ...] | None) -> tuple[DirectiveUse, ...]:
        return tuple(
            DirectiveUse(
                node.name.value,
                tuple((arg.name.value, _literal(arg.value)) for arg in node.arguments or ()),
            )
            for node in nodes or ()
        )

    # -- schema, directive and extend ----------------------------------------------

    def add_roots(self, node: SchemaDefinitionNode | SchemaExtensionNode) -> None:
        for op in node.operation_types or ():
            operation = op.operation.value
            if operation in self.roots:
                raise self.fail_at(self.first(op), f"duplicate {operation} root type")
            token = self.first(op.type)
            self.roots[operation] = token
            self.references.append(
                _Reference(op.type.name.value, token, f"schema {operation}", (TypeKind.OBJECT,))
            )

    def add_directive(self, node: DirectiveDefinitionNode) -> None:
        name = node.name.value
        if name in self.directives:
            raise self.fail_at(self.first(node.name), f"duplicate directive '@{name}'")
        self.directives[name] = DirectiveDef(
            name=name,
            locations=tuple(loc.value for loc in node.locations),
            arguments=self.argument_defs(node.arguments or (), f"@{name}"),
            repeatable=node.repeatable,
            description=node.description.value if node.description else None,
        )

    def apply_extensions(self) -> None:
        for kind, node in self.extensions:
            name_token = self.first(node.name)  # type: ignore[attr-defined]
            name = name_token.value
            ext = self.type_body(node, kind)
            base = self.types.get(name)
            if base is None:
                # reported with the other dangling references
                self.references.append(_Reference(name, name_token, "extend"))
                continue
            if base.kind != kind:
                raise self.fail_at(
                    name_token,
                    f"cannot extend '{name}' as {_KIND_LABELS[kind]}, "
                    f"it is {_KIND_LABELS[base.kind]}",
                )
            known = set(base.field_names)
            for field_def, field_node in zip(ext.fields, node.fields or ()):  # type: ignore[attr-defined]
                if field_def.name in known:
                    raise self.fail_at(
                        self.first(field_node.name), f"duplicate field '{name}.{field_def.name}'"
                    )
                known.add(field_def.name)
            for value, value_node in zip(ext.values, node.values or ()):  # type: ignore[attr-defined]
                if value in base.values:
                    raise self.fail_at(self.first(value_node.name), f"duplicate value '{name}.{value}'")
            self.types[name] = replace(
                base,
                interfaces=base.interfaces
                + tuple(i for i in ext.interfaces if i not in base.interfaces),
                members=base.members + tuple(m for m in ext.members if m not in base.members),
                fields=base.fields + ext.fields,
                enum_values=base.enum_values + ext.enum_values,
                directives=base.directives + ext.directives,
            )

    # -- Resolution ------------------------------------------------------------------

    def resolve(self) -> None:
        problems: list[tuple[Token, str]] = []
        for ref in self.references:
            type_def = self.types.get(ref.name)
            if type_def is None:
                if ref.context == "extend":
                    problems.append((ref.token, f"cannot extend unknown type '{ref.name}'"))
                elif ref.name in BUILTIN_SCALARS:
                    if ref.kinds:
                        expected = " or ".join(_KIND_LABELS[k] for k in ref.kinds)
                        problems.append(
                            (ref.token, f"{ref.context}: '{ref.name}' is not {expected}")
                        )
                else:
                    problems.append((ref.token, f"{ref.context}: unknown type '{ref.name}'"))
                continue
            if ref.kinds and type_def.kind not in ref.kinds:
                expected = " or ".join(_KIND_LABELS[k] for k in ref.kinds)
                problems.append(
                    (ref.token, f"{ref.context}: '{ref.name}' is not {expected}")
                )
        if not problems:
            return
        problems.sort(key=lambda p: (p[0].line, p[0].column))
        first = problems[0][0]
        lines = [f"{t.line}:{t.column}: {msg}" for t, msg in problems]
        if len(problems) == 1:
            message = problems[0][1]
        else:
            message = f"{len(problems)} unresolved type references"
        raise ParseError(
            message,
            first.line,
            first.column,
            self.source_name,
            got=first,
            problems=lines,
        )

    def build_roots(self) -> SchemaRoots:
        if not self.roots:
            return SchemaRoots()
        defaults = SchemaRoots()
        # an explicit schema block only declares the roots it names
        return SchemaRoots(
            query=self.roots["query"].value if "query" in self.roots else defaults.query,
            mutation=self.roots["mutation"].value if "mutation" in self.roots else "",
            subscription=self.roots["subscription"].value if "subscription" in self.roots else "",
            explicit=True,
        )


def _literal(node: ConstValueNode) -> str:
    """Canonical SDL text of a constant value."""
    if isinstance(node, (IntValueNode, FloatValueNode, EnumValueNode)):
        return node.value
    if isinstance(node, StringValueNode):
        return print_string(node.value)
    if isinstance(node, BooleanValueNode):
        return "true" if node.value else "false"
    if isinstance(node, NullValueNode):
        return "null"
    if isinstance(node, ListValueNode):
        return "[" + ", ".join(_literal(v) for v in node.values) + "]"
    if isinstance(node, ObjectValueNode):
        return "{" + ", ".join(f"{f.name.value}: {_literal(f.value)}" for f in node.fields) + "}"
    raise TypeError(f"not a constant value: {type(node).__name__}")
