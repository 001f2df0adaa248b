"""The resolved, read-only model of a parsed schema.

Types are owned once by a name-keyed mapping and referenced everywhere else
by name, so interface implementation, union membership and field return
types form a graph without any object holding another.
"""

from __future__ import annotations

from collections.abc import Iterator, Mapping
from types import MappingProxyType

from sdlpatterns.sdl.types import (
    BUILTIN_SCALARS,
    ArgumentDef,
    DirectiveDef,
    FieldDef,
    SchemaRoots,
    TypeDef,
    TypeKind,
)

_COMPOSITE_KINDS = frozenset({TypeKind.OBJECT, TypeKind.INTERFACE, TypeKind.UNION})


class SchemaGraph:
    """Name-keyed type definitions plus the reverse indexes matchers need.

    Built by the parser once every reference is known to resolve. Nothing
    exposed here can be mutated; the reverse indexes are computed up front
    so concurrent readers never race on lazy state.
    """

    def __init__(
        self,
        types: Mapping[str, TypeDef],
        directives: Mapping[str, DirectiveDef] | None = None,
        roots: SchemaRoots | None = None,
    ):
        self._types: Mapping[str, TypeDef] = MappingProxyType(dict(types))
        self._directives: Mapping[str, DirectiveDef] = MappingProxyType(dict(directives or {}))
        self.roots = roots or SchemaRoots()

        implementers: dict[str, list[str]] = {}
        containing: dict[str, list[str]] = {}
        returning: dict[str, list[tuple[TypeDef, FieldDef]]] = {}
        typed_args: dict[str, list[tuple[TypeDef, FieldDef, ArgumentDef]]] = {}
        for type_def in self._types.values():
            for iface in type_def.interfaces:
                implementers.setdefault(iface, []).append(type_def.name)
            for member in type_def.members:
                containing.setdefault(member, []).append(type_def.name)
            for f in type_def.fields:
                returning.setdefault(f.type.named, []).append((type_def, f))
                for arg in f.arguments:
                    typed_args.setdefault(arg.type.named, []).append((type_def, f, arg))

        self._implementers = {k: tuple(v) for k, v in implementers.items()}
        self._containing = {k: tuple(v) for k, v in containing.items()}
        self._returning = {k: tuple(v) for k, v in returning.items()}
        self._typed_args = {k: tuple(v) for k, v in typed_args.items()}

    # -- Mapping-like access ---------------------------------------------------

    @property
    def types(self) -> Mapping[str, TypeDef]:
        return self._types

    @property
    def directives(self) -> Mapping[str, DirectiveDef]:
        return self._directives

    def __contains__(self, name: object) -> bool:
        return name in self._types

    def __iter__(self) -> Iterator[TypeDef]:
        return iter(self._types.values())

    def __len__(self) -> int:
        return len(self._types)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, SchemaGraph):
            return NotImplemented
        return (
            dict(self._types) == dict(other._types)
            and dict(self._directives) == dict(other._directives)
            and self.roots == other.roots
        )

    def __repr__(self) -> str:
        return f"SchemaGraph({len(self._types)} types)"

    def get(self, name: str) -> TypeDef | None:
        return self._types.get(name)

    def of_kind(self, kind: TypeKind) -> list[TypeDef]:
        return [t for t in self._types.values() if t.kind == kind]

    def kind_of(self, name: str) -> TypeKind | None:
        """Kind of a named type; built-in scalars report SCALAR."""
        type_def = self._types.get(name)
        if type_def is not None:
            return type_def.kind
        if name in BUILTIN_SCALARS:
            return TypeKind.SCALAR
        return None

    def resolves(self, name: str) -> bool:
        return name in self._types or name in BUILTIN_SCALARS

    # -- Classification --------------------------------------------------------

    def is_scalar(self, name: str) -> bool:
        return self.kind_of(name) == TypeKind.SCALAR

    def is_scalar_like(self, name: str) -> bool:
        """Leaf types: scalars (built-in or custom) and enums."""
        return self.kind_of(name) in (TypeKind.SCALAR, TypeKind.ENUM)

    def is_composite(self, name: str) -> bool:
        return self.kind_of(name) in _COMPOSITE_KINDS

    # -- Reverse indexes -------------------------------------------------------

    def implementers(self, interface: str) -> tuple[str, ...]:
        """Object (and interface) types declaring ``implements interface``."""
        return self._implementers.get(interface, ())

    def object_implementers(self, interface: str) -> tuple[str, ...]:
        return tuple(
            name for name in self.implementers(interface)
            if self.kind_of(name) == TypeKind.OBJECT
        )

    def unions_containing(self, name: str) -> tuple[str, ...]:
        return self._containing.get(name, ())

    def fields_returning(self, name: str) -> tuple[tuple[TypeDef, FieldDef], ...]:
        """Every (owner, field) whose return type unwraps to ``name``."""
        return self._returning.get(name, ())

    def arguments_typed(self, name: str) -> tuple[tuple[TypeDef, FieldDef, ArgumentDef], ...]:
        return self._typed_args.get(name, ())

    # -- Roots -----------------------------------------------------------------

    def root_type(self, operation: str) -> TypeDef | None:
        """Root type for ``query``, ``mutation`` or ``subscription``."""
        return self._types.get(getattr(self.roots, operation))

    def root_fields(self, operation: str) -> tuple[FieldDef, ...]:
        root = self.root_type(operation)
        return root.fields if root is not None else ()

    def is_root(self, name: str) -> bool:
        return name in (self.roots.query, self.roots.mutation, self.roots.subscription)
