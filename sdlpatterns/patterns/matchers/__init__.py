"""Built-in pattern matchers."""

from __future__ import annotations

from sdlpatterns.patterns.base import Matcher
from sdlpatterns.patterns.matchers.arguments import ArgumentAsFormatter, ArgumentAsSelector
from sdlpatterns.patterns.matchers.fields import DifferentFieldsSameValue
from sdlpatterns.patterns.matchers.mutations import (
    DedicatedMutationInput,
    SpecificMutationPayload,
)
from sdlpatterns.patterns.matchers.pagination import CursorConnection, OffsetPagination
from sdlpatterns.patterns.matchers.polymorphism import (
    ErrorResultUnion,
    ExplicitTypeField,
    GenericObjectWithTypeField,
    GlobalObjectIdentification,
    SingleImplementationInterface,
    UnionWithWeakInterface,
    ValueObject,
)

BUILTIN_MATCHERS: tuple[type[Matcher], ...] = (
    ArgumentAsSelector,
    ArgumentAsFormatter,
    GenericObjectWithTypeField,
    UnionWithWeakInterface,
    ExplicitTypeField,
    SpecificMutationPayload,
    DedicatedMutationInput,
    DifferentFieldsSameValue,
    CursorConnection,
    OffsetPagination,
    GlobalObjectIdentification,
    ErrorResultUnion,
    SingleImplementationInterface,
    ValueObject,
)


def builtin_matchers() -> list[Matcher]:
    """Fresh instances of every built-in matcher."""
    return [cls() for cls in BUILTIN_MATCHERS]


__all__ = [
    "BUILTIN_MATCHERS",
    "ArgumentAsFormatter",
    "ArgumentAsSelector",
    "CursorConnection",
    "DedicatedMutationInput",
    "DifferentFieldsSameValue",
    "ErrorResultUnion",
    "ExplicitTypeField",
    "GenericObjectWithTypeField",
    "GlobalObjectIdentification",
    "OffsetPagination",
    "SingleImplementationInterface",
    "SpecificMutationPayload",
    "UnionWithWeakInterface",
    "ValueObject",
    "builtin_matchers",
]
