"""Intermediate types passed between pipeline steps."""

from __future__ import annotations

from dataclasses import dataclass

from sdlpatterns.patterns.registry import PatternRegistry
from sdlpatterns.sdl.graph import SchemaGraph
from sdlpatterns.sdl.types import Token


@dataclass
class SourceText:
    text: str
    source_name: str | None = None


@dataclass
class TokenStream:
    tokens: list[Token]
    source_name: str | None = None


@dataclass
class DetectionInput:
    graph: SchemaGraph
    registry: PatternRegistry | None = None  # None for the built-in matchers
