"""SDL front end: lexer, parser, schema graph and printer."""

from __future__ import annotations

from sdlpatterns.sdl.errors import (
    LexError as LexError,
    ParseError as ParseError,
    SDLError as SDLError,
)
from sdlpatterns.sdl.graph import SchemaGraph as SchemaGraph
from sdlpatterns.sdl.lexer import tokenize as tokenize
from sdlpatterns.sdl.parser import parse as parse, parse_sdl as parse_sdl
from sdlpatterns.sdl.printer import print_sdl as print_sdl

__all__ = [
    "LexError",
    "ParseError",
    "SDLError",
    "SchemaGraph",
    "parse",
    "parse_sdl",
    "print_sdl",
    "tokenize",
]
