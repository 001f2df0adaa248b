"""Errors raised while turning SDL text into a SchemaGraph."""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from sdlpatterns.sdl.types import Token


class SDLError(Exception):
    """Base class for errors that carry a source position."""

    def __init__(
        self,
        message: str,
        line: int,
        column: int,
        source_name: str | None = None,
    ):
        self.message = message
        self.line = line
        self.column = column
        self.source_name = source_name
        super().__init__(self._format())

    @property
    def location(self) -> str:
        prefix = f"{self.source_name}:" if self.source_name else ""
        return f"{prefix}{self.line}:{self.column}"

    def _format(self) -> str:
        return f"{self.location}: {self.message}"


class LexError(SDLError):
    """Malformed character stream (unterminated string, stray symbol...)."""


class ParseError(SDLError):
    """Grammar violation or unresolved reference.

    ``expected`` and ``got`` describe the failing token for grammar errors.
    For the aggregated reference check, ``problems`` lists every dangling
    name in source order and the position is that of the first one.
    """

    def __init__(
        self,
        message: str,
        line: int,
        column: int,
        source_name: str | None = None,
        expected: str | None = None,
        got: Token | None = None,
        problems: list[str] | None = None,
    ):
        self.expected = expected
        self.got = got
        self.problems: list[str] = problems or []
        super().__init__(message, line, column, source_name)

    def _format(self) -> str:
        text = super()._format()
        if len(self.problems) > 1:
            text += "".join(f"\n  - {p}" for p in self.problems)
        return text
