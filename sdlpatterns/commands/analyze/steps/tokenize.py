"""Step: Tokenize SDL text."""

from __future__ import annotations

from sdlpatterns.commands.analyze.steps.base import MechanicalStep, StepValidationError
from sdlpatterns.commands.analyze.steps.types import SourceText
from sdlpatterns.sdl.lexer import tokenize
from sdlpatterns.sdl.types import Token, TokenKind


class TokenizeStep(MechanicalStep[SourceText, list[Token]]):
    name = "tokenize"

    async def _execute(self, input: SourceText) -> list[Token]:
        return tokenize(input.text, input.source_name)

    def _validate_output(self, output: list[Token]) -> None:
        eof_count = sum(1 for t in output if t.kind == TokenKind.EOF)
        if not output or output[-1].kind != TokenKind.EOF or eof_count != 1:
            raise StepValidationError(
                "token stream must end with exactly one EOF token",
                {"eof_count": eof_count},
            )
