"""Step: Parse tokens into a resolved SchemaGraph."""

from __future__ import annotations

from sdlpatterns.commands.analyze.steps.base import MechanicalStep, StepValidationError
from sdlpatterns.commands.analyze.steps.types import TokenStream
from sdlpatterns.sdl.graph import SchemaGraph
from sdlpatterns.sdl.parser import parse


class ParseStep(MechanicalStep[TokenStream, SchemaGraph]):
    name = "parse"

    async def _execute(self, input: TokenStream) -> SchemaGraph:
        return parse(input.tokens, input.source_name)

    def _validate_output(self, output: SchemaGraph) -> None:
        dangling = sorted(
            {
                ref.named
                for type_def in output
                for field_def in type_def.fields
                for ref in [field_def.type, *(a.type for a in field_def.arguments)]
                if not output.resolves(ref.named)
            }
        )
        if dangling:
            raise StepValidationError(
                "parsed graph has dangling references", {"names": dangling}
            )
