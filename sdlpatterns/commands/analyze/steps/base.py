"""Steps of the analysis pipeline: tokenize, parse, detect."""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any, Generic, TypeVar

In = TypeVar("In")
Out = TypeVar("Out")


class StepValidationError(Exception):
    """A step produced output the next step cannot consume."""

    def __init__(self, message: str, details: dict[str, Any] | None = None):
        super().__init__(message)
        self.details: dict[str, Any] = details or {}


class Step(ABC, Generic[In, Out]):
    """One stage of the pipeline, turning an In into an Out.

    ``name`` shows up in progress messages and failure reports.
    """

    name: str = "step"

    @abstractmethod
    async def run(self, input: In) -> Out:
        ...

    def _validate_output(self, output: Out) -> None:
        """Check the step output before it is handed on.

        Raises StepValidationError on failure. Subclasses extend this with
        checks on their own output type.
        """
        if output is None:
            raise StepValidationError(f"{self.name} produced no output", {"step": self.name})


class MechanicalStep(Step[In, Out]):
    """A deterministic step: same input, same output.

    Validation failures propagate at once, nothing is retried.
    """

    @abstractmethod
    async def _execute(self, input: In) -> Out:
        ...

    async def run(self, input: In) -> Out:
        output = await self._execute(input)
        self._validate_output(output)
        return output
