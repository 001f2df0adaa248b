"""Pipeline steps for the analysis engine."""

from __future__ import annotations

from sdlpatterns.commands.analyze.steps.base import (
    MechanicalStep as MechanicalStep,
    Step as Step,
    StepValidationError as StepValidationError,
)

__all__ = [
    "MechanicalStep",
    "Step",
    "StepValidationError",
]
