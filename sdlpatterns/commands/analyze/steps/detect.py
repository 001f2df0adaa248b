"""Step: Evaluate the pattern registry against a SchemaGraph."""

from __future__ import annotations

import asyncio

from sdlpatterns.commands.analyze.steps.base import MechanicalStep
from sdlpatterns.commands.analyze.steps.types import DetectionInput
from sdlpatterns.patterns.engine import CancelToken, analyze
from sdlpatterns.patterns.types import AnalysisResult


class DetectStep(MechanicalStep[DetectionInput, AnalysisResult]):
    """Run the detection engine off the event loop."""

    name = "detect"

    def __init__(self, max_workers: int | None = None, cancel: CancelToken | None = None):
        self.max_workers = max_workers
        self.cancel = cancel

    async def _execute(self, input: DetectionInput) -> AnalysisResult:
        return await asyncio.to_thread(
            analyze,
            input.graph,
            input.registry,
            max_workers=self.max_workers,
            cancel=self.cancel,
        )
