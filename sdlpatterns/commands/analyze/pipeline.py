"""Orchestrator for the analysis pipeline.

Chains the steps text -> tokens -> SchemaGraph -> findings. Lex and parse
errors are fatal and propagate unchanged with their position; matcher
failures are isolated by the engine and reported through ``on_progress``.
"""

from __future__ import annotations

import asyncio
from collections.abc import Callable
from dataclasses import dataclass

from sdlpatterns.commands.analyze.steps.detect import DetectStep
from sdlpatterns.commands.analyze.steps.parse import ParseStep
from sdlpatterns.commands.analyze.steps.tokenize import TokenizeStep
from sdlpatterns.commands.analyze.steps.types import DetectionInput, SourceText, TokenStream
from sdlpatterns.patterns.engine import CancelToken
from sdlpatterns.patterns.errors import AnalysisError
from sdlpatterns.patterns.registry import PatternRegistry
from sdlpatterns.patterns.types import AnalysisResult
from sdlpatterns.sdl.errors import SDLError
from sdlpatterns.sdl.graph import SchemaGraph


@dataclass
class PipelineResult:
    """Everything one run produced, for the reporting layer."""

    graph: SchemaGraph
    analysis: AnalysisResult
    source_name: str | None = None
    token_count: int = 0


async def run_analysis(
    text: str,
    *,
    source_name: str | None = None,
    registry: PatternRegistry | None = None,
    max_workers: int | None = None,
    cancel: CancelToken | None = None,
    on_progress: Callable[[str], None] | None = None,
) -> PipelineResult:
    """Analyze SDL text with ``registry`` (built-in matchers by default)."""

    def progress(msg: str) -> None:
        if on_progress:
            on_progress(msg)

    try:
        tokens = await TokenizeStep().run(SourceText(text=text, source_name=source_name))
        progress(f"Read {len(tokens) - 1} tokens")

        graph = await ParseStep().run(TokenStream(tokens=tokens, source_name=source_name))
        progress(f"Parsed {len(graph)} types, {len(graph.directives)} directive definitions")

        detect_step = DetectStep(max_workers=max_workers, cancel=cancel)
        analysis = await detect_step.run(DetectionInput(graph=graph, registry=registry))
    except (SDLError, AnalysisError):
        raise
    except Exception as e:
        raise AnalysisError(f"unexpected failure: {type(e).__name__}: {e}") from e

    for failure in analysis.failures:
        progress(f"  Could not evaluate {failure.pattern_id}: {failure.message}")
    progress(f"Found {len(analysis.findings)} findings")

    return PipelineResult(
        graph=graph,
        analysis=analysis,
        source_name=source_name,
        token_count=len(tokens) - 1,
    )


def analyze_sdl(
    text: str,
    *,
    source_name: str | None = None,
    registry: PatternRegistry | None = None,
    max_workers: int | None = None,
    cancel: CancelToken | None = None,
    on_progress: Callable[[str], None] | None = None,
) -> PipelineResult:
    """Synchronous entry point around ``run_analysis``."""
    return asyncio.run(
        run_analysis(
            text,
            source_name=source_name,
            registry=registry,
            max_workers=max_workers,
            cancel=cancel,
            on_progress=on_progress,
        )
    )
