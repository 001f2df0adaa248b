"""CLI command for the analyze stage."""

from __future__ import annotations

from pathlib import Path

import click
from rich.markup import escape
from rich.table import Table

from sdlpatterns.commands.analyze.pipeline import PipelineResult, analyze_sdl
from sdlpatterns.formats.report import PatternReport
from sdlpatterns.helpers.console import console, err_console, truncate
from sdlpatterns.patterns.types import AnalysisResult

_CONFIDENCE_STYLES = {"high": "green", "medium": "yellow", "low": "dim"}


@click.command()
@click.argument("schema_path", type=click.Path(exists=True, dir_okay=False))
@click.option(
    "--format",
    "output_format",
    type=click.Choice(["table", "json", "yaml"]),
    default="table",
    show_default=True,
    help="Report format",
)
@click.option("-o", "--output", default=None, help="Write the report to this file")
@click.option(
    "--only",
    "only",
    multiple=True,
    help="Only run this pattern (id or matcher name). Can be repeated.",
)
@click.option(
    "--skip",
    "skip",
    multiple=True,
    help="Do not run this pattern (id or matcher name). Can be repeated.",
)
@click.option(
    "--workers",
    type=click.IntRange(min=1),
    default=None,
    envvar="SDLPATTERNS_WORKERS",
    help="Matcher worker threads (1 runs sequentially)",
)
@click.option(
    "--timeout",
    type=click.FloatRange(min=0, min_open=True),
    default=None,
    envvar="SDLPATTERNS_TIMEOUT",
    help="Abort the analysis after this many seconds",
)
def analyze(
    schema_path: str,
    output_format: str,
    output: str | None,
    only: tuple[str, ...],
    skip: tuple[str, ...],
    workers: int | None,
    timeout: float | None,
) -> None:
    """Detect design patterns in a GraphQL schema (SDL or introspection .json)."""
    from sdlpatterns.helpers.introspection import SchemaLoadError, load_schema_text
    from sdlpatterns.patterns.engine import CancelToken
    from sdlpatterns.patterns.errors import AnalysisCancelled, AnalysisError
    from sdlpatterns.patterns.registry import default_registry
    from sdlpatterns.sdl.errors import SDLError

    try:
        registry = default_registry().select(only=only, skip=skip)
    except ValueError as e:
        raise click.BadParameter(str(e), param_hint="--only/--skip") from e

    try:
        text = load_schema_text(schema_path)
    except SchemaLoadError as e:
        raise click.ClickException(str(e)) from e

    # A report piped to stdout must stay parseable.
    quiet = output_format != "table" and output is None

    def on_progress(msg: str) -> None:
        if not quiet:
            console.print(f"  {escape(msg)}")

    if not quiet:
        console.print(f"[bold]Analyzing schema:[/bold] {schema_path}")
        console.print(f"  {len(registry)} matchers")

    cancel = CancelToken(timeout=timeout) if timeout is not None else None
    try:
        result = analyze_sdl(
            text,
            source_name=schema_path,
            registry=registry,
            max_workers=workers,
            cancel=cancel,
            on_progress=on_progress,
        )
    except SDLError as e:
        raise click.ClickException(str(e)) from e
    except AnalysisCancelled as e:
        raise click.ClickException(f"{e} (timeout {timeout}s)") from e
    except AnalysisError as e:
        raise click.ClickException(str(e)) from e

    for failure in result.analysis.failures:
        err_console.print(
            f"[yellow]Warning: matcher {failure.matcher} ({failure.pattern_id}) "
            f"failed: {escape(failure.message)}[/yellow]",
        )

    if output_format == "table":
        _print_table(result.analysis, schema_path)
        if output:
            _write(output, _report(result, schema_path).to_json())
        return

    report = _report(result, schema_path)
    rendered = report.to_json() if output_format == "json" else report.to_yaml()
    if output:
        _write(output, rendered)
    else:
        click.echo(rendered.rstrip("\n"))


def _report(result: PipelineResult, source: str) -> PatternReport:
    return PatternReport.from_result(
        result.analysis, source=source, type_count=len(result.graph)
    )


def _write(output: str, content: str) -> None:
    out_path = Path(output)
    out_path.parent.mkdir(parents=True, exist_ok=True)
    out_path.write_text(content if content.endswith("\n") else content + "\n")
    console.print(f"[green]Report written to {out_path}[/green]")


def _print_table(analysis: AnalysisResult, source: str) -> None:
    if not analysis.findings:
        console.print("[yellow]No patterns detected.[/yellow]")
        return

    table = Table(title=f"Patterns in {Path(source).name}")
    table.add_column("Subject", style="cyan")
    table.add_column("Pattern")
    table.add_column("Confidence")
    table.add_column("Rationale")

    for finding in analysis.findings:
        confidence = finding.confidence.value
        style = _CONFIDENCE_STYLES.get(confidence, "")
        table.add_row(
            finding.subject,
            finding.pattern_id,
            f"[{style}]{confidence}[/{style}]" if style else confidence,
            escape(truncate(finding.rationale, 100)),
        )
    console.print(table)
