"""CLI command listing the registered pattern matchers."""

from __future__ import annotations

import click
from rich.table import Table

from sdlpatterns.helpers.console import console


@click.command()
def patterns() -> None:
    """List the patterns the analyzer can detect."""
    from sdlpatterns.patterns.registry import default_registry

    registry = default_registry()

    table = Table(title=f"{len(registry)} registered patterns")
    table.add_column("ID", style="cyan", no_wrap=True)
    table.add_column("Title")
    table.add_column("Description")
    for matcher in registry:
        table.add_row(matcher.pattern_id, matcher.title, matcher.description)
    console.print(table)
