"""CLI entry point for sdl-patterns."""

from __future__ import annotations

import click
from dotenv import load_dotenv

from sdlpatterns.commands.analyze.cmd import analyze
from sdlpatterns.commands.normalize.cmd import normalize
from sdlpatterns.commands.patterns.cmd import patterns

load_dotenv()


@click.group()
@click.version_option(version="0.1.0", prog_name="sdl-patterns")
def cli() -> None:
    """Detect design patterns in GraphQL schemas."""


cli.add_command(analyze)
cli.add_command(patterns)
cli.add_command(normalize)


if __name__ == "__main__":
    cli()
