"""CLI command re-printing a schema in canonical SDL."""

from __future__ import annotations

from pathlib import Path

import click

from sdlpatterns.helpers.console import console


@click.command()
@click.argument("schema_path", type=click.Path(exists=True, dir_okay=False))
@click.option("-o", "--output", default=None, help="Write the SDL to this file instead of stdout")
def normalize(schema_path: str, output: str | None) -> None:
    """Parse a schema and print it back as canonical SDL.

    Introspection results (.json) are converted to SDL first.
    """
    from sdlpatterns.helpers.introspection import SchemaLoadError, load_schema_text
    from sdlpatterns.sdl.errors import SDLError
    from sdlpatterns.sdl.parser import parse_sdl
    from sdlpatterns.sdl.printer import print_sdl

    try:
        graph = parse_sdl(load_schema_text(schema_path), source_name=schema_path)
    except (SchemaLoadError, SDLError) as e:
        raise click.ClickException(str(e)) from e

    sdl = print_sdl(graph)
    if output is None:
        click.echo(sdl, nl=not sdl.endswith("\n"))
        return

    out_path = Path(output)
    out_path.parent.mkdir(parents=True, exist_ok=True)
    out_path.write_text(sdl)
    console.print(f"[green]Normalized SDL written to {out_path}[/green]")
