from __future__ import annotations

import typer

from mrel import __version__
from mrel.cli.commands.release_cmd import check, release, steps

app = typer.Typer(
    add_completion=False,
    no_args_is_help=True,
    rich_markup_mode="rich",
    help="Release gate for multi-module builds.",
)

app.command()(check)
app.command()(release)
app.command()(steps)


def _print_version(value: bool) -> None:
    if value:
        typer.echo(__version__)
        raise typer.Exit(code=0)


@app.callback()
def _main(  # pyright: ignore[reportUnusedFunction]
    version: bool = typer.Option(
        False, "--version", help="Show version and exit.", is_eager=True, callback=_print_version
    ),
) -> None:
    pass


def main() -> None:
    app()
