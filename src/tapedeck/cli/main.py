"""tapedeck CLI entry point."""

import typer

from tapedeck import __version__
from tapedeck.cli.render_cmd import render

app = typer.Typer(
    name="tapedeck",
    help="Record HTTP interactions to human-readable tapes",
    no_args_is_help=True,
)

# Register subcommands
app.command()(render)


def version_callback(value: bool) -> None:
    """Print version and exit."""
    if value:
        typer.echo(f"tapedeck {__version__}")
        raise typer.Exit()


@app.callback()
def main(
    version: bool = typer.Option(
        False,
        "--version",
        "-v",
        help="Show version and exit.",
        callback=version_callback,
        is_eager=True,
    ),
) -> None:
    """Record HTTP interactions to human-readable tapes."""
