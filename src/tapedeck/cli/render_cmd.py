"""tapedeck render -- turn a JSON capture into a canonical tape document.

Loads captured interactions, replays each one through the header
filters configured in tapedeck.yaml, and writes the resulting tape as
YAML to stdout or to a file.
"""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Optional

import typer
import yaml
from pydantic import ValidationError
from rich.console import Console
from rich.logging import RichHandler

from tapedeck.errors import ConfigurationError
from tapedeck.files import FileResolver
from tapedeck.handler.recorder import rerecord
from tapedeck.models.config import (
    build_header_filter,
    find_project_root,
    load_config_file,
    load_project_config,
)
from tapedeck.tape.mapper import TapeMapper
from tapedeck.tape.models import Tape
from tapedeck.tape.writer import TapeWriter

console = Console(stderr=True)


def render(
    capture: str = typer.Argument(..., help="Path to a JSON capture file"),
    output: Optional[str] = typer.Option(None, "-o", "--output", help="Write the tape here instead of stdout"),
    config_path: Optional[str] = typer.Option(None, "--config", help="Config file (default: tapedeck.yaml in project root)"),
    name: Optional[str] = typer.Option(None, "--name", help="Override the tape name"),
    verbose: bool = typer.Option(False, "-V", "--verbose", help="Log each recorded interaction"),
) -> None:
    """Render a JSON capture as a filtered, canonical YAML tape."""
    if verbose:
        logging.basicConfig(
            level=logging.DEBUG,
            format="%(message)s",
            handlers=[RichHandler(console=console, show_path=False)],
        )

    capture_path = Path(capture)
    if not capture_path.exists():
        console.print(f"[bold red]Error:[/bold red] File not found: {capture}")
        raise typer.Exit(code=1)

    project_root = find_project_root()
    try:
        if config_path is not None:
            config = load_config_file(Path(config_path))
        else:
            config = load_project_config(project_root)
    except (yaml.YAMLError, ValidationError) as exc:
        console.print(f"[bold red]Error:[/bold red] Invalid configuration: {exc}")
        raise typer.Exit(code=1)

    try:
        captured = Tape.model_validate(json.loads(capture_path.read_text(encoding="utf-8")))
    except (json.JSONDecodeError, ValidationError) as exc:
        console.print(f"[bold red]Error:[/bold red] Invalid capture file '{capture}': {exc}")
        raise typer.Exit(code=1)

    if name:
        captured = captured.model_copy(update={"name": name})

    tape = rerecord(captured, lambda: build_header_filter(config))

    writer = TapeWriter(
        TapeMapper(file_resolver=FileResolver(project_root / config.tape_root)),
        width=config.width,
    )
    try:
        if output is None:
            typer.echo(writer.dumps(tape), nl=False)
            return
        written = writer.write(tape, Path(output))
    except ConfigurationError as exc:
        console.print(f"[bold red]Error:[/bold red] {exc.message}")
        raise typer.Exit(code=1)

    console.print(
        f"[green]Wrote tape '{tape.name}' with {len(tape)} interaction(s) to {written}[/green]"
    )
