"""Init command implementation."""

from __future__ import annotations

from pathlib import Path
from typing import Annotated

import typer

from simpeaks.io.config import generate_default_config
from simpeaks.ui import console, error, info, success


def init_command(
    path: Annotated[
        Path,
        typer.Argument(
            help="Path for new configuration file",
            dir_okay=False,
            resolve_path=True,
        ),
    ] = Path("simpeaks.toml"),
    force: Annotated[
        bool,
        typer.Option(
            "--force",
            "-f",
            help="Overwrite existing file",
        ),
    ] = False,
) -> None:
    """Generate a default configuration file.

    Examples
    --------
      Create default config:
        $ simpeaks init

      Overwrite existing config:
        $ simpeaks init detector.toml --force
    """
    if path.exists() and not force:
        error(f"File already exists: [path]{path}[/path]")
        info("Use --force to overwrite")
        raise typer.Exit(1)

    path.write_text(generate_default_config())
    success(f"Created configuration file: [path]{path}[/path]")
    console.print(f"\n[dim]Next: simpeaks run {path.name} --frames 5[/dim]")
