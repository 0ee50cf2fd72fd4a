"""Main Typer application for SimPeaks."""

from typing import Annotated

import typer

from simpeaks.cli.callbacks import version_callback
from simpeaks.cli.commands import info_command, init_command, run_command, shapes_command

app = typer.Typer(
    name="simpeaks",
    help="SimPeaks - Simulated detector frames of peaks on background and noise",
    no_args_is_help=True,
    rich_markup_mode="rich",
)


@app.callback()
def main(
    version: Annotated[
        bool | None,
        typer.Option(
            "--version",
            "-v",
            help="Show version and exit.",
            callback=version_callback,
            is_eager=True,
        ),
    ] = None,
) -> None:
    """SimPeaks - Simulated detector frames of peaks on background and noise."""


app.command(name="init")(init_command)
app.command(name="run")(run_command)
app.command(name="shapes")(shapes_command)
app.command(name="info")(info_command)
