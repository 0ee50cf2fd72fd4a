"""Shapes command implementation."""

from __future__ import annotations

from typing import Annotated

import typer

from simpeaks.core.domain.peaks import PeakType1D, PeakType2D
from simpeaks.ui import console, create_table


def shapes_command(
    dim: Annotated[
        int | None,
        typer.Option("--dim", "-d", min=1, max=2, help="Only list shapes for 1D or 2D frames"),
    ] = None,
) -> None:
    """List the peak shapes and their menu ordinals."""
    for enum_cls in (PeakType1D, PeakType2D):
        ndim = 1 if enum_cls is PeakType1D else 2
        if dim is not None and dim != ndim:
            continue
        table = create_table(f"{ndim}D peak shapes")
        table.add_column("Value", justify="right", style="key")
        table.add_column("Name", style="value")
        for member in enum_cls:
            table.add_row(str(int(member)), member.display_name)
        console.print(table)
