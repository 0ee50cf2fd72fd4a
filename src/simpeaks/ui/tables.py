"""Rich tables with the application's styling."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from rich import box
from rich.table import Table

from .console import console

if TYPE_CHECKING:
    from collections.abc import Iterable

    from simpeaks.core.domain.frame import FrameBuffer

__all__ = ["create_table", "print_frame_statistics", "print_summary"]


def create_table(title: str | None = None, show_header: bool = True) -> Table:
    """Create a table with consistent styling.

    Args:
        title: Optional table title
        show_header: Whether to show table header

    Returns
    -------
        Configured Table instance
    """
    return Table(
        title=title,
        title_style="header" if title else None,
        box=box.ROUNDED,
        show_header=show_header,
        header_style="bold cyan",
        border_style="dim",
    )


def print_summary(items: dict[str, Any], title: str = "Summary") -> None:
    """Print a two-column key/value table."""
    table = create_table(title, show_header=False)
    table.add_column("Item", style="metric")
    table.add_column("Value", style="value")

    for key, value in items.items():
        table.add_row(key, str(value))

    console.print(table)


def print_frame_statistics(frames: Iterable[FrameBuffer], title: str = "Frames") -> None:
    """Print id, min, max, mean and sum of each frame."""
    table = create_table(title)
    table.add_column("ID", justify="right", style="key")
    table.add_column("Min", justify="right")
    table.add_column("Max", justify="right")
    table.add_column("Mean", justify="right")
    table.add_column("Sum", justify="right", style="value")

    for frame in frames:
        data = frame.data.astype("float64")
        table.add_row(
            str(frame.unique_id),
            f"{data.min():.6g}",
            f"{data.max():.6g}",
            f"{data.mean():.6g}",
            f"{data.sum():.6g}",
        )

    console.print(table)
