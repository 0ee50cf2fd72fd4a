"""Console configuration and theme for the SimPeaks CLI."""

from rich.console import Console
from rich.theme import Theme

from simpeaks import __version__

SIMPEAKS_THEME = Theme(
    {
        # --- Semantic Status ---
        "success": "bold green",
        "warning": "bold yellow",
        "error": "bold red",
        "info": "cyan",
        # --- UI Structure ---
        "header": "bold cyan",
        "panel.border": "blue",
        # --- Data & Values ---
        "key": "cyan",
        "value": "green",
        "metric": "bold green",
        "path": "blue underline",
        "dim": "dim",
    }
)

# Single console instance for the whole application
console = Console(theme=SIMPEAKS_THEME)

VERSION = __version__
PROG_NAME = "SimPeaks"

__all__ = ["PROG_NAME", "SIMPEAKS_THEME", "VERSION", "console"]
