"""Version and environment display."""

from __future__ import annotations

import platform
import sys

from simpeaks.ui.console import PROG_NAME, VERSION, console


def show_version() -> None:
    """Show version information (for --version flag)."""
    console.print(f"\n[header]{PROG_NAME}[/header] [dim]v{VERSION}[/dim]\n")


def environment_info() -> dict[str, str]:
    """Versions of the interpreter and the numeric stack."""
    import numpy as np
    import pydantic

    return {
        PROG_NAME: VERSION,
        "Python": sys.version.split()[0],
        "Platform": platform.platform(),
        "NumPy": np.__version__,
        "Pydantic": pydantic.VERSION,
    }


__all__ = ["environment_info", "show_version"]
