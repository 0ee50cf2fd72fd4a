"""Info command implementation."""

from __future__ import annotations

from simpeaks.ui import environment_info, print_summary


def info_command() -> None:
    """Show version and environment information."""
    print_summary(environment_info(), title="SimPeaks System Information")
