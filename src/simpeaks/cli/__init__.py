"""Command-line interface for SimPeaks."""

from simpeaks.cli.app import app

__all__ = ["app"]
