"""CLI command modules for SimPeaks.

Each module exports one command function; app.py registers them.
"""

from simpeaks.cli.commands.info import info_command
from simpeaks.cli.commands.init import init_command
from simpeaks.cli.commands.run import run_command
from simpeaks.cli.commands.shapes import shapes_command

__all__ = ["info_command", "init_command", "run_command", "shapes_command"]
