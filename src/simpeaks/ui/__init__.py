"""Terminal output and logging for SimPeaks.

Submodules:
- console: Theme and console instance
- logging: File and console logging
- branding: Version and environment display
- messages: Status messages
- tables: Table display utilities
"""

from simpeaks.ui.branding import environment_info, show_version
from simpeaks.ui.console import PROG_NAME, SIMPEAKS_THEME, VERSION, console
from simpeaks.ui.logging import close_logging, log, log_dict, log_section, setup_logging
from simpeaks.ui.messages import error, info, show_header, success, warning
from simpeaks.ui.tables import create_table, print_frame_statistics, print_summary

__all__ = [
    "PROG_NAME",
    "SIMPEAKS_THEME",
    "VERSION",
    "close_logging",
    "console",
    "create_table",
    "environment_info",
    "error",
    "info",
    "log",
    "log_dict",
    "log_section",
    "print_frame_statistics",
    "print_summary",
    "setup_logging",
    "show_header",
    "show_version",
    "success",
    "warning",
]
