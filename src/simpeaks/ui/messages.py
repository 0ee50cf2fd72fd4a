"""One-line status messages for the CLI, mirrored to the log file."""

from __future__ import annotations

from rich.rule import Rule

from .console import console
from .logging import log, log_section

__all__ = [
    "error",
    "info",
    "show_header",
    "success",
    "warning",
]

# level -> (marker, style)
_MARKERS = {
    "success": ("+", "success"),
    "info": ("-", "dim"),
    "warning": ("!", "warning"),
    "error": ("x", "error"),
}


def _emit(kind: str, message: str, indent: int, do_log: bool) -> None:
    marker, style = _MARKERS[kind]
    console.print(f"{'  ' * indent}[{style}]{marker}[/{style}] {message}")
    if do_log:
        log(message, level="info" if kind == "success" else kind)


def show_header(text: str, do_log: bool = True) -> None:
    """Rule with ``text`` centered in it, e.g. before an acquisition."""
    console.print(Rule(f"[header]{text}[/header]", style="panel.border"))
    if do_log:
        log_section(text)


def success(message: str, indent: int = 0, do_log: bool = True) -> None:
    _emit("success", message, indent, do_log)


def info(message: str, indent: int = 0, do_log: bool = True) -> None:
    _emit("info", message, indent, do_log)


def warning(message: str, indent: int = 0, do_log: bool = True) -> None:
    _emit("warning", message, indent, do_log)


def error(message: str, indent: int = 0, do_log: bool = True) -> None:
    _emit("error", message, indent, do_log)
