"""Shared utility functions for goscaffold.

Provides home-directory path expansion, duration formatting and the
Rich-based console helpers every other module reports progress through.
"""

from __future__ import annotations

import os
from pathlib import Path

from rich.console import Console
from rich.markup import escape
from rich.rule import Rule
from rich.table import Table

from goscaffold.errors import PreconditionError, ResolutionError

console = Console()
err_console = Console(stderr=True)

# ---------------------------------------------------------------------------
# Path helpers
# ---------------------------------------------------------------------------


def home_directory() -> str:
    """Return the current user's home directory.

    Raises:
        ResolutionError: If the home directory cannot be determined.
    """
    try:
        return str(Path.home())
    except (RuntimeError, KeyError) as exc:
        raise ResolutionError(f"Cannot determine home directory: {exc}") from exc


def expand_tilde(path: str) -> str:
    """Expand a leading ``~/`` in *path* to the current user's home directory.

    Only the ``~/`` prefix is recognised; anything else (including a bare
    ``~`` or ``~otheruser``) is returned unchanged.  The expanded result is
    normalised the same way a path join would be.

    Examples::

        expand_tilde("~/code/demo") -> "/home/me/code/demo"
        expand_tilde("/tmp/x")      -> "/tmp/x"
    """
    if path.startswith("~/"):
        return os.path.normpath(os.path.join(home_directory(), path[2:]))
    return path


def check_project_name(name: str) -> str:
    """Return *name* if it is usable as a single directory name.

    Raises:
        PreconditionError: If *name* is empty, ``.`` or ``..``, or contains
            a path separator or NUL byte.
    """
    separators = {"/", os.sep} | ({os.altsep} if os.altsep else set())
    if not name or name in (".", "..") or "\0" in name or any(s in name for s in separators):
        raise PreconditionError(
            f"Invalid project name {name!r}: must be a single directory name"
        )
    return name


# ---------------------------------------------------------------------------
# Formatting helpers
# ---------------------------------------------------------------------------


def format_duration(seconds: float) -> str:
    """Format a duration in seconds to a human-readable string.

    Examples::

        format_duration(3.7)  -> "3.7s"
        format_duration(65.2) -> "1m 5s"
    """
    if seconds < 0:
        return "0.0s"

    minutes = int(seconds // 60)
    secs = seconds % 60
    if minutes > 0:
        return f"{minutes}m {int(secs)}s"
    return f"{secs:.1f}s"


# ---------------------------------------------------------------------------
# Rich output helpers
# ---------------------------------------------------------------------------


def print_created(kind: str, path: str | Path) -> None:
    """Print a ``Created <kind>: <path>`` progress line."""
    console.print(f"Created {kind}: {escape(str(path))}", soft_wrap=True)


def print_stage_header(title: str) -> None:
    """Print a full-width rule announcing a pipeline stage."""
    console.print(Rule(f"[bold bright_cyan]{escape(title)}[/bold bright_cyan]", style="bright_cyan"))


def print_summary_table(data: dict[str, str], title: str = "Summary") -> None:
    """Print a two-column key/value summary table."""
    table = Table(title=title, show_header=True, header_style="bold cyan")
    table.add_column("Item", style="dim", no_wrap=True)
    table.add_column("Value")

    for key, value in data.items():
        table.add_row(key, escape(str(value)))

    console.print(table)


def print_success(message: str) -> None:
    """Print a green success message."""
    console.print(f"[bold green]{escape(message)}[/bold green]")


def print_error(message: str) -> None:
    """Print a red error message on stderr."""
    err_console.print(f"[bold red]{escape(message)}[/bold red]", soft_wrap=True)


def print_warning(message: str) -> None:
    """Print a yellow warning message."""
    console.print(f"[bold yellow]{escape(message)}[/bold yellow]")
