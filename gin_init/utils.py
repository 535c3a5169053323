"""Shared console helpers for gin-init.

Rich-based output used for everything the user is meant to read: status
lines, the summary table, and the closing next-steps panel. Diagnostic
detail goes through :mod:`gin_init.logger` instead.
"""

from __future__ import annotations

from collections.abc import Sequence

from rich.console import Console
from rich.markup import escape
from rich.panel import Panel
from rich.table import Table

console = Console()


# ---------------------------------------------------------------------------
# Rich output helpers
# ---------------------------------------------------------------------------


def print_summary_table(data: dict[str, str], title: str = "Summary") -> None:
    """Print a two-column key/value summary table.

    Args:
        data: Mapping of label -> value.
        title: Table title.
    """
    table = Table(title=title, show_header=True, header_style="bold cyan")
    table.add_column("Item", style="dim", no_wrap=True)
    table.add_column("Value")

    for key, value in data.items():
        table.add_row(key, str(value))

    console.print(table)
    console.print()


def print_next_steps(title: str, steps: Sequence[str]) -> None:
    """Print follow-up instructions, one per line, inside a panel."""
    body = "\n".join(escape(step) for step in steps)
    console.print(Panel(body, title=escape(title), border_style="green"))


def print_success(message: str) -> None:
    """Print a green success message."""
    console.print(f"[bold green]{escape(message)}[/bold green]")


def print_error(message: str) -> None:
    """Print a red error message."""
    console.print(f"[bold red]{escape(message)}[/bold red]")


def print_warning(message: str) -> None:
    """Print a yellow warning message."""
    console.print(f"[bold yellow]{escape(message)}[/bold yellow]")


def format_command(argv: Sequence[str]) -> str:
    """Join an argument vector for display, quoting arguments with spaces.

    Examples::

        format_command(["git", "commit", "-m", "Initial commit"])
            -> 'git commit -m "Initial commit"'
    """
    parts = []
    for arg in argv:
        if not arg or any(ch.isspace() for ch in arg):
            parts.append(f'"{arg}"')
        else:
            parts.append(arg)
    return " ".join(parts)
