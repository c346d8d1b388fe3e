"""User-facing console feedback for CLI runs.

Everything goes to stderr so stdout stays reserved for outputs and
`--json` reports.

Usage::

    from affected.core.progress import status

    status("Comparing abc1234...def5678")
    status("2 apps affected", style="success")  # ✓ 2 apps affected
    status("Base commit missing", style="error")  # ✗ Base commit missing
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from rich.console import Console
from rich.table import Table
from rich.text import Text

if TYPE_CHECKING:
    from structlog.stdlib import BoundLogger

    from affected.classify import ChangeReport

_console = Console(stderr=True)

# Style prefixes
_STYLES = {
    "success": "[green]✓[/green] ",
    "error": "[red]✗[/red] ",
    "warning": "[yellow]![/yellow] ",
    "info": "  ",
    "none": "",
}


def _get_logger() -> BoundLogger:
    """Get logger lazily to respect runtime config."""
    from affected.core.logging import get_logger

    return get_logger("progress")


def get_console() -> Console:
    """Get the shared Rich console instance."""
    return _console


def status(message: str, *, style: str = "info", indent: int = 0) -> None:
    """Print a styled status message to stderr."""
    prefix = _STYLES.get(style, "")
    padding = " " * indent
    _console.print(f"{padding}{prefix}{message}", highlight=False)

    _get_logger().debug("status", message=message, style=style)


def pluralize(count: int, singular: str, plural: str | None = None) -> str:
    """Return grammatically correct singular/plural form.

    Args:
        count: The number of items
        singular: Singular form (e.g., "app")
        plural: Plural form (default: singular + "s")

    Returns:
        Formatted string like "1 app" or "3 apps"
    """
    if plural is None:
        plural = singular + "s"
    word = singular if count == 1 else plural
    return f"{count} {word}"


def make_report_table(report: ChangeReport) -> Table:
    """Create a Rich Table listing affected apps, libs, implicit dependencies and directories.

    Empty categories are shown with a dimmed dash so the layout stays stable.
    """
    table = Table(show_header=False, box=None, padding=(0, 1), pad_edge=False)
    table.add_column("kind", style="cyan", width=12)
    table.add_column("count", justify="right", width=3)
    table.add_column("names")

    rows = (
        ("apps", report.apps),
        ("libs", report.libs),
        ("implicit", report.implicit_dependencies),
        ("directories", report.directories),
    )
    for kind, names in rows:
        shown = Text(" ".join(names)) if names else Text("-", style="dim")
        table.add_row(kind, str(len(names)), shown)

    return table


def print_report(report: ChangeReport, *, console: Console | None = None) -> None:
    """Print a one-line verdict followed by the report table."""
    c = console or _console
    if report.not_affected:
        c.print(
            f"{_STYLES['info']}No apps, libs or implicit dependencies affected", highlight=False
        )
        return

    verdict = ", ".join(
        (
            pluralize(len(report.apps), "app"),
            pluralize(len(report.libs), "lib"),
            pluralize(
                len(report.implicit_dependencies), "implicit dependency", "implicit dependencies"
            ),
        )
    )
    c.print(f"{_STYLES['success']}Affected: {verdict}", highlight=False)
    c.print(make_report_table(report))
