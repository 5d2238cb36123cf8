"""Progress table of the stacks a purge run will touch."""

from __future__ import annotations
import datetime

from rich.console import Console
from rich.table import Table

from .models import Stack

PURGE_HEADER = ("Type", "Stack", "Status", "Reason", "Last Update")
LAST_UPDATE_FORMAT = "%Y-%m-%d %H:%M:%S"


def colorize_stack_status(status: str) -> str:
    """Wrap a stack status in rich markup by outcome."""
    if status.endswith("_FAILED") or "ROLLBACK" in status:
        return f"[red]{status}[/red]"
    if status.endswith("_IN_PROGRESS"):
        return f"[yellow]{status}[/yellow]"
    if status.endswith("_COMPLETE"):
        return f"[green]{status}[/green]"
    return status


def format_last_update(last_update: datetime.datetime | None) -> str:
    if last_update is None:
        return "-"
    return last_update.astimezone().strftime(LAST_UPDATE_FORMAT)


class PurgeTable:
    """Write-only sink: rows are appended, then rendered once."""

    def __init__(self, console: Console | None = None, title: str = "Stacks to purge"):
        self.console = console or Console()
        self.table = Table(title=title, show_header=True)
        for column in PURGE_HEADER:
            self.table.add_column(column)
        self.rows: list[tuple[str, ...]] = []

    def append_stack(self, stack: Stack) -> None:
        row = (
            f"[bold]{stack.stack_type}[/bold]",
            stack.name,
            f"{colorize_stack_status(stack.status)} {stack.status_reason}".rstrip(),
            stack.status_reason,
            format_last_update(stack.last_update_time),
        )
        self.rows.append(row)
        self.table.add_row(*row)

    def render(self) -> None:
        self.console.print(self.table)
