"""CLI result rendering with Rich."""

from __future__ import annotations

from collections.abc import Sequence

from rich.console import Console
from rich.table import Table
from rich.text import Text

from libman.commands.types import CommandResult


class CliRenderer:
    """Render command results and indexed listings."""

    def __init__(self, *, console: Console) -> None:
        """Store console used for rendering.

        Args:
            console: Rich console used for output rendering.
        """
        self._console = console

    def render(self, result: CommandResult) -> None:
        """Render one command result.

        Successful results print their message as plain text; errors are
        highlighted. Empty messages print nothing.

        Args:
            result: Structured command result.
        """
        if not result.message:
            return
        if result.is_ok:
            self._console.print(Text(result.message))
            return
        self._console.print(Text(result.message, style="yellow"))

    def render_failure(self, exc: Exception) -> None:
        """Render a remote failure caught at a shell boundary.

        Args:
            exc: Raised failure.
        """
        self._console.print(Text(f"error: {exc}", style="bold red"))

    def render_indexed(
        self,
        rows: Sequence[Sequence[str]],
        *,
        columns: Sequence[str],
        title: str | None = None,
    ) -> None:
        """Render rows prefixed with their 0-based index.

        Args:
            rows: Cell values per row.
            columns: Column headers (excluding the index column).
            title: Optional table title.
        """
        table = Table(title=title, show_header=True, header_style="bold cyan")
        table.add_column("#", style="green", justify="right", no_wrap=True)
        for column in columns:
            table.add_column(column)
        for index, row in enumerate(rows):
            table.add_row(str(index), *(Text(cell) for cell in row))
        self._console.print(table)

    def render_fields(self, fields: Sequence[tuple[str, str]], *, title: str) -> None:
        """Render a two-column field/value table.

        Args:
            fields: Label and value pairs.
            title: Table title.
        """
        table = Table(title=title, show_header=False, box=None)
        table.add_column("Field", style="bold cyan", no_wrap=True)
        table.add_column("Value")
        for label, value in fields:
            table.add_row(label, Text(value))
        self._console.print(table)
