"""Terminal output handling using Rich library.

This module provides the OutputHandler class for all CLI terminal output.
Uses Rich for colored messages, spinners and result tables. Supports
verbosity levels and the --no-color flag.
"""

from contextlib import contextmanager
from typing import Iterator, Sequence

from rich.console import Console
from rich.live import Live
from rich.spinner import Spinner
from rich.table import Table

from src.cli.models import CheckReport
from src.rest_model.relations import short_name


class OutputHandler:
    """Handles all terminal output using Rich library.

    Attributes:
        verbosity: Verbosity level (0=summary, 1=info, 2=debug)
        console: Rich Console instance for output

    Example:
        >>> handler = OutputHandler(verbosity=1, no_color=False)
        >>> handler.success("Operation completed")
        >>> handler.print_table("Wikis", ["Id", "Name"], [["xwiki", "XWiki"]])
    """

    def __init__(self, verbosity: int = 0, no_color: bool = False):
        """Initialize output handler.

        Args:
            verbosity: Verbosity level (0=summary, 1=info, 2=debug)
            no_color: Disable color output if True
        """
        self.verbosity = verbosity
        self.console = Console(
            no_color=no_color,
            highlight=False,
        )

    def success(self, message: str) -> None:
        self.console.print(f"[green]✓[/green] {message}")

    def error(self, message: str) -> None:
        self.console.print(f"[red]✗[/red] {message}", style="red")

    def warning(self, message: str) -> None:
        self.console.print(f"[yellow]⚠[/yellow] {message}", style="yellow")

    def info(self, message: str) -> None:
        """Display info message (only if verbosity >= 1)."""
        if self.verbosity >= 1:
            self.console.print(message)

    def debug(self, message: str) -> None:
        """Display debug message (only if verbosity >= 2)."""
        if self.verbosity >= 2:
            self.console.print(f"[dim]{message}[/dim]")

    def print(self, message: str) -> None:
        self.console.print(message)

    @contextmanager
    def spinner(self, message: str) -> Iterator[None]:
        """Display spinner for single operations.

        Example:
            >>> with handler.spinner("Fetching wikis..."):
            ...     wikis = client.list_wikis()
        """
        spinner = Spinner("dots", text=message)
        with Live(spinner, console=self.console, refresh_per_second=10, transient=True):
            yield

    def print_table(
        self,
        title: str,
        columns: Sequence[str],
        rows: Sequence[Sequence[str]],
    ) -> None:
        """Display query results as a table.

        Args:
            title: Table title
            columns: Column headers
            rows: One sequence of cell values per row
        """
        table = Table(title=title, show_lines=False)
        for column in columns:
            table.add_column(column)
        for row in rows:
            table.add_row(*[str(cell) for cell in row])
        self.console.print(table)
        self.console.print(f"[dim]{len(rows)} item(s)[/dim]")

    def print_check_summary(self, report: CheckReport) -> None:
        """Display the outcome of a link check with color coding."""
        self.console.print("\n[bold]Check Summary:[/bold]")
        self.console.print(f"  Wikis checked: {report.wikis_checked}")
        self.console.print(f"  Links checked: {report.links_checked}")

        for wiki_id, relation in report.missing_relations:
            self.console.print(
                f"  [red]✗[/red] Wiki '{wiki_id}' has no '{short_name(relation)}' link"
            )
        for href, status_code in report.broken_links:
            status = f"HTTP {status_code}" if status_code else "unreachable"
            self.console.print(f"  [red]✗[/red] Broken link {href} ({status})")

        if report.passed:
            self.console.print("\n[green]All links resolve[/green]")
        else:
            self.console.print("\n[red]Check failed[/red]")
