"""Terminal output handling using Rich library.

This module provides the OutputHandler class for all CLI terminal output:
colored messages, spinners for long-running phases and the final operation
summary. Supports verbosity levels and the --no-color flag.
"""

from contextlib import contextmanager
from typing import Iterator, List

from rich.console import Console
from rich.live import Live
from rich.spinner import Spinner

from src.models import OperationResult


class OutputHandler:
    """Handles all terminal output using Rich library.

    Attributes:
        verbosity: Verbosity level (0=summary, 1=info, 2=debug)
        console: Rich Console instance for output

    Example:
        >>> handler = OutputHandler(verbosity=1, no_color=False)
        >>> with handler.spinner("Exporting..."):
        ...     ops.export()
        >>> handler.success("Export DONE")
    """

    def __init__(self, verbosity: int = 0, no_color: bool = False):
        """Initialize output handler.

        Args:
            verbosity: Verbosity level (0=summary, 1=info, 2=debug)
            no_color: Disable color output if True
        """
        self.verbosity = verbosity
        self.console = Console(
            force_terminal=not no_color,
            no_color=no_color,
            highlight=False,
        )

    def success(self, message: str) -> None:
        """Display success message in green."""
        self.console.print(f"[green]✓[/green] {message}")

    def error(self, message: str) -> None:
        """Display error message in red."""
        self.console.print(f"[red]✗[/red] {message}", style="red")

    def warning(self, message: str) -> None:
        """Display warning message in yellow."""
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
        """Display message without formatting."""
        self.console.print(message)

    @contextmanager
    def spinner(self, message: str) -> Iterator[None]:
        """Display spinner while a phase runs.

        Args:
            message: Message to display with spinner
        """
        spinner = Spinner("dots", text=message)
        with Live(spinner, console=self.console, refresh_per_second=10):
            yield

    def print_summary(self, results: List[OperationResult]) -> None:
        """Display what each completed operation touched.

        Args:
            results: Results in the order the operations ran
        """
        self.console.print("\n[bold]Migration Summary:[/bold]")

        if not results:
            self.console.print("\n[yellow]No operations were run[/yellow]")
            return

        for result in results:
            if result.operation == "export":
                self.console.print(
                    f"  [blue]↓[/blue] Exported: {result.content_items} content item(s), "
                    f"{result.blobs} blob(s)"
                )
            elif result.operation == "delete":
                self.console.print(
                    f"  [red]✗[/red] Deleted: {result.content_items} content item(s), "
                    f"{result.blobs} blob(s)"
                )
            elif result.operation == "import":
                self.console.print(
                    f"  [green]↑[/green] Imported: {result.content_items} content item(s), "
                    f"{result.blobs} blob(s)"
                )
            elif result.operation == "url update":
                self.console.print(f"  [blue]↔[/blue] URLs updated: {result.content_items} item(s)")
            elif result.operation == "publish":
                self.console.print(f"  [green]★[/green] Published revision: {result.revision}")

        self.console.print("\n[green]Migration completed successfully[/green]")
