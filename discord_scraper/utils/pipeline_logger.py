"""Base pipeline logger with shared components.

Provides reusable building blocks for the scraper's console output:
- ChannelBlock: Context manager for one channel's key-value style output
- BasePipelineLogger: Abstract base with common logging methods
"""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from contextlib import contextmanager
from typing import TYPE_CHECKING, Any, Generator

from rich.console import Console
from rich.panel import Panel
from rich.table import Table

from discord_scraper.utils.logging import console

if TYPE_CHECKING:
    from typing import Self


# ANSI sequence that erases the current terminal line
CLEAR_LINE = "\033[2K"


class ChannelBlock:
    """A context manager for displaying one channel's progress.

    Usage:
        with logger.block("general") as block:
            block.field("channel ID", 123456789)
            # ... scrape ...
            block.result("stored 1,234 messages", success=True)

    Output:
        general
            channel ID: 123456789
            ✓ stored 1,234 messages
    """

    def __init__(self, title: str, parent: "BasePipelineLogger") -> None:
        self.title = title
        self.console = parent.console
        self._parent = parent

    def __enter__(self) -> "Self":
        self._parent._clear_progress_line()
        self.console.print(f"\n[bold]{self.title}[/bold]")
        return self

    def __exit__(self, exc_type: Any, exc_val: Any, exc_tb: Any) -> None:
        self._parent._clear_progress_line()

    def field(self, key: str, value: Any, color: str | None = None) -> None:
        """Add a key-value field to the block."""
        if color:
            self.console.print(f"    [dim]{key}:[/dim] [{color}]{value}[/{color}]")
        else:
            self.console.print(f"    [dim]{key}:[/dim] {value}")

    def result(self, message: str, success: bool = True) -> None:
        """Show the final result of the block."""
        self._parent._clear_progress_line()
        icon = "[green]✓[/green]" if success else "[red]✗[/red]"
        self.console.print(f"    {icon} {message}")

    def empty(self) -> None:
        """Show that the channel had no history."""
        self._parent._clear_progress_line()
        self.console.print("    [dim]Empty channel[/dim]")


class BasePipelineLogger(ABC):
    """Abstract base class for pipeline loggers.

    Subclasses implement summary() and any pipeline-specific events.
    """

    def __init__(self, logger_name: str | None = None) -> None:
        self.console: Console = console
        self._has_progress_line = False
        self._logger = logging.getLogger(logger_name or self.__class__.__module__)

    def _clear_progress_line(self) -> None:
        """Clear the in-place progress line if present."""
        if self._has_progress_line:
            print(CLEAR_LINE, end="\r")
            self._has_progress_line = False

    @contextmanager
    def block(self, title: str) -> Generator[ChannelBlock, None, None]:
        """Create a block for one channel's key-value style output."""
        block = ChannelBlock(title, self)
        with block:
            yield block

    # -------------------------------------------------------------------------
    # Standard Logging (goes through Python logging)
    # -------------------------------------------------------------------------

    def info(self, message: str) -> None:
        self._logger.info(message)

    def warning(self, message: str) -> None:
        self._logger.warning(message)

    def error(self, message: str) -> None:
        self._clear_progress_line()
        self._logger.error(message)

    def debug(self, message: str) -> None:
        self._logger.debug(message)

    def success(self, message: str) -> None:
        """Log a success message with green checkmark."""
        self.console.print(f"[green]✓[/green] {message}")

    # -------------------------------------------------------------------------
    # Common Rich Output Methods
    # -------------------------------------------------------------------------

    def batch_progress(
        self,
        count: int,
        total: int | None = None,
        *,
        oldest_date: str | None = None,
        prefix: str = "Stored",
        unit: str = "messages",
    ) -> None:
        """Log batch processing progress (inline update).

        Args:
            count: Number of items processed so far
            total: Total number of items (optional)
            oldest_date: Oldest date reached so far (optional)
            prefix: Action prefix (e.g., "Stored", "Fetched")
            unit: Unit name
        """
        date_info = f" [→ {oldest_date}]" if oldest_date else ""
        total_str = f"/{total:,}" if total else ""
        print(CLEAR_LINE, end="")
        self.console.print(
            f"    [dim]{prefix} {count:,}{total_str} {unit}{date_info}[/dim]",
            end="\r",
        )
        self._has_progress_line = True

    def print_summary(
        self,
        pipeline_name: str,
        *,
        elapsed: float,
        stats: dict[str, int | str],
        style: str = "cyan",
    ) -> None:
        """Print a summary panel of {label: value} stats plus elapsed time."""
        self._clear_progress_line()
        self.console.print()

        table = Table.grid(padding=(0, 2))
        table.add_column("Metric", style="bold")
        table.add_column("Value", justify="right", style="green")

        for label, value in stats.items():
            if isinstance(value, int):
                table.add_row(label, f"{value:,}")
            else:
                table.add_row(label, str(value))
        table.add_row("Time elapsed", f"{elapsed:.1f}s")

        panel = Panel(
            table,
            title=f"[bold]{pipeline_name} Complete[/bold]",
            border_style=style,
            padding=(1, 2),
        )
        self.console.print(panel)

    @abstractmethod
    def summary(self, **kwargs: Any) -> None:
        """Print final summary. Implementation varies by pipeline."""
        ...
