"""
Output formatting utilities for the trollsmile shell.

Renders command results, error reports and status messages to the terminal.
"""

from typing import Any, List, Optional, TextIO

from rich import box
from rich.console import Console
from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from ...core.reporter import ErrorReport

# rich colour names for ErrorReport.color markers
REPORT_COLORS = {
    "RED": "red",
    "GREEN": "green",
    "YELLOW": "yellow",
    "BLUE": "blue",
}


class ShellFormatter:
    """Formatter for shell output."""

    def __init__(self, use_rich: bool = True, file: Optional[TextIO] = None):
        """
        Initialize formatter.

        Args:
            use_rich: Whether to use rich formatting
            file: Output stream, stdout when omitted
        """
        self.use_rich = use_rich
        self.file = file
        self.console = Console(file=file, highlight=False)

    def _plain(self, text: str):
        print(text, file=self.file)

    def print_result(self, text: str):
        """Print a command result verbatim."""
        if self.use_rich:
            self.console.print(text, markup=False, emoji=False)
        else:
            self._plain(text)

    def print_error_report(self, report: ErrorReport):
        """Print a structured error report."""
        if self.use_rich:
            style = REPORT_COLORS.get(report.color.upper(), "red")
            body = Text(report.title, style="bold")
            self.console.print(
                Panel(
                    body,
                    title=Text(report.author_name, style=style),
                    title_align="left",
                    subtitle=report.author_icon or None,
                    border_style=style,
                )
            )
        else:
            self._plain(f"❌ {report.author_name}")
            self._plain(f"   {report.title}")

    def print_success(self, message: str):
        """Print a success message."""
        if self.use_rich:
            self.console.print(f"✅ {message}", style="green", markup=False)
        else:
            self._plain(f"✅ {message}")

    def print_error(self, message: str):
        """Print an error message."""
        if self.use_rich:
            self.console.print(f"❌ {message}", style="red bold", markup=False)
        else:
            self._plain(f"❌ {message}")

    def print_warning(self, message: str):
        """Print a warning message."""
        if self.use_rich:
            self.console.print(f"⚠️  {message}", style="yellow", markup=False)
        else:
            self._plain(f"⚠️  {message}")

    def print_table(
        self,
        title: str,
        headers: List[str],
        rows: List[List[Any]],
        show_lines: bool = False,
    ):
        """
        Print a formatted table.

        Args:
            title: Table title
            headers: Column headers
            rows: Table rows
            show_lines: Whether to show row lines
        """
        if self.use_rich:
            table = Table(
                title=title,
                show_header=True,
                header_style="bold cyan",
                border_style="blue",
                show_lines=show_lines,
                box=box.ROUNDED,
            )

            for header in headers:
                table.add_column(header)

            for row in rows:
                table.add_row(*[str(cell) for cell in row])

            self.console.print(table)
        else:
            self._plain(f"\n{title}")
            self._plain("=" * 70)

            header_line = " | ".join(str(h).ljust(15) for h in headers)
            self._plain(header_line)
            self._plain("-" * 70)

            for row in rows:
                row_line = " | ".join(str(cell).ljust(15) for cell in row)
                self._plain(row_line)

            self._plain("=" * 70)
