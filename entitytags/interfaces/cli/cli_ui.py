#!/usr/bin/env python3
"""
Rich UI components for CLI - consistent output across commands.
"""

from __future__ import annotations

from rich import box
from rich.console import Console
from rich.panel import Panel
from rich.table import Table

from entitytags.helpers.dto.task_dto import TaskStatusEntry

console = Console()

# Color scheme constants
COLOR_SUCCESS = "green"
COLOR_ERROR = "red"
COLOR_WARNING = "yellow"
COLOR_INFO = "cyan"


class InfoPanel:
    """
    Simple panel for displaying status/info without progress tracking.
    """

    @staticmethod
    def show(title: str, content: str, border_style: str = COLOR_INFO):
        """Show a single info panel."""
        panel = Panel(content, title=f"[bold]{title}[/bold]", border_style=border_style, box=box.ROUNDED)
        console.print(panel)


def show_task_history(history: list[TaskStatusEntry]):
    """Render the progress updates a task collected."""
    table = Table(box=box.SIMPLE, show_header=True, header_style=f"bold {COLOR_INFO}")
    table.add_column("Phase")
    table.add_column("Status")
    for entry in history:
        table.add_row(entry.phase, entry.status)
    console.print(table)


def print_success(message: str):
    """Print a success message."""
    console.print(f"[bold {COLOR_SUCCESS}]✓[/bold {COLOR_SUCCESS}] {message}")


def print_error(message: str):
    """Print an error message."""
    console.print(f"[bold {COLOR_ERROR}]✗[/bold {COLOR_ERROR}] {message}")


def print_warning(message: str):
    """Print a warning message."""
    console.print(f"[bold {COLOR_WARNING}]⚠[/bold {COLOR_WARNING}] {message}")


def print_info(message: str):
    """Print an info message."""
    console.print(f"[{COLOR_INFO}][i][/{COLOR_INFO}] {message}")
