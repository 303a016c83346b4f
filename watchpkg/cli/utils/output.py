"""Output formatting utilities for CLI."""

import json
from enum import Enum
from typing import Any, Dict, List, Optional

import yaml
from rich.console import Console
from rich.table import Table


class OutputFormat(Enum):
    """Output format options."""

    TABLE = "table"
    JSON = "json"
    YAML = "yaml"


class OutputFormatter:
    """Handle output formatting for different formats."""

    def __init__(self, format_type: str = "table", console: Optional[Console] = None):
        """
        Initialize output formatter.

        Args:
            format_type: Output format (table, json, yaml)
            console: Console to print to
        """
        self.console = console or Console()
        try:
            self.format = OutputFormat(format_type.lower())
        except ValueError:
            self.format = OutputFormat.TABLE

    def _print_raw(self, text: str):
        self.console.print(text, markup=False, highlight=False, soft_wrap=True)

    def print_data(self, data: Any):
        """Print structured data as JSON or YAML."""
        if self.format == OutputFormat.YAML:
            self._print_raw(yaml.safe_dump(data, default_flow_style=False, sort_keys=False))
        else:
            self._print_raw(json.dumps(data, indent=2, default=str))

    def print_list(
        self,
        items: List[Dict[str, Any]],
        columns: Optional[List[str]] = None,
        title: Optional[str] = None,
    ):
        """
        Print a list of items.

        Args:
            items: List of items to print
            columns: Column names to display (for table format)
            title: Table title (for table format)
        """
        if self.format != OutputFormat.TABLE:
            self.print_data(items)
            return

        if not items:
            self.console.print("[dim]No items found[/dim]")
            return

        if not columns:
            columns = list(items[0].keys())

        table = Table(title=title)
        for col in columns:
            table.add_column(col.replace("_", " ").title())

        for item in items:
            row = []
            for col in columns:
                value = item.get(col)
                row.append("[dim]-[/dim]" if value is None else str(value))
            table.add_row(*row)

        self.console.print(table)

    def print_error(self, message: str):
        """Print error message."""
        if self.format == OutputFormat.TABLE:
            self.console.print(f"[red]✗[/red] {message}")
        else:
            self.print_data({"status": "error", "message": message})

