"""CLI context management."""

from dataclasses import dataclass

from rich.console import Console

from watchpkg.cli.utils.output import OutputFormatter
from watchpkg.core.config import Settings


@dataclass
class CLIContext:
    """Context object passed through CLI commands."""

    debug: bool
    settings: Settings
    formatter: OutputFormatter
    console: Console
