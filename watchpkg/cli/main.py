"""watchpkg command-line tool."""

from pathlib import Path
from typing import Optional

import typer
from rich.console import Console

from watchpkg.cli import __version__
from watchpkg.cli.utils.context import CLIContext
from watchpkg.cli.utils.events import load_events
from watchpkg.cli.utils.output import OutputFormatter
from watchpkg.core.config import get_settings
from watchpkg.core.models import ResultCode
from watchpkg.infrastructure.logging import setup_logging
from watchpkg.plugins.base import OperationType, PluginConfigurationError
from watchpkg.plugins.builtin import WatchPkgPlugin
from watchpkg.plugins.config import load_config_file
from watchpkg.plugins.manager import PluginHost

app = typer.Typer(
    name="watchpkg",
    help="Run scripts for packages changed by install, deinstall, upgrade and autoremove",
    rich_markup_mode="rich",
    context_settings={"help_option_names": ["-h", "--help"]},
    pretty_exceptions_enable=False,
)

config_app = typer.Typer(help="Inspect the SCRIPTS/PKGS configuration")
app.add_typer(config_app, name="config")

console = Console()


def version_callback(value: bool):
    """Display version and exit."""
    if value:
        console.print(f"watchpkg v{__version__}")
        raise typer.Exit()


@app.callback()
def main(
    ctx: typer.Context,
    version: Optional[bool] = typer.Option(
        None,
        "--version",
        "-v",
        callback=version_callback,
        is_eager=True,
        help="Show version and exit",
    ),
    debug: bool = typer.Option(
        False,
        "--debug",
        "-d",
        help="Enable debug logging",
    ),
    output_format: str = typer.Option(
        "table",
        "--output",
        "-o",
        help="Output format: table, json, yaml",
    ),
    config_file: Optional[Path] = typer.Option(
        None,
        "--config",
        "-c",
        help="Path to the SCRIPTS/PKGS configuration file",
    ),
):
    """
    watchpkg

    Collects package changes during a batch and runs every configured script
    as [cyan]script <name> <origin>[/cyan] once the batch has finished.
    """
    updates = {}
    if config_file is not None:
        updates["config_file"] = config_file
    if debug:
        updates["log_level"] = "DEBUG"
    settings = get_settings().model_copy(update=updates)

    setup_logging(settings)

    ctx.obj = CLIContext(
        debug=debug,
        settings=settings,
        formatter=OutputFormatter(output_format, console=console),
        console=console,
    )


@config_app.command("show")
def show_config(ctx: typer.Context):
    """
    Show the configured scripts and watched packages.

    Examples:
        watchpkg config show
        watchpkg -c ./watchpkg.yaml -o json config show
    """
    cli_ctx: CLIContext = ctx.obj
    formatter = cli_ctx.formatter

    try:
        config = load_config_file(cli_ctx.settings.config_file)
    except PluginConfigurationError as e:
        formatter.print_error(str(e))
        raise typer.Exit(1)

    if formatter.format.value != "table":
        formatter.print_data(config.to_dict())
        return

    formatter.print_list(
        [{"order": i, "script": script} for i, script in enumerate(config.scripts, 1)],
        title="Scripts",
    )
    if config.packages:
        formatter.print_list(
            [{"package": package} for package in config.packages],
            title="Watched packages",
        )
    else:
        cli_ctx.console.print("[dim]Watching all packages[/dim]")


@app.command("run")
def run_batch(
    ctx: typer.Context,
    operation: OperationType = typer.Argument(..., help="Operation the batch performed"),
    events_file: Path = typer.Argument(
        ..., exists=True, dir_okay=False, help="YAML or JSON list of package events"
    ),
):
    """
    Replay a batch of package events and run the configured scripts.

    Exits with status 1 if any script invocation failed.

    Examples:
        watchpkg run install events.yaml
    """
    cli_ctx: CLIContext = ctx.obj
    formatter = cli_ctx.formatter

    try:
        events = load_events(events_file)
    except ValueError as e:
        formatter.print_error(str(e))
        raise typer.Exit(2)

    host = PluginHost()
    plugin = WatchPkgPlugin(config_file=cli_ctx.settings.config_file)

    if host.load(plugin) != ResultCode.OK:
        formatter.print_error("Failed to initialize watchpkg")
        raise typer.Exit(1)

    try:
        rc = host.run_batch(operation, events)
    finally:
        host.shutdown()

    result = plugin.last_result
    if result is not None and result.invocations:
        formatter.print_list(
            [
                {
                    "script": inv.script,
                    "name": inv.notification.name,
                    "origin": inv.notification.origin,
                    "succeeded": inv.succeeded,
                }
                for inv in result.invocations
            ],
            title="Invocations",
        )

    if rc != ResultCode.OK:
        raise typer.Exit(1)


if __name__ == "__main__":
    app()
