"""Main Typer application: imports and registers all CLI commands.

Entry point: ``taskpulse`` (configured via pyproject.toml scripts).
"""

from __future__ import annotations

import typer
from rich.console import Console
from rich.text import Text

from taskpulse import __version__
from taskpulse.cli.commands.demo import demo_cmd
from taskpulse.cli.commands.replay import replay_cmd
from taskpulse.config import settings
from taskpulse.display.colors import assign_color
from taskpulse.logging_setup import setup_logging

app = typer.Typer(
    name="taskpulse",
    help="taskpulse: live progress display for task-running build orchestrators.",
    no_args_is_help=True,
    rich_markup_mode="rich",
    add_completion=False,
)


@app.callback()
def main_callback(
    verbose: bool = typer.Option(
        False, "--verbose", "-v", help="Enable debug logging."
    ),
) -> None:
    """Configure logging before any subcommand runs."""
    setup_logging("DEBUG" if verbose else settings.effective_log_level)


# Register subcommands
app.command(name="replay", help="Replay a JSON-lines event stream.")(replay_cmd)
app.command(name="demo", help="Run a synthetic build with live progress.")(demo_cmd)


@app.command(name="color", help="Show the color assigned to each label.")
def color_cmd(
    labels: list[str] = typer.Argument(..., help="Labels to colorize."),
) -> None:
    """Print every label in its deterministic palette color."""
    console = Console()
    for label in labels:
        color = assign_color(label)
        console.print(Text(f"{label} {color}", style=color))


@app.command(name="version", help="Show the taskpulse version.")
def version_cmd() -> None:
    typer.echo(f"taskpulse {__version__}")


def main() -> None:
    """CLI entry point."""
    app()


if __name__ == "__main__":
    main()
