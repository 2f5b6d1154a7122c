"""``taskpulse replay FILE``: feed a recorded event stream through a reporter.

Each line of FILE is one JSON object: either an event in wire shape
(``{"kind": "task", ...}``) or an orchestrator log entry with a ``data``
payload.  Blank lines are skipped; lines that are not JSON objects are
counted and reported at the end.
"""

from __future__ import annotations

import json
import logging
import time
from collections.abc import Iterator
from pathlib import Path
from typing import Any

import typer
from rich.console import Console

from taskpulse.config import settings
from taskpulse.core.reporter import ProgressReporter
from taskpulse.reporters import create_reporter

logger = logging.getLogger(__name__)

console = Console()


class ReplayError(ValueError):
    """Raised when a replay file cannot be read."""


def iter_records(path: Path) -> Iterator[tuple[int, dict[str, Any] | None]]:
    """Yield ``(line_number, record)``; record is ``None`` for bad lines."""
    try:
        handle = path.open(encoding="utf-8")
    except OSError as exc:
        raise ReplayError(f"Cannot read {path}: {exc}") from exc

    with handle:
        for lineno, line in enumerate(handle, start=1):
            line = line.strip()
            if not line:
                continue
            try:
                record = json.loads(line)
            except json.JSONDecodeError:
                logger.warning("%s:%d: not valid JSON, skipped", path, lineno)
                yield lineno, None
                continue
            if not isinstance(record, dict):
                logger.warning("%s:%d: not a JSON object, skipped", path, lineno)
                yield lineno, None
                continue
            yield lineno, record


def feed(reporter: ProgressReporter, record: dict[str, Any]) -> None:
    """Route a record to the reporter as an event or a log entry."""
    if "data" in record and "kind" not in record:
        reporter.log(record)
    else:
        reporter.publisher.publish(record)


def replay_cmd(
    path: Path = typer.Argument(
        ...,
        help="JSON-lines file of events or orchestrator log entries.",
    ),
    delay: float = typer.Option(
        0.0,
        "--delay",
        "-d",
        help="Delay in seconds between events for visual effect.",
    ),
    reporter_name: str = typer.Option(
        None,
        "--reporter",
        "-r",
        help="Output style: live or plain (defaults to TASKPULSE_REPORTER).",
    ),
) -> None:
    """Replay a recorded event stream through the progress display."""
    if not path.is_file():
        console.print(f"[bold red]Event file not found:[/bold red] {path}")
        raise typer.Exit(code=1)

    reporter, view = create_reporter(settings, reporter=reporter_name, console=console)
    skipped = 0
    try:
        with view:
            for _, record in iter_records(path):
                if record is None:
                    skipped += 1
                    continue
                feed(reporter, record)
                if delay > 0:
                    time.sleep(delay)
    except ReplayError as exc:
        console.print(f"[bold red]Replay failed:[/bold red] {exc}")
        raise typer.Exit(code=1)

    if skipped:
        console.print(f"[yellow]{skipped} unreadable line(s) skipped[/yellow]")

    summary = reporter.get_current_snapshot().summary
    if summary is not None and (summary.failed_count or summary.aborted_count):
        raise typer.Exit(code=1)
