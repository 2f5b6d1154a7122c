"""``taskpulse demo``: drive the progress display with a synthetic run.

Starts a run, moves tasks through ``running`` into a terminal status two at
a time, then completes the run.  Useful for eyeballing the live view.
"""

from __future__ import annotations

import time

import typer
from rich.console import Console

from taskpulse.config import settings
from taskpulse.display.durations import format_duration
from taskpulse.models.events import TaskStatus
from taskpulse.reporters import create_reporter

console = Console()

_GROUPS = ("core", "utils", "web-app", "cli", "docs")
_TASKS = ("build", "test", "lint")


def demo_tasks(count: int) -> list[tuple[str, str, str]]:
    """``(id, group, task)`` triples, cycling through sample groups and tasks."""
    out: list[tuple[str, str, str]] = []
    for i in range(count):
        group = _GROUPS[i % len(_GROUPS)]
        task = _TASKS[(i // len(_GROUPS)) % len(_TASKS)]
        out.append((f"{group}#{task}", group, task))
    return out


def demo_cmd(
    tasks: int = typer.Option(
        8,
        "--tasks",
        "-n",
        min=0,
        max=len(_GROUPS) * len(_TASKS),
        help="Number of synthetic tasks.",
    ),
    delay: float = typer.Option(
        0.3,
        "--delay",
        "-d",
        help="Delay in seconds between transitions for visual effect.",
    ),
    fail: list[str] = typer.Option(
        [],
        "--fail",
        help="Task id (group#task) to mark failed; repeatable.",
    ),
    reporter_name: str = typer.Option(
        None,
        "--reporter",
        "-r",
        help="Output style: live or plain (defaults to TASKPULSE_REPORTER).",
    ),
) -> None:
    """Run a synthetic build so the progress display can be seen in action."""
    reporter, view = create_reporter(settings, reporter=reporter_name, console=console)
    plan = demo_tasks(tasks)
    failing = set(fail)
    clock = reporter.publisher.clock

    with view:
        reporter.emit_run_started(len(plan))
        for start in range(0, len(plan), 2):
            batch = plan[start : start + 2]
            began = {}
            for task_id, group, task in batch:
                began[task_id] = clock()
                reporter.emit_task_transition(task_id, group, task, TaskStatus.RUNNING)
            time.sleep(delay)
            for task_id, group, task in batch:
                status = TaskStatus.FAILED if task_id in failing else TaskStatus.SUCCESS
                reporter.emit_task_transition(
                    task_id,
                    group,
                    task,
                    status,
                    duration=format_duration(clock() - began[task_id]),
                )
        reporter.emit_run_complete()

    summary = reporter.get_current_snapshot().summary
    if summary is not None and summary.failed_count:
        raise typer.Exit(code=1)
