"""Elapsed-time formatting for task lines."""

from __future__ import annotations

from taskpulse.models.snapshot import TaskRecord


def format_duration(seconds: float) -> str:
    """``0.42s``, ``12.30s``, ``2m 5.00s``."""
    seconds = max(seconds, 0.0)
    if seconds < 60:
        return f"{seconds:.2f}s"
    minutes, rest = divmod(seconds, 60)
    return f"{int(minutes)}m {rest:.2f}s"


def task_elapsed(record: TaskRecord, now: float) -> str:
    """The event-supplied duration when present, else time since start."""
    if record.duration is not None:
        return record.duration
    return format_duration(now - record.started_at)
