"""Aggregator: folds one lifecycle event into the next ``Snapshot``.

``advance`` is a pure function.  It never mutates its input and, given the
same snapshot, event and ``now``, always returns an equal result.  Events it
cannot use come back as the *same* snapshot object, which the publisher
treats as "nothing to announce".
"""

from __future__ import annotations

from typing import Any

from taskpulse.models.events import RunEvent, RunPhase, TaskEvent, TaskStatus
from taskpulse.models.snapshot import (
    COUNTER_FIELDS,
    RunSummary,
    Snapshot,
    SummaryPhase,
    TaskRecord,
)


def advance(snapshot: Snapshot, event: Any, now: float) -> Snapshot:
    """Return the snapshot that results from applying *event*.

    Parameters
    ----------
    snapshot:
        The currently published state.
    event:
        A ``RunEvent`` or ``TaskEvent``.  Anything else is ignored.
    now:
        Monotonic timestamp captured for this event; used as ``started_at``
        for newly observed tasks.
    """
    if isinstance(event, RunEvent):
        return _apply_run_event(snapshot, event)
    if isinstance(event, TaskEvent):
        if not event.status.is_terminal:
            return _apply_task_started(snapshot, event, now)
        return _apply_task_finished(snapshot, event, now)
    return snapshot


# ---------------------------------------------------------------------------
# Run events
# ---------------------------------------------------------------------------


def _apply_run_event(snapshot: Snapshot, event: RunEvent) -> Snapshot:
    if event.phase == RunPhase.STARTED:
        # Task collections carry over: a publisher serves a single run.
        # Counters are recounted from them rather than zeroed, so they
        # never disagree with the collections (zero on a fresh publisher).
        summary = _recount(
            RunSummary(
                phase=SummaryPhase.RUNNING,
                total_expected=event.total_expected or 0,
                started_at=event.started_at,
            ),
            snapshot,
        )
    else:
        summary = _summary_of(snapshot).model_copy(
            update={"phase": SummaryPhase.COMPLETE}
        )
    return snapshot.model_copy(update={"summary": summary})


def _recount(summary: RunSummary, snapshot: Snapshot) -> RunSummary:
    """*summary* with every counter derived from *snapshot*'s collections."""
    counts = {field: 0 for field in COUNTER_FIELDS.values()}
    for record in snapshot.finished_tasks:
        counts[COUNTER_FIELDS[record.status]] += 1
    counts["running_count"] = len(snapshot.running_tasks)
    return summary.model_copy(update=counts)


# ---------------------------------------------------------------------------
# Task events
# ---------------------------------------------------------------------------


def _apply_task_started(snapshot: Snapshot, event: TaskEvent, now: float) -> Snapshot:
    if snapshot.is_running(event.id) or snapshot.has_completed(event.id):
        return snapshot

    record = TaskRecord(
        id=event.id,
        group_name=event.group_name,
        task_name=event.task_name,
        started_at=now,
        duration=event.duration,
        status=TaskStatus.RUNNING,
    )
    summary = _summary_of(snapshot)
    summary = summary.model_copy(update={"running_count": summary.running_count + 1})
    return snapshot.model_copy(
        update={
            "running_tasks": snapshot.running_tasks + (record,),
            "summary": summary,
        }
    )


def _apply_task_finished(snapshot: Snapshot, event: TaskEvent, now: float) -> Snapshot:
    summary = _summary_of(snapshot)
    running = snapshot.running_tasks
    started_at = now

    index = _index_of(running, event.id)
    if index is not None:
        started_at = running[index].started_at
        running = running[:index] + running[index + 1 :]
        summary = summary.model_copy(
            update={"running_count": summary.running_count - 1}
        )

    record = TaskRecord(
        id=event.id,
        group_name=event.group_name,
        task_name=event.task_name,
        started_at=started_at,
        duration=event.duration,
        status=event.status,
    )
    field = COUNTER_FIELDS[event.status]
    summary = summary.model_copy(
        update={field: summary.counter_for(event.status) + 1}
    )

    return snapshot.model_copy(
        update={
            "running_tasks": running,
            "completed_tasks": snapshot.completed_tasks + (record,),
            "summary": summary,
        }
    )


def _summary_of(snapshot: Snapshot) -> RunSummary:
    """The snapshot's summary, or an implicit zeroed one when none exists yet."""
    if snapshot.summary is None:
        return RunSummary(phase=SummaryPhase.UNKNOWN)
    return snapshot.summary


def _index_of(tasks: tuple[TaskRecord, ...], task_id: str) -> int | None:
    for i, task in enumerate(tasks):
        if task.id == task_id:
            return i
    return None
