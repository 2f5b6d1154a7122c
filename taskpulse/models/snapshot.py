"""Immutable progress snapshot: running tasks, completed tasks, run summary.

A ``Snapshot`` is never mutated.  The aggregator produces a new one for
every accepted event, so a subscriber may keep any snapshot it was handed
and compare it later.  Collections are tuples of frozen models, which means
two snapshots never share a mutable container.
"""

from __future__ import annotations

from enum import Enum

from pydantic import BaseModel, ConfigDict, Field

from taskpulse.models.events import TaskStatus


class TaskRecord(BaseModel):
    """One observed task execution."""

    model_config = ConfigDict(frozen=True)

    id: str
    group_name: str
    task_name: str
    started_at: float
    duration: str | None = None
    status: TaskStatus = TaskStatus.RUNNING


class SummaryPhase(str, Enum):
    UNKNOWN = "unknown"
    RUNNING = "running"
    COMPLETE = "complete"


# Terminal status -> RunSummary counter field.
COUNTER_FIELDS: dict[TaskStatus, str] = {
    TaskStatus.SUCCESS: "succeeded_count",
    TaskStatus.FAILED: "failed_count",
    TaskStatus.SKIPPED: "skipped_count",
    TaskStatus.ABORTED: "aborted_count",
}


class RunSummary(BaseModel):
    """Aggregate counters for the current run.

    ``total_expected`` is whatever the scheduler announced at start-up; it
    is a display hint and is never checked against actual completions.
    """

    model_config = ConfigDict(frozen=True)

    phase: SummaryPhase = SummaryPhase.UNKNOWN
    total_expected: int = Field(default=0, ge=0)
    running_count: int = Field(default=0, ge=0)
    succeeded_count: int = Field(default=0, ge=0)
    failed_count: int = Field(default=0, ge=0)
    skipped_count: int = Field(default=0, ge=0)
    aborted_count: int = Field(default=0, ge=0)
    started_at: float | None = None

    @property
    def finished_count(self) -> int:
        """Tasks that reached any terminal status."""
        return (
            self.succeeded_count
            + self.failed_count
            + self.skipped_count
            + self.aborted_count
        )

    def counter_for(self, status: TaskStatus) -> int:
        if status == TaskStatus.RUNNING:
            return self.running_count
        return getattr(self, COUNTER_FIELDS[status])


class Snapshot(BaseModel):
    """Point-in-time view of a run.

    ``completed_tasks[0]`` is always ``None``: a placeholder standing for the
    run header, so a renderer can print its banner exactly once and before
    the first real completed task.  It is never counted and never removed.
    """

    model_config = ConfigDict(frozen=True)

    running_tasks: tuple[TaskRecord, ...] = ()
    completed_tasks: tuple[TaskRecord | None, ...] = (None,)
    summary: RunSummary | None = None

    @classmethod
    def empty(cls) -> Snapshot:
        return cls()

    @property
    def finished_tasks(self) -> tuple[TaskRecord, ...]:
        """Completed records without the header placeholder."""
        return tuple(t for t in self.completed_tasks if t is not None)

    def is_running(self, task_id: str) -> bool:
        return any(t.id == task_id for t in self.running_tasks)

    def has_completed(self, task_id: str) -> bool:
        return any(t is not None and t.id == task_id for t in self.completed_tasks)
