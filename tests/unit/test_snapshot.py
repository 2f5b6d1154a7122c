"""Tests for Snapshot, RunSummary and TaskRecord models."""

from __future__ import annotations

import pytest
from pydantic import ValidationError

from taskpulse.models.events import TaskStatus
from taskpulse.models.snapshot import RunSummary, Snapshot, SummaryPhase, TaskRecord


def _record(task_id: str, status: TaskStatus = TaskStatus.SUCCESS) -> TaskRecord:
    return TaskRecord(
        id=task_id, group_name="pkg", task_name="build", started_at=1.0, status=status
    )


class TestSnapshot:
    def test_empty_has_only_placeholder(self):
        snap = Snapshot.empty()
        assert snap.running_tasks == ()
        assert snap.completed_tasks == (None,)
        assert snap.summary is None
        assert snap.finished_tasks == ()

    def test_finished_tasks_skip_placeholder(self):
        snap = Snapshot(completed_tasks=(None, _record("a"), _record("b")))
        assert [t.id for t in snap.finished_tasks] == ["a", "b"]

    def test_membership_helpers(self):
        snap = Snapshot(
            running_tasks=(_record("r", TaskStatus.RUNNING),),
            completed_tasks=(None, _record("c")),
        )
        assert snap.is_running("r")
        assert not snap.is_running("c")
        assert snap.has_completed("c")
        assert not snap.has_completed("r")

    def test_frozen(self):
        snap = Snapshot.empty()
        with pytest.raises(ValidationError):
            snap.summary = RunSummary()

    def test_lists_are_stored_as_tuples(self):
        snap = Snapshot(running_tasks=[_record("a", TaskStatus.RUNNING)])
        assert isinstance(snap.running_tasks, tuple)


class TestRunSummary:
    def test_defaults(self):
        summary = RunSummary()
        assert summary.phase == SummaryPhase.UNKNOWN
        assert summary.total_expected == 0
        assert summary.finished_count == 0
        assert summary.started_at is None

    def test_finished_count_sums_terminal_counters(self):
        summary = RunSummary(
            succeeded_count=3, failed_count=1, skipped_count=2, aborted_count=1
        )
        assert summary.finished_count == 7

    def test_counter_for(self):
        summary = RunSummary(running_count=2, failed_count=4)
        assert summary.counter_for(TaskStatus.RUNNING) == 2
        assert summary.counter_for(TaskStatus.FAILED) == 4
        assert summary.counter_for(TaskStatus.SUCCESS) == 0

    def test_negative_counters_rejected(self):
        with pytest.raises(ValidationError):
            RunSummary(running_count=-1)
