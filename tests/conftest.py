"""Shared test fixtures for taskpulse."""

from __future__ import annotations

from collections.abc import Callable
from typing import Any

import pytest

from taskpulse.core.publisher import SnapshotPublisher
from taskpulse.core.reporter import ProgressReporter
from taskpulse.models.events import RunEvent, RunPhase, TaskEvent, TaskStatus
from taskpulse.models.snapshot import Snapshot


class FakeClock:
    """Monotonic clock that only moves when told to."""

    def __init__(self, start: float = 100.0) -> None:
        self.now = start

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def publisher(clock: FakeClock) -> SnapshotPublisher:
    """Provide a fresh publisher driven by the fake clock."""
    return SnapshotPublisher(clock=clock)


@pytest.fixture
def reporter(publisher: SnapshotPublisher) -> ProgressReporter:
    return ProgressReporter(publisher)


@pytest.fixture
def recorder() -> list[Snapshot]:
    """A list that doubles as a subscriber via ``recorder.append``."""
    return []


# ---------------------------------------------------------------------------
# Event factories: shared across test modules
# ---------------------------------------------------------------------------


@pytest.fixture
def make_task_event() -> Callable[..., TaskEvent]:
    """Factory fixture: build a TaskEvent with sensible defaults."""

    def _factory(
        id: str = "pkg#build",
        status: TaskStatus | str = TaskStatus.RUNNING,
        **overrides: Any,
    ) -> TaskEvent:
        defaults: dict[str, Any] = {
            "id": id,
            "group_name": "pkg",
            "task_name": "build",
            "status": status,
        }
        defaults.update(overrides)
        return TaskEvent(**defaults)

    return _factory


@pytest.fixture
def make_run_started() -> Callable[..., RunEvent]:
    """Factory fixture: build a run-started RunEvent."""

    def _factory(total_expected: int = 3, started_at: float = 0.0) -> RunEvent:
        return RunEvent(
            phase=RunPhase.STARTED,
            total_expected=total_expected,
            started_at=started_at,
        )

    return _factory


def assert_consistent(snapshot: Snapshot) -> None:
    """Check the count and disjointness invariants of a snapshot."""
    assert snapshot.completed_tasks[0] is None
    running_ids = [t.id for t in snapshot.running_tasks]
    assert len(running_ids) == len(set(running_ids))
    completed_ids = {t.id for t in snapshot.finished_tasks}
    assert not set(running_ids) & completed_ids
    if snapshot.summary is not None:
        assert snapshot.summary.running_count == len(snapshot.running_tasks)
        assert snapshot.summary.finished_count == len(snapshot.completed_tasks) - 1


@pytest.fixture
def consistent() -> Callable[[Snapshot], None]:
    """Provide the invariant checker as a fixture."""
    return assert_consistent
