"""Tests for the event model: validation and the parse boundary."""

from __future__ import annotations

import pytest
from pydantic import ValidationError

from taskpulse.models.events import (
    RunEvent,
    RunPhase,
    TaskEvent,
    TaskStatus,
    parse_event,
)


class TestRunEvent:
    def test_started_requires_total_and_start(self):
        with pytest.raises(ValidationError):
            RunEvent(phase=RunPhase.STARTED, started_at=1.0)
        with pytest.raises(ValidationError):
            RunEvent(phase=RunPhase.STARTED, total_expected=2)

    def test_complete_needs_nothing_else(self):
        event = RunEvent(phase=RunPhase.COMPLETE)
        assert event.kind == "run"
        assert event.total_expected is None

    def test_negative_total_rejected(self):
        with pytest.raises(ValidationError):
            RunEvent(phase=RunPhase.STARTED, total_expected=-1, started_at=0.0)

    def test_frozen(self):
        event = RunEvent(phase=RunPhase.COMPLETE)
        with pytest.raises(ValidationError):
            event.phase = RunPhase.STARTED


class TestTaskStatus:
    def test_only_running_is_not_terminal(self):
        assert not TaskStatus.RUNNING.is_terminal
        for status in (
            TaskStatus.SUCCESS,
            TaskStatus.FAILED,
            TaskStatus.SKIPPED,
            TaskStatus.ABORTED,
        ):
            assert status.is_terminal


class TestParseEvent:
    def test_passes_built_events_through(self, make_task_event):
        event = make_task_event()
        assert parse_event(event) is event

    def test_parses_task_mapping(self):
        event = parse_event(
            {
                "kind": "task",
                "id": "a",
                "group_name": "pkg",
                "task_name": "build",
                "status": "success",
                "duration": "1.2s",
            }
        )
        assert isinstance(event, TaskEvent)
        assert event.status == TaskStatus.SUCCESS
        assert event.duration == "1.2s"

    def test_parses_run_mapping(self):
        event = parse_event(
            {"kind": "run", "phase": "started", "total_expected": 3, "started_at": 5.0}
        )
        assert isinstance(event, RunEvent)
        assert event.total_expected == 3

    def test_numeric_duration_is_coerced_to_text(self):
        event = parse_event(
            {
                "kind": "task",
                "id": 7,
                "group_name": "pkg",
                "task_name": "test",
                "status": "failed",
                "duration": 1.5,
            }
        )
        assert event is not None
        assert event.id == "7"
        assert event.duration == "1.5"

    @pytest.mark.parametrize(
        "raw",
        [
            None,
            "task",
            42,
            {},
            {"kind": "bogus"},
            {"kind": "run", "phase": "started"},
            {"kind": "run", "phase": "paused"},
            {"kind": "task", "id": "a", "group_name": "pkg", "status": "running"},
            {"kind": "task", "id": "", "group_name": "pkg", "task_name": "t", "status": "running"},
            {"kind": "task", "id": "a", "group_name": "pkg", "task_name": "t", "status": "queued"},
            {"id": "a", "group_name": "pkg", "task_name": "t", "status": "running"},
        ],
    )
    def test_malformed_returns_none(self, raw):
        assert parse_event(raw) is None


class TestRunCompleteIgnoresStartFields:
    def test_stale_fields_are_discarded(self):
        event = parse_event(
            {"kind": "run", "phase": "complete", "total_expected": -1, "started_at": "n/a"}
        )
        assert isinstance(event, RunEvent)
        assert event.phase == RunPhase.COMPLETE
        assert event.total_expected is None
        assert event.started_at is None

    def test_started_still_validates_total(self):
        assert parse_event(
            {"kind": "run", "phase": "started", "total_expected": -1, "started_at": 0.0}
        ) is None

    def test_complete_with_stale_fields_completes_run(self, publisher):
        snap = publisher.publish(
            {"kind": "run", "phase": "complete", "total_expected": -1, "started_at": "n/a"}
        )
        assert snap.summary is not None
        assert snap.summary.phase.value == "complete"
