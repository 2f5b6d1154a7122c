"""taskpulse data models: all Pydantic v2, all frozen (immutable)."""

from taskpulse.models.events import (
    Event,
    EventKind,
    RunEvent,
    RunPhase,
    TaskEvent,
    TaskStatus,
    parse_event,
)
from taskpulse.models.snapshot import (
    COUNTER_FIELDS,
    RunSummary,
    Snapshot,
    SummaryPhase,
    TaskRecord,
)

__all__ = [
    # events
    "Event",
    "EventKind",
    "RunEvent",
    "RunPhase",
    "TaskEvent",
    "TaskStatus",
    "parse_event",
    # snapshot
    "COUNTER_FIELDS",
    "RunSummary",
    "Snapshot",
    "SummaryPhase",
    "TaskRecord",
]
