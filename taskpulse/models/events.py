"""Lifecycle event vocabulary consumed by the progress aggregator.

Two event families reach the reporter: run events emitted by the scheduler
("run started", "run complete") and task events describing one task's
transition into execution or into a terminal status.  Both are frozen
Pydantic models discriminated on ``kind``.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from enum import Enum
from typing import Annotated, Any, Literal, Union

from pydantic import BaseModel, ConfigDict, Field, TypeAdapter, ValidationError, model_validator

logger = logging.getLogger(__name__)


class EventKind(str, Enum):
    RUN = "run"
    TASK = "task"


class RunPhase(str, Enum):
    STARTED = "started"
    COMPLETE = "complete"


class TaskStatus(str, Enum):
    """Status carried by a task event.  Everything but RUNNING is terminal."""

    RUNNING = "running"
    SUCCESS = "success"
    FAILED = "failed"
    SKIPPED = "skipped"
    ABORTED = "aborted"

    @property
    def is_terminal(self) -> bool:
        return self is not TaskStatus.RUNNING


class RunEvent(BaseModel):
    """Scheduler lifecycle notification.

    ``total_expected`` and ``started_at`` are required for the ``started``
    phase and ignored for ``complete``.
    """

    model_config = ConfigDict(frozen=True)

    kind: Literal["run"] = "run"
    phase: RunPhase
    total_expected: int | None = Field(default=None, ge=0)
    started_at: float | None = None

    @model_validator(mode="before")
    @classmethod
    def _drop_unused_fields(cls, data: Any) -> Any:
        if isinstance(data, Mapping) and data.get("phase") in (
            RunPhase.COMPLETE,
            RunPhase.COMPLETE.value,
        ):
            return {
                k: v
                for k, v in data.items()
                if k not in ("total_expected", "started_at")
            }
        return data

    @model_validator(mode="after")
    def _check_started_fields(self) -> RunEvent:
        if self.phase == RunPhase.STARTED:
            if self.total_expected is None:
                raise ValueError("run started event requires total_expected")
            if self.started_at is None:
                raise ValueError("run started event requires started_at")
        return self


class TaskEvent(BaseModel):
    """Transition of a single task execution."""

    model_config = ConfigDict(frozen=True, coerce_numbers_to_str=True)

    kind: Literal["task"] = "task"
    id: str = Field(min_length=1)
    group_name: str = Field(min_length=1)
    task_name: str = Field(min_length=1)
    status: TaskStatus
    duration: str | None = None


Event = Annotated[Union[RunEvent, TaskEvent], Field(discriminator="kind")]

_EVENT_ADAPTER: TypeAdapter[RunEvent | TaskEvent] = TypeAdapter(Event)


def parse_event(raw: Any) -> RunEvent | TaskEvent | None:
    """Validate *raw* into an event, or return ``None`` when it is malformed.

    Already-built events pass through untouched.  Mappings are validated
    against the discriminated union.  Nothing here raises: the live display
    prefers dropping a bad notification over crashing the host process.
    """
    if isinstance(raw, (RunEvent, TaskEvent)):
        return raw
    if not isinstance(raw, Mapping):
        logger.debug("Dropping non-mapping event of type %s", type(raw).__name__)
        return None
    try:
        return _EVENT_ADAPTER.validate_python(dict(raw))
    except ValidationError as exc:
        logger.debug("Dropping malformed event %r: %s", raw, exc)
        return None
