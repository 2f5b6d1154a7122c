"""ProgressReporter: the boundary between an event source and the publisher.

The scheduler side calls the ``emit_*`` methods (or hands over raw log
entries through ``log``); rendering collaborators use ``subscribe`` and
``get_current_snapshot``.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from typing import Any

from taskpulse.core.publisher import SnapshotCallback, SnapshotPublisher, Subscription
from taskpulse.models.events import EventKind, RunPhase, TaskStatus
from taskpulse.models.snapshot import Snapshot

logger = logging.getLogger(__name__)


class ProgressReporter:
    """Translate orchestrator notifications into published snapshots.

    Parameters
    ----------
    publisher:
        The publisher to feed.  A fresh one is created if not provided.
    """

    def __init__(self, publisher: SnapshotPublisher | None = None) -> None:
        self.publisher = publisher or SnapshotPublisher()

    # ------------------------------------------------------------------
    # Inbound
    # ------------------------------------------------------------------

    def emit_run_started(
        self, total_expected: int, started_at: float | None = None
    ) -> Snapshot:
        if started_at is None:
            started_at = self.publisher.clock()
        return self.publisher.publish(
            {
                "kind": EventKind.RUN.value,
                "phase": RunPhase.STARTED.value,
                "total_expected": total_expected,
                "started_at": started_at,
            }
        )

    def emit_run_complete(self) -> Snapshot:
        return self.publisher.publish(
            {"kind": EventKind.RUN.value, "phase": RunPhase.COMPLETE.value}
        )

    def emit_task_transition(
        self,
        id: str,
        group_name: str,
        task_name: str,
        status: TaskStatus | str,
        duration: str | None = None,
    ) -> Snapshot:
        return self.publisher.publish(
            {
                "kind": EventKind.TASK.value,
                "id": id,
                "group_name": group_name,
                "task_name": task_name,
                "status": status,
                "duration": duration,
            }
        )

    def log(self, entry: Mapping[str, Any]) -> Snapshot:
        """Accept an orchestrator log entry and publish what it describes.

        Scheduler entries carry ``data.type == "scheduler"`` with
        ``status`` ``running``/``complete``; target entries carry a
        ``data.target`` mapping (``id``, ``packageName``, ``task``,
        ``duration``) plus ``data.status``.  Anything else is ignored.
        """
        event = event_from_log_entry(entry)
        if event is None:
            return self.publisher.snapshot
        return self.publisher.publish(event)

    # ------------------------------------------------------------------
    # Outbound
    # ------------------------------------------------------------------

    def subscribe(self, callback: SnapshotCallback) -> Subscription:
        return self.publisher.subscribe(callback)

    def unsubscribe(self, callback: SnapshotCallback | Subscription) -> None:
        self.publisher.unsubscribe(callback)

    def get_current_snapshot(self) -> Snapshot:
        return self.publisher.get_current_snapshot()


def event_from_log_entry(entry: Any) -> dict[str, Any] | None:
    """Map an orchestrator log entry onto the event wire shape.

    Returns ``None`` for entries that carry no lifecycle information.  The
    result is not validated here; the publisher drops it if incomplete.
    """
    if not isinstance(entry, Mapping):
        return None
    data = entry.get("data")
    if not isinstance(data, Mapping):
        return None

    status = data.get("status")
    if data.get("type") == "scheduler":
        if status == "running":
            return {
                "kind": EventKind.RUN.value,
                "phase": RunPhase.STARTED.value,
                "total_expected": data.get("total"),
                "started_at": data.get("startTime"),
            }
        if status == "complete":
            return {"kind": EventKind.RUN.value, "phase": RunPhase.COMPLETE.value}
        logger.debug("Ignoring scheduler entry with status %r", status)
        return None

    target = data.get("target")
    if isinstance(target, Mapping) and status:
        return {
            "kind": EventKind.TASK.value,
            "id": target.get("id"),
            "group_name": target.get("packageName"),
            "task_name": target.get("task"),
            "status": status,
            "duration": target.get("duration"),
        }
    return None
