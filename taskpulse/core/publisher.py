"""SnapshotPublisher: owns the current snapshot and notifies subscribers.

Every accepted event produces exactly one new snapshot and one
notification round.  Subscribers are called synchronously, in
subscription order, with the new snapshot.  A failing subscriber is logged
and skipped; it never stops the others and never touches the stored state.
"""

from __future__ import annotations

import logging
import time
from collections.abc import Callable
from typing import Any

from taskpulse.core.aggregator import advance
from taskpulse.models.events import parse_event
from taskpulse.models.snapshot import Snapshot

logger = logging.getLogger(__name__)

SnapshotCallback = Callable[[Snapshot], Any]
ErrorHandler = Callable[[SnapshotCallback, Exception], Any]


class Subscription:
    """Handle returned by ``SnapshotPublisher.subscribe``."""

    def __init__(self, publisher: SnapshotPublisher, callback: SnapshotCallback) -> None:
        self._publisher = publisher
        self.callback = callback

    def unsubscribe(self) -> None:
        self._publisher.unsubscribe(self.callback)

    def __repr__(self) -> str:
        return f"Subscription(callback={self.callback!r})"


class SnapshotPublisher:
    """Observable holder of the current ``Snapshot``.

    Parameters
    ----------
    initial:
        Starting snapshot.  Defaults to an empty one (header placeholder
        only, no summary).
    clock:
        Monotonic time source used to stamp newly observed tasks.
    on_error:
        Optional ``(callback, exc)`` hook invoked when a subscriber raises.

    Usage
    -----
    >>> publisher = SnapshotPublisher()
    >>> handle = publisher.subscribe(view)
    >>> publisher.publish({"kind": "run", "phase": "started",
    ...                    "total_expected": 3, "started_at": 0.0})
    >>> handle.unsubscribe()

    Calls into ``publish`` must be serialized by the host.  A subscriber
    that calls ``publish`` from inside a notification is misusing the
    publisher; the nested event is logged and dropped.
    """

    def __init__(
        self,
        initial: Snapshot | None = None,
        *,
        clock: Callable[[], float] = time.monotonic,
        on_error: ErrorHandler | None = None,
    ) -> None:
        self._snapshot = initial if initial is not None else Snapshot.empty()
        self._subscribers: list[SnapshotCallback] = []
        self._clock = clock
        self._on_error = on_error
        self._publishing = False

    # ------------------------------------------------------------------
    # State
    # ------------------------------------------------------------------

    @property
    def snapshot(self) -> Snapshot:
        return self._snapshot

    def get_current_snapshot(self) -> Snapshot:
        """Latest published snapshot, for late subscribers' first render."""
        return self._snapshot

    @property
    def clock(self) -> Callable[[], float]:
        return self._clock

    # ------------------------------------------------------------------
    # Subscriber management
    # ------------------------------------------------------------------

    def subscribe(self, callback: SnapshotCallback) -> Subscription:
        """Register *callback* for every future snapshot change."""
        self._subscribers.append(callback)
        logger.debug("Subscribed %r (%d total)", callback, len(self._subscribers))
        return Subscription(self, callback)

    def unsubscribe(self, callback: SnapshotCallback | Subscription) -> None:
        """Remove every registration of *callback* (matched by identity)."""
        if isinstance(callback, Subscription):
            callback = callback.callback
        before = len(self._subscribers)
        self._subscribers = [cb for cb in self._subscribers if cb is not callback]
        if len(self._subscribers) != before:
            logger.debug("Unsubscribed %r", callback)

    @property
    def subscribers(self) -> list[SnapshotCallback]:
        """Return a copy of the registered subscriber list."""
        return list(self._subscribers)

    # ------------------------------------------------------------------
    # Publish
    # ------------------------------------------------------------------

    def publish(self, event: Any) -> Snapshot:
        """Apply *event* and notify subscribers with the resulting snapshot.

        *event* may be a ``RunEvent``/``TaskEvent`` or a mapping in their
        wire shape.  Malformed events and events that change nothing are
        dropped silently: no replacement, no notification.  Returns the
        current snapshot either way.
        """
        if self._publishing:
            logger.warning("Re-entrant publish from a subscriber dropped: %r", event)
            return self._snapshot

        parsed = parse_event(event)
        if parsed is None:
            return self._snapshot

        updated = advance(self._snapshot, parsed, self._clock())
        if updated is self._snapshot:
            logger.debug("Event %r left the snapshot unchanged", parsed)
            return self._snapshot

        self._snapshot = updated
        self._notify(updated)
        return updated

    def _notify(self, snapshot: Snapshot) -> None:
        self._publishing = True
        try:
            for callback in list(self._subscribers):
                try:
                    callback(snapshot)
                except Exception as exc:  # noqa: BLE001
                    logger.exception("Subscriber %r failed", callback)
                    self._report_failure(callback, exc)
        finally:
            self._publishing = False

    def _report_failure(self, callback: SnapshotCallback, exc: Exception) -> None:
        if self._on_error is None:
            return
        try:
            self._on_error(callback, exc)
        except Exception:  # noqa: BLE001
            logger.exception("on_error hook failed for %r", callback)
