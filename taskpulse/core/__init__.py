"""Core of the progress reporter: aggregation and publication of snapshots.

Modules
-------
aggregator
    ``advance`` folds one event into the next immutable ``Snapshot``.
publisher
    ``SnapshotPublisher`` stores the current snapshot and notifies
    subscribers after every accepted event.
reporter
    ``ProgressReporter`` is the inbound/outbound facade used by event
    sources and renderers.
"""

from taskpulse.core.aggregator import advance
from taskpulse.core.publisher import SnapshotPublisher, Subscription
from taskpulse.core.reporter import ProgressReporter, event_from_log_entry

__all__ = [
    "advance",
    "SnapshotPublisher",
    "Subscription",
    "ProgressReporter",
    "event_from_log_entry",
]
