"""taskpulse: live progress reporting for task-running build orchestrators.

Lifecycle events from a scheduler and its tasks are folded into immutable
snapshots (running tasks, completed tasks, run summary) and published to
subscribers such as the Rich terminal view.
"""

__version__ = "0.1.0"
__description__ = "Live progress snapshots for task-running build orchestrators"

from taskpulse.core.publisher import SnapshotPublisher
from taskpulse.core.reporter import ProgressReporter
from taskpulse.models.snapshot import Snapshot

__all__ = ["ProgressReporter", "SnapshotPublisher", "Snapshot", "__version__"]
