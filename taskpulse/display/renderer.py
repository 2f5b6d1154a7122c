"""Rich terminal renderer for progress snapshots.

Layout
------
- header       : printed once, for the completed-tasks placeholder
- completed    : one permanent line per finished task, printed once
- running      : spinner, elapsed time, task and group name per task
- summary      : ``<finished>/<total> complete``

Status icons
------------
- green ✔ : success, skipped
- red ✖   : failed
- grey ⚠  : aborted

The spinner animation is driven by ``rich.live.Live``'s own refresh
thread.  Nothing here feeds events back into the publisher.
"""

from __future__ import annotations

import time
from collections.abc import Callable
from types import TracebackType

from rich.console import Console, Group, RenderableType
from rich.live import Live
from rich.spinner import Spinner
from rich.table import Table
from rich.text import Text

from taskpulse import __version__
from taskpulse.display.colors import assign_color, darken
from taskpulse.display.durations import task_elapsed
from taskpulse.models.events import TaskStatus
from taskpulse.models.snapshot import RunSummary, Snapshot, SummaryPhase, TaskRecord

# ---------------------------------------------------------------------------
# Status -> icon mapping
# ---------------------------------------------------------------------------

_STATUS_ICONS: dict[TaskStatus, tuple[str, str]] = {
    TaskStatus.SUCCESS: ("✔", "green"),
    TaskStatus.SKIPPED: ("✔", "green"),
    TaskStatus.FAILED: ("✖", "red"),
    TaskStatus.ABORTED: ("⚠", "grey50"),
    TaskStatus.RUNNING: (" ", "grey50"),
}

_HEADER_GRADIENT = ("#00b4db", "#0083b0", "#005b96", "#003f7d", "#002763")
_DIVIDER = "─" * 60


class ProgressRenderer:
    """Turns ``Snapshot`` values into Rich renderables.

    Parameters
    ----------
    console:
        Rich Console instance.  A new one is created if not provided.
    show_header:
        Whether the placeholder entry renders the banner.
    clock:
        Monotonic time source for elapsed times of running tasks.
    """

    def __init__(
        self,
        console: Console | None = None,
        *,
        show_header: bool = True,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        self.console = console or Console()
        self.show_header = show_header
        self.clock = clock

    # ------------------------------------------------------------------
    # Permanent lines
    # ------------------------------------------------------------------

    def render_header(self) -> RenderableType:
        title = Text()
        for i, char in enumerate(f"taskpulse v{__version__}"):
            title.append(char, style=_HEADER_GRADIENT[i % len(_HEADER_GRADIENT)])
        title.append(" - ")
        title.append("Let's make it!", style="bold")
        return Group(title, self.render_divider())

    def render_divider(self) -> Text:
        return Text(_DIVIDER, style="#333333")

    def render_completed(self, record: TaskRecord, now: float | None = None) -> Text:
        """One line for a finished task."""
        icon, icon_style = _STATUS_ICONS[record.status]
        color = assign_color(record.group_name)

        line = Text()
        line.append(icon, style=icon_style)
        line.append(" ")
        line.append(record.task_name, style=darken(color, 0.6))
        line.append(" ")
        line.append(record.group_name, style=color)
        line.append(" ")
        if record.status == TaskStatus.SKIPPED:
            line.append("- skipped")
        else:
            elapsed = task_elapsed(record, self.clock() if now is None else now)
            line.append("(")
            line.append(elapsed, style="grey50")
            line.append(")")
        return line

    def render_entry(self, entry: TaskRecord | None, now: float | None = None) -> RenderableType | None:
        """Render one ``completed_tasks`` entry; ``None`` is the header slot."""
        if entry is None:
            return self.render_header() if self.show_header else None
        return self.render_completed(entry, now)

    # ------------------------------------------------------------------
    # Live region
    # ------------------------------------------------------------------

    def render_summary(self, summary: RunSummary | None) -> Text:
        if summary is None or not summary.total_expected:
            return Text("")
        done = summary.succeeded_count + summary.failed_count + summary.skipped_count
        return Text(f"{done}/{summary.total_expected} complete")

    def render_running(self, tasks: tuple[TaskRecord, ...], now: float) -> Table:
        grid = Table.grid(padding=(0, 1))
        grid.add_column(width=1)
        grid.add_column(width=8)
        grid.add_column()
        for task in tasks:
            color = assign_color(task.group_name)
            names = Text()
            names.append(task.task_name, style=darken(color, 0.6))
            names.append(" ")
            names.append(task.group_name, style=f"bold {color}")
            grid.add_row(
                Spinner("dots", style="bright_cyan"),
                Text(task_elapsed(task, now), style="grey50"),
                names,
            )
        return grid

    def render(self, snapshot: Snapshot, now: float | None = None) -> RenderableType:
        """Render the live (redrawn) part of the display."""
        now = self.clock() if now is None else now
        parts: list[RenderableType] = []
        if len(snapshot.completed_tasks) > 1:
            parts.append(self.render_divider())
        if snapshot.running_tasks:
            parts.append(self.render_running(snapshot.running_tasks, now))
            parts.append(self.render_divider())
        parts.append(self.render_summary(snapshot.summary))
        return Group(*parts)


# ---------------------------------------------------------------------------
# Subscribers
# ---------------------------------------------------------------------------


class _CompletedPrinter:
    """Prints each ``completed_tasks`` entry exactly once, in order."""

    def __init__(self, renderer: ProgressRenderer) -> None:
        self.renderer = renderer
        self._printed = 0

    def _print_new_entries(self, snapshot: Snapshot, console: Console) -> None:
        entries = snapshot.completed_tasks
        for entry in entries[self._printed :]:
            renderable = self.renderer.render_entry(entry)
            if renderable is not None:
                console.print(renderable)
        self._printed = max(self._printed, len(entries))


class LiveView(_CompletedPrinter):
    """Publisher subscriber driving a ``rich.live.Live`` display.

    Use as a context manager around the run::

        with LiveView(renderer) as view:
            reporter.subscribe(view)
            ...
    """

    def __init__(self, renderer: ProgressRenderer, *, refresh_hz: float = 10.0) -> None:
        super().__init__(renderer)
        self.refresh_hz = refresh_hz
        self._snapshot = Snapshot.empty()
        self._live: Live | None = None

    def __enter__(self) -> LiveView:
        self._live = Live(
            console=self.renderer.console,
            refresh_per_second=max(self.refresh_hz, 0.1),
            transient=False,
            get_renderable=self._current_renderable,
        )
        self._live.start()
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        if self._live is not None:
            self._live.refresh()
            self._live.stop()
            self._live = None

    def _current_renderable(self) -> RenderableType:
        return self.renderer.render(self._snapshot)

    def __call__(self, snapshot: Snapshot) -> None:
        self._snapshot = snapshot
        console = self._live.console if self._live is not None else self.renderer.console
        self._print_new_entries(snapshot, console)
        if self._live is not None:
            self._live.refresh()


class PlainView(_CompletedPrinter):
    """Publisher subscriber for non-interactive output (pipes, CI logs)."""

    def __init__(self, renderer: ProgressRenderer) -> None:
        super().__init__(renderer)
        self._summary_printed = False

    def __enter__(self) -> PlainView:
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        return None

    def __call__(self, snapshot: Snapshot) -> None:
        self._print_new_entries(snapshot, self.renderer.console)
        summary = snapshot.summary
        if (
            summary is not None
            and summary.phase == SummaryPhase.COMPLETE
            and not self._summary_printed
        ):
            self._summary_printed = True
            self.renderer.console.print(self.renderer.render_summary(summary))
