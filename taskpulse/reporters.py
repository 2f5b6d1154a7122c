"""Reporter factory: wires a ``ProgressReporter`` to a terminal view."""

from __future__ import annotations

import logging

from rich.console import Console

from taskpulse.config import REPORTER_CHOICES, ReporterSettings, settings as default_settings
from taskpulse.core.reporter import ProgressReporter
from taskpulse.display.renderer import LiveView, PlainView, ProgressRenderer

logger = logging.getLogger(__name__)


def create_reporter(
    config: ReporterSettings | None = None,
    *,
    reporter: str | None = None,
    console: Console | None = None,
) -> tuple[ProgressReporter, LiveView | PlainView]:
    """Build a reporter and the view subscribed to it.

    The view is a context manager; enter it before the first event so the
    live region is up.  Unknown reporter names fall back to ``plain``.
    """
    config = config or default_settings
    name = (reporter or config.reporter).lower()
    if name not in REPORTER_CHOICES:
        logger.warning("Unknown reporter %r, falling back to plain output", name)
        name = "plain"

    progress = ProgressReporter()
    renderer = ProgressRenderer(
        console=console,
        show_header=config.show_header,
        clock=progress.publisher.clock,
    )
    view: LiveView | PlainView
    if name == "live":
        view = LiveView(renderer, refresh_hz=config.refresh_hz)
    else:
        view = PlainView(renderer)
    progress.subscribe(view)
    logger.debug("Created %s reporter", name)
    return progress, view
