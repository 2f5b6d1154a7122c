"""Tests for the reporter factory and logging setup."""

from __future__ import annotations

import logging

from rich.console import Console

from taskpulse.config import ReporterSettings
from taskpulse.display.renderer import LiveView, PlainView
from taskpulse.logging_setup import setup_logging
from taskpulse.reporters import create_reporter


class TestCreateReporter:
    def test_live_reporter(self):
        reporter, view = create_reporter(ReporterSettings(reporter="live"))
        assert isinstance(view, LiveView)
        assert view in reporter.publisher.subscribers

    def test_plain_reporter(self):
        reporter, view = create_reporter(ReporterSettings(), reporter="plain")
        assert isinstance(view, PlainView)

    def test_unknown_name_falls_back_to_plain(self, caplog):
        with caplog.at_level(logging.WARNING, logger="taskpulse.reporters"):
            _, view = create_reporter(ReporterSettings(reporter="json"))
        assert isinstance(view, PlainView)
        assert "falling back" in caplog.text

    def test_settings_reach_renderer(self):
        console = Console(record=True, width=80)
        config = ReporterSettings(show_header=False, refresh_hz=2.0)
        reporter, view = create_reporter(config, reporter="live", console=console)
        assert view.refresh_hz == 2.0
        assert view.renderer.show_header is False
        assert view.renderer.console is console
        assert view.renderer.clock is reporter.publisher.clock


class TestSetupLogging:
    def test_installs_single_handler(self):
        root = logging.getLogger()
        setup_logging("DEBUG")
        setup_logging("WARNING")
        named = [h for h in root.handlers if h.get_name() == "taskpulse-rich"]
        assert len(named) == 1
        assert named[0].level == logging.WARNING
        root.removeHandler(named[0])

    def test_unknown_level_defaults_to_info(self):
        root = logging.getLogger()
        setup_logging("chatty")
        assert root.level == logging.INFO
        for handler in [h for h in root.handlers if h.get_name() == "taskpulse-rich"]:
            root.removeHandler(handler)
