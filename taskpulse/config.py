"""Reporter configuration: env-driven via pydantic-settings.

Reads from a ``.env`` file and ``TASKPULSE_*`` environment variables.
CLI options override these values per invocation.
"""

from __future__ import annotations

from pydantic_settings import BaseSettings, SettingsConfigDict

REPORTER_CHOICES = ("live", "plain")


class ReporterSettings(BaseSettings):
    """Settings for the progress reporter and its terminal views.

    Examples
    --------
    Override via environment::

        export TASKPULSE_REPORTER=plain
        export TASKPULSE_LOG_LEVEL=DEBUG
        export TASKPULSE_REFRESH_HZ=4
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_prefix="TASKPULSE_",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    environment: str = "development"
    log_level: str = "INFO"
    verbose: bool = False

    # Display
    reporter: str = "live"
    refresh_hz: float = 10.0  # spinner cadence, 100 ms per frame
    show_header: bool = True

    @property
    def effective_log_level(self) -> str:
        """DEBUG when verbose, else the configured level."""
        return "DEBUG" if self.verbose else self.log_level.upper()


# Module-level singleton: import as `from taskpulse.config import settings`
settings = ReporterSettings()
