"""Viewer configuration — env-driven.

Centralized config using pydantic-settings.  Reads from a .env file and
REPORTVIEW_* environment variables.
"""

from __future__ import annotations

from datetime import tzinfo
from zoneinfo import ZoneInfo

from pydantic_settings import BaseSettings, SettingsConfigDict


class ViewerConfig(BaseSettings):
    """Viewer configuration with environment variable overrides.

    Examples
    --------
    Override via environment::

        export REPORTVIEW_REPORT_URL=http://localhost:8081/foo.json
        export REPORTVIEW_LOG_LEVEL=DEBUG
        export REPORTVIEW_DISPLAY_TIMEZONE=Europe/Berlin

    Or via .env file::

        REPORTVIEW_LOG_URL=http://localhost:8081/build.log
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_prefix="REPORTVIEW_",
        env_file_encoding="utf-8",
    )

    # Runtime environment
    environment: str = "development"
    log_level: str = "INFO"
    debug: bool = False

    # Endpoints
    report_url: str = "https://mitakihara.webhook.stratal.systems/report-latest"
    log_url: str = "https://mitakihara.webhook.stratal.systems/log-latest"

    # Transport
    request_timeout_seconds: float = 10.0
    follow_redirects: bool = True

    # Display
    display_timezone: str | None = None  # IANA name; None = system local offset
    refresh_hz: float = 1.0
    watch_interval_seconds: float = 30.0

    @property
    def is_production(self) -> bool:
        """Whether running in production mode."""
        return self.environment == "production"

    @property
    def display_tz(self) -> tzinfo | None:
        """Offset timestamps are rendered in; ``None`` means system local."""
        if not self.display_timezone:
            return None
        return ZoneInfo(self.display_timezone)


# Module-level singleton: import as `from reportview.config import config`
config = ViewerConfig()
