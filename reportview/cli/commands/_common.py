"""Shared helpers for CLI commands — viewer construction and clock."""

from __future__ import annotations

from datetime import datetime, timezone, tzinfo

from reportview.config import config
from reportview.core.viewer import StatusViewer
from reportview.models.resource import Err, Resolved, ResourceState


def build_viewer(report_url: str | None, log_url: str | None) -> StatusViewer:
    """A viewer on the configured endpoints, with CLI overrides applied."""
    return StatusViewer(config, report_url=report_url, log_url=log_url)


def display_tz(utc: bool) -> tzinfo | None:
    return timezone.utc if utc else config.display_tz


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


def resolved_to_error(state: ResourceState) -> bool:
    """Whether ``state`` is a resolution that ended in an error."""
    return isinstance(state, Resolved) and isinstance(state.result, Err)
