"""Time and duration formatting for report timestamps.

Both formatters are pure functions of their arguments.  Anything that
depends on the wall clock takes the current instant as a parameter, so the
output is reproducible in tests and consistent across one rendered page.
"""

from __future__ import annotations

import math
from datetime import datetime, timezone, tzinfo
from enum import Enum

from pydantic import BaseModel, ConfigDict

_MINUTE = 60
_HOUR = 60 * _MINUTE
_DAY = 24 * _HOUR

# Relative phrases use the largest whole unit that fits.
_RELATIVE_UNITS: tuple[tuple[str, int], ...] = (
    ("year", 365 * _DAY),
    ("month", 30 * _DAY),
    ("week", 7 * _DAY),
    ("day", _DAY),
    ("hour", _HOUR),
    ("minute", _MINUTE),
    ("second", 1),
)

# Durations list every non-zero component down to seconds.
_DURATION_UNITS: tuple[tuple[str, int], ...] = (
    ("day", _DAY),
    ("hour", _HOUR),
    ("minute", _MINUTE),
    ("second", 1),
)

OUT_OF_RANGE = "timestamp out of range"


class TimeDisplay(BaseModel):
    """A timestamp in the three forms the page shows."""

    model_config = ConfigDict(frozen=True)

    human: str
    raw: int
    iso: str


class IntervalKind(str, Enum):
    """Whether a duration can be shown as a duration at all."""

    VALID = "valid"
    INVALID = "invalid"


class DurationDisplay(BaseModel):
    """A second delta as shown on the page."""

    model_config = ConfigDict(frozen=True)

    human: str
    raw: int
    kind: IntervalKind = IntervalKind.VALID

    @property
    def is_valid(self) -> bool:
        return self.kind == IntervalKind.VALID


def _plural(count: int, unit: str) -> str:
    return f"{count} {unit}" if count == 1 else f"{count} {unit}s"


def _relative_phrase(delta_seconds: int) -> str:
    """Phrase for ``now - instant``; positive means the instant is past."""
    if delta_seconds == 0:
        return "just now"
    magnitude = abs(delta_seconds)
    for unit, size in _RELATIVE_UNITS:
        if magnitude >= size:
            phrase = _plural(magnitude // size, unit)
            break
    return f"{phrase} ago" if delta_seconds > 0 else f"in {phrase}"


def _precise_phrase(magnitude: int) -> str:
    parts: list[str] = []
    remaining = magnitude
    for unit, size in _DURATION_UNITS:
        count, remaining = divmod(remaining, size)
        if count:
            parts.append(_plural(count, unit))
    return ", ".join(parts) if parts else "0 seconds"


def format_time(
    unix_seconds: int,
    now: datetime,
    tz: tzinfo | None = None,
) -> TimeDisplay:
    """Format an epoch timestamp relative to ``now``.

    Parameters
    ----------
    unix_seconds:
        Whole seconds since the Unix epoch.  Echoed back as ``raw``.
    now:
        The current instant.  Must be timezone-aware.
    tz:
        Offset to render ``iso`` in.  ``None`` uses the system local offset.

    Returns
    -------
    TimeDisplay
        ``human`` is relative to ``now`` ("3 hours ago", "in 2 minutes").
        Instants outside the range ``datetime`` can represent yield
        ``human="timestamp out of range"`` and an empty ``iso``.
    """
    if now.tzinfo is None:
        raise ValueError("now must be timezone-aware")

    try:
        instant = datetime.fromtimestamp(unix_seconds, tz=timezone.utc)
        local = instant.astimezone(tz) if tz is not None else instant.astimezone()
    except (OverflowError, OSError, ValueError):
        return TimeDisplay(human=OUT_OF_RANGE, raw=unix_seconds, iso="")

    delta = math.floor(now.timestamp()) - unix_seconds
    return TimeDisplay(
        human=_relative_phrase(delta),
        raw=unix_seconds,
        iso=local.isoformat(),
    )


def format_duration(delta_seconds: int) -> DurationDisplay:
    """Format a second delta as a precise duration.

    ``3661`` becomes ``"1 hour, 1 minute, 1 second"``.  A negative delta
    means the finish time precedes the start time; it is classified as
    ``IntervalKind.INVALID`` and its phrase says so instead of showing a
    negative duration.
    """
    if delta_seconds < 0:
        return DurationDisplay(
            human=(
                "invalid interval (finish precedes start by "
                f"{_precise_phrase(-delta_seconds)})"
            ),
            raw=delta_seconds,
            kind=IntervalKind.INVALID,
        )
    return DurationDisplay(human=_precise_phrase(delta_seconds), raw=delta_seconds)
