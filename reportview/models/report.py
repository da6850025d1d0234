"""Build report wire schema — consumed as-is from the report endpoint.

The schema is a given data contract: the fields below mirror the JSON the
build webhook publishes.  Times are whole epoch seconds (unsigned 64-bit).
"""

from __future__ import annotations

from enum import Enum
from typing import Annotated

from pydantic import AfterValidator, BaseModel, ConfigDict, Field, StrictBool

UINT64_MAX = 2**64 - 1


def _check_uint64(value: int) -> int:
    if value > UINT64_MAX:
        raise ValueError(f"{value} does not fit in an unsigned 64-bit integer")
    return value


# Strict: numeric strings and floats are rejected, not coerced.
EpochSeconds = Annotated[int, Field(strict=True, ge=0), AfterValidator(_check_uint64)]


class BuildStatus(str, Enum):
    """Build outcome derived from the presence and flag of ``finish``."""

    RUNNING = "running"
    PASSED = "passed"
    FAILED = "failed"


class Start(BaseModel):
    """When the build started."""

    model_config = ConfigDict(frozen=True)

    time: EpochSeconds


class Finish(BaseModel):
    """When the build finished, and whether it succeeded."""

    model_config = ConfigDict(frozen=True)

    time: EpochSeconds
    ok: StrictBool


class Report(BaseModel):
    """The latest build report.

    ``finish`` is absent (or ``null``) while the build is still running.
    Upstream does not guarantee ``finish.time >= start.time``; see
    :attr:`elapsed_seconds`.
    """

    model_config = ConfigDict(frozen=True)

    artifacts: str
    message: str
    ref: str
    start: Start
    finish: Finish | None = None

    @property
    def status(self) -> BuildStatus:
        """Current build outcome."""
        if self.finish is None:
            return BuildStatus.RUNNING
        return BuildStatus.PASSED if self.finish.ok else BuildStatus.FAILED

    @property
    def elapsed_seconds(self) -> int | None:
        """Signed ``finish.time - start.time``, or ``None`` while running.

        A negative value means the two clocks disagree (clock skew).  It is
        returned as-is so the duration formatter can classify it as an
        invalid interval.
        """
        if self.finish is None:
            return None
        return self.finish.time - self.start.time
