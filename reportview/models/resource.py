"""Remote resource state model — NotTriggered / Pending / Resolved.

A resource holds exactly one of these at a time.  ``Pending`` and
``Resolved`` are tagged with the trigger generation they belong to, which is
what lets stale resolutions be recognised and dropped.
"""

from __future__ import annotations

from enum import Enum
from typing import Annotated, Any, Literal, Union

from pydantic import BaseModel, ConfigDict, Field

from reportview.models.errors import ApiError


class ResourceStatus(str, Enum):
    """Discriminator for the three resource states."""

    NOT_TRIGGERED = "not_triggered"
    PENDING = "pending"
    RESOLVED = "resolved"


# ---------------------------------------------------------------------------
# Result
# ---------------------------------------------------------------------------


class Ok(BaseModel):
    """A successfully fetched and decoded value."""

    model_config = ConfigDict(frozen=True)

    ok: Literal[True] = True
    value: Any


class Err(BaseModel):
    """A fetch that ended in one of the ``ApiError`` kinds."""

    model_config = ConfigDict(frozen=True)

    ok: Literal[False] = False
    error: ApiError


Result = Union[Ok, Err]


# ---------------------------------------------------------------------------
# States
# ---------------------------------------------------------------------------


class NotTriggered(BaseModel):
    """Initial state: nothing has been armed."""

    model_config = ConfigDict(frozen=True)

    status: Literal[ResourceStatus.NOT_TRIGGERED] = ResourceStatus.NOT_TRIGGERED


class Pending(BaseModel):
    """A fetch is in flight for ``generation``."""

    model_config = ConfigDict(frozen=True)

    status: Literal[ResourceStatus.PENDING] = ResourceStatus.PENDING
    generation: int = Field(ge=1)


class Resolved(BaseModel):
    """Terminal state for ``generation``."""

    model_config = ConfigDict(frozen=True)

    status: Literal[ResourceStatus.RESOLVED] = ResourceStatus.RESOLVED
    generation: int = Field(ge=1)
    result: Result


ResourceState = Annotated[
    Union[NotTriggered, Pending, Resolved],
    Field(discriminator="status"),
]
