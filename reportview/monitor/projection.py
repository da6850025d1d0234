"""Presentation binding — resource state to exactly one view.

``project()`` is a pure function of a ``ResourceState``: it never looks at
anything else, so the page is always a function of the latest snapshot.
``PresentationBinding`` follows one resource and hands every new view to a
render callback, never one that belongs to an older generation than the
view it last rendered.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from datetime import datetime
from enum import Enum
from typing import Any, Generic, TypeVar

from pydantic import BaseModel, ConfigDict

from reportview.core.resource import RemoteResource
from reportview.models.errors import ApiError
from reportview.models.resource import (
    Err,
    NotTriggered,
    Ok,
    Pending,
    Resolved,
    ResourceState,
)

logger = logging.getLogger(__name__)

T = TypeVar("T")


class ViewKind(str, Enum):
    """The four mutually exclusive views of a resource."""

    NEUTRAL = "neutral"
    LOADING = "loading"
    SUCCESS = "success"
    ERROR = "error"


class View(BaseModel):
    """What the page shows for one resource.

    ``value`` is set only for SUCCESS, ``error`` only for ERROR.
    ``generation`` is ``None`` for the neutral view.
    """

    model_config = ConfigDict(frozen=True)

    kind: ViewKind
    generation: int | None = None
    value: Any = None
    error: ApiError | None = None


class PageSnapshot(BaseModel):
    """Both resource views plus the instant they are rendered against."""

    model_config = ConfigDict(frozen=True)

    report: View
    log: View
    taken_at: datetime


def project(state: ResourceState) -> View:
    """Map a resource state to its single view."""
    if isinstance(state, NotTriggered):
        return View(kind=ViewKind.NEUTRAL)
    if isinstance(state, Pending):
        return View(kind=ViewKind.LOADING, generation=state.generation)
    if isinstance(state, Resolved):
        result = state.result
        if isinstance(result, Ok):
            return View(
                kind=ViewKind.SUCCESS,
                generation=state.generation,
                value=result.value,
            )
        if isinstance(result, Err):
            return View(
                kind=ViewKind.ERROR,
                generation=state.generation,
                error=result.error,
            )
    raise TypeError(f"Unknown resource state: {state!r}")


class PresentationBinding(Generic[T]):
    """Re-renders one resource's view whenever its state changes.

    Parameters
    ----------
    resource:
        The resource to follow.
    render:
        Called with the new ``View``.  Called once on construction with the
        resource's current view.
    """

    def __init__(
        self,
        resource: RemoteResource[T],
        render: Callable[[View], None],
    ) -> None:
        self._render = render
        self._view = project(resource.state)
        self._last_generation = self._view.generation or 0
        self._unsubscribe = resource.subscribe(self._on_state)
        self._render(self._view)

    @property
    def view(self) -> View:
        """The last rendered view."""
        return self._view

    def _on_state(self, state: ResourceState) -> None:
        view = project(state)
        # The neutral view belongs to no generation and is always shown.
        if view.generation is not None:
            if view.generation < self._last_generation:
                logger.debug(
                    "PresentationBinding: skipping view for superseded generation %d",
                    view.generation,
                )
                return
            self._last_generation = view.generation
        self._view = view
        self._render(view)

    def close(self) -> None:
        self._unsubscribe()
