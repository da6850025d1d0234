"""TriggerCell — arms fetches and numbers each attempt.

Every ``arm()`` produces a new generation, even when the previous one has
not resolved yet.  A resolution is only ever applied if it belongs to the
current generation of an armed cell (see ``is_current``).
"""

from __future__ import annotations

import logging
from collections.abc import Callable

logger = logging.getLogger(__name__)

TriggerListener = Callable[["TriggerCell"], None]


class TriggerCell:
    """Armed flag plus a monotonically increasing generation counter.

    Parameters
    ----------
    name:
        Label used in log messages (e.g. ``"report"``).
    """

    def __init__(self, name: str = "trigger") -> None:
        self._name = name
        self._armed = False
        self._generation = 0
        self._listeners: list[TriggerListener] = []

    # ------------------------------------------------------------------
    # Properties
    # ------------------------------------------------------------------

    @property
    def name(self) -> str:
        return self._name

    @property
    def armed(self) -> bool:
        return self._armed

    @property
    def generation(self) -> int:
        return self._generation

    # ------------------------------------------------------------------
    # Mutation
    # ------------------------------------------------------------------

    def arm(self) -> int:
        """Arm the cell and start a new generation.

        Returns the new generation number.
        """
        self._armed = True
        self._generation += 1
        logger.debug("TriggerCell %s: armed generation %d", self._name, self._generation)
        self._notify()
        return self._generation

    def reset(self) -> None:
        """Disarm without changing the generation."""
        self._armed = False
        logger.debug(
            "TriggerCell %s: reset at generation %d", self._name, self._generation
        )
        self._notify()

    def is_current(self, generation: int) -> bool:
        """Whether a resolution for ``generation`` may still be applied."""
        return self._armed and generation == self._generation

    # ------------------------------------------------------------------
    # Subscription
    # ------------------------------------------------------------------

    def subscribe(self, listener: TriggerListener) -> Callable[[], None]:
        """Register ``listener``; returns a function that unregisters it."""
        self._listeners.append(listener)

        def _unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return _unsubscribe

    def _notify(self) -> None:
        for listener in list(self._listeners):
            listener(self)
