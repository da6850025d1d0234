"""RemoteResource — one fetch-and-decode cycle per trigger generation.

The resource watches a ``TriggerCell``.  Arming the cell publishes
``Pending(g)`` synchronously and starts a fetch task for ``g`` on the running
event loop.  When the task finishes its result is applied as
``Resolved(g, result)`` only if ``g`` is still the cell's current generation;
otherwise it is dropped without any visible effect.

Superseded fetches are not aborted at the transport level.  Their responses
still arrive and are discarded, which keeps the visible state monotonic in
generation regardless of the order responses come back in.
"""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Callable
from typing import Generic, TypeVar

from reportview.bridge.transport import Transport
from reportview.core.trigger import TriggerCell
from reportview.models.errors import (
    DecodeError,
    DecodeFailure,
    NetworkError,
    NotTriggeredYet,
    TransportError,
)
from reportview.models.resource import (
    Err,
    NotTriggered,
    Ok,
    Pending,
    Resolved,
    ResourceState,
    Result,
)

logger = logging.getLogger(__name__)

T = TypeVar("T")

Decoder = Callable[[bytes], T]
StateListener = Callable[[ResourceState], None]


class RemoteResource(Generic[T]):
    """Latest-wins view of a remote resource driven by a ``TriggerCell``.

    Parameters
    ----------
    trigger:
        The cell whose ``arm()`` / ``reset()`` drive this resource.
    transport:
        Anything implementing ``get(url) -> bytes``.
    url:
        The endpoint fetched on every armed generation.
    decode:
        Turns the body into a ``T`` or raises ``DecodeFailure``.
    name:
        Label for log messages and task names.  Defaults to the trigger name.
    """

    def __init__(
        self,
        trigger: TriggerCell,
        transport: Transport,
        url: str,
        decode: Decoder[T],
        *,
        name: str | None = None,
    ) -> None:
        self._trigger = trigger
        self._transport = transport
        self._url = url
        self._decode = decode
        self._name = name or trigger.name
        self._state: ResourceState = NotTriggered()
        self._listeners: list[StateListener] = []
        self._tasks: dict[int, asyncio.Task[None]] = {}
        self._unsubscribe_trigger = trigger.subscribe(self._on_trigger)

    # ------------------------------------------------------------------
    # Properties
    # ------------------------------------------------------------------

    @property
    def name(self) -> str:
        return self._name

    @property
    def url(self) -> str:
        return self._url

    @property
    def trigger(self) -> TriggerCell:
        return self._trigger

    @property
    def state(self) -> ResourceState:
        """The single latest state."""
        return self._state

    @property
    def in_flight(self) -> int:
        """Number of fetch tasks that have not finished yet."""
        return sum(1 for task in self._tasks.values() if not task.done())

    def current_result(self) -> Result:
        """Non-optional result for callers that cannot handle "no value".

        Returns the resolved result when the current state is ``Resolved``,
        otherwise ``Err(NotTriggeredYet(...))`` explaining why no result is
        available.
        """
        state = self._state
        if isinstance(state, Resolved):
            return state.result
        if isinstance(state, Pending):
            reason = f"{self._name} generation {state.generation} is still pending"
        else:
            reason = f"{self._name} has not been requested"
        return Err(error=NotTriggeredYet(reason=reason))

    # ------------------------------------------------------------------
    # Fetch
    # ------------------------------------------------------------------

    async def fetch(self, url: str, decode: Decoder[T]) -> Result:
        """GET ``url`` and decode the body.

        Never raises for transport or decode failures; they come back as
        ``Err(NetworkError)`` and ``Err(DecodeError)`` with the failing
        layer's diagnostic text.
        """
        try:
            body = await self._transport.get(url)
        except TransportError as exc:
            return Err(error=NetworkError(detail=str(exc)))

        try:
            value = decode(body)
        except DecodeFailure as exc:
            logger.warning("RemoteResource %s: decode failed for %s", self._name, url)
            return Err(error=DecodeError(detail=str(exc)))

        return Ok(value=value)

    # ------------------------------------------------------------------
    # Trigger handling
    # ------------------------------------------------------------------

    def _on_trigger(self, cell: TriggerCell) -> None:
        if not cell.armed:
            self._publish(NotTriggered())
            return

        # Raises before any state is published when no loop is running.
        loop = asyncio.get_running_loop()
        generation = cell.generation
        self._publish(Pending(generation=generation))
        task = loop.create_task(
            self._run(generation),
            name=f"reportview-{self._name}-{generation}",
        )
        self._tasks[generation] = task
        task.add_done_callback(lambda _t, g=generation: self._tasks.pop(g, None))

    async def _run(self, generation: int) -> None:
        result = await self.fetch(self._url, self._decode)
        self._resolve(generation, result)

    def _resolve(self, generation: int, result: Result) -> None:
        if not self._trigger.is_current(generation):
            logger.debug(
                "RemoteResource %s: dropping stale resolution for generation %d "
                "(current %d, armed=%s)",
                self._name,
                generation,
                self._trigger.generation,
                self._trigger.armed,
            )
            return
        self._publish(Resolved(generation=generation, result=result))

    # ------------------------------------------------------------------
    # Subscription
    # ------------------------------------------------------------------

    def subscribe(self, listener: StateListener) -> Callable[[], None]:
        """Register ``listener`` for every published state."""
        self._listeners.append(listener)

        def _unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return _unsubscribe

    def _publish(self, state: ResourceState) -> None:
        self._state = state
        logger.debug("RemoteResource %s: %s", self._name, state.status.value)
        for listener in list(self._listeners):
            listener(state)

    # ------------------------------------------------------------------
    # Lifecycle
    # ------------------------------------------------------------------

    async def settle(self) -> None:
        """Wait until every in-flight fetch, current or stale, has finished."""
        while True:
            pending = [task for task in self._tasks.values() if not task.done()]
            if not pending:
                return
            await asyncio.gather(*pending)

    async def aclose(self) -> None:
        """Cancel in-flight fetches and stop following the trigger.

        A pending fetch can no longer resolve, so a ``Pending`` state is
        replaced by ``NotTriggered``.
        """
        self._unsubscribe_trigger()
        tasks = list(self._tasks.values())
        for task in tasks:
            task.cancel()
        if tasks:
            await asyncio.gather(*tasks, return_exceptions=True)
        self._tasks.clear()
        if isinstance(self._state, Pending):
            self._publish(NotTriggered())
