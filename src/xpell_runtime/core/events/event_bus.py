"""
Event Bus

In-process publish/subscribe registry. Listeners are kept per event name in
registration order; a reverse index maps listener ids to their event name so
removal does not scan every bucket.
"""

from __future__ import annotations

import inspect
import uuid
from collections.abc import Callable
from typing import Any

from xpell_runtime.core.common.logging import get_logger
from xpell_runtime.core.config.app_config import EventBusConfig
from xpell_runtime.core.events.listener import Listener, ListenerOptions
from xpell_runtime.core.interfaces.event_bus_interface import IEventBus

logger = get_logger(__name__)


class EventBus(IEventBus):
    """
    Event bus with snapshot-based delivery.

    ``fire`` copies the listener list before invoking anything, so listeners
    that subscribe or unsubscribe during a fire never change who receives
    that fire. A failing listener is logged and skipped; the rest of the
    snapshot is still delivered.
    """

    def __init__(self, config: EventBusConfig | None = None) -> None:
        self.config = config or EventBusConfig()
        self._events: dict[str, list[Listener]] = {}
        self._listener_index: dict[str, str] = {}

    def on(
        self,
        event_name: str,
        callback: Callable[[Any], Any],
        *,
        once: bool = False,
        owner: Any = None,
        tag: str | None = None,
    ) -> str:
        """
        Register a listener on an event name.

        Args:
            event_name: Name of the event to listen to
            callback: Called with the fired payload; may be a coroutine function
            once: Remove the listener after its first delivery
            owner: Reference used by ``remove_owner``
            tag: Free-form label

        Returns:
            The new listener id
        """
        listener_id = uuid.uuid4().hex
        listener = Listener(
            id=listener_id,
            event_name=event_name,
            callback=callback,
            options=ListenerOptions(once=once, owner=owner, tag=tag),
        )

        self._events.setdefault(event_name, []).append(listener)
        self._listener_index[listener_id] = event_name

        if self.config.log_register:
            logger.debug("event listener registered", event_name=event_name, listener_id=listener_id)
        return listener_id

    def once(self, event_name: str, callback: Callable[[Any], Any], owner: Any = None) -> str:
        """Register a listener that is removed after its first delivery."""
        return self.on(event_name, callback, once=True, owner=owner)

    async def fire(self, event_name: str, payload: Any = None) -> None:
        """
        Deliver ``payload`` to every listener registered for ``event_name``.

        Args:
            event_name: Name of the event
            payload: Value passed to each listener
        """
        listeners = self._events.get(event_name)
        if not listeners:
            return

        if self.config.log_fire:
            logger.debug("event fired", event_name=event_name, payload=payload)

        snapshot = list(listeners)
        to_remove: list[str] = []

        for listener in snapshot:
            try:
                result = listener.callback(payload)
                if inspect.isawaitable(result):
                    await result
            except Exception as e:
                logger.error(
                    "event listener failed",
                    event_name=event_name,
                    listener_id=listener.id,
                    tag=listener.tag,
                    error=str(e),
                    error_type=type(e).__name__,
                    exc_info=True,
                )
            if listener.once:
                to_remove.append(listener.id)

        for listener_id in to_remove:
            self.remove(listener_id)

    def remove(self, listener_id: str) -> None:
        """Remove a listener by id; unknown ids are ignored."""
        event_name = self._listener_index.pop(listener_id, None)
        if event_name is None:
            return

        listeners = self._events.get(event_name)
        if listeners:
            for idx, listener in enumerate(listeners):
                if listener.id == listener_id:
                    del listeners[idx]
                    break
            if not listeners:
                del self._events[event_name]

        if self.config.log_remove:
            logger.debug("event listener removed", event_name=event_name, listener_id=listener_id)

    def remove_owner(self, owner: Any) -> None:
        """Remove every listener registered with ``owner``."""
        if not owner:
            return

        ids = [
            listener.id
            for listeners in self._events.values()
            for listener in listeners
            if listener.owner is owner or listener.owner == owner
        ]
        for listener_id in ids:
            self.remove(listener_id)

    def clear(self) -> None:
        """Drop every listener (hard reset)."""
        self._events = {}
        self._listener_index = {}

    def has_listeners(self, event_name: str) -> bool:
        return bool(self._events.get(event_name))

    def listener_count(self, event_name: str | None = None) -> int:
        """Number of listeners for ``event_name``, or on the whole bus."""
        if event_name is None:
            return len(self._listener_index)
        return len(self._events.get(event_name, ()))

    def event_names(self) -> list[str]:
        return list(self._events)
