from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Callable
from typing import Any


class IEventBus(ABC):
    """Publish/subscribe bus keyed by event name."""

    @abstractmethod
    def on(
        self,
        event_name: str,
        callback: Callable[[Any], Any],
        *,
        once: bool = False,
        owner: Any = None,
        tag: str | None = None,
    ) -> str:
        pass

    @abstractmethod
    def once(self, event_name: str, callback: Callable[[Any], Any], owner: Any = None) -> str:
        pass

    @abstractmethod
    async def fire(self, event_name: str, payload: Any = None) -> None:
        pass

    @abstractmethod
    def remove(self, listener_id: str) -> None:
        pass

    @abstractmethod
    def remove_owner(self, owner: Any) -> None:
        pass

    @abstractmethod
    def clear(self) -> None:
        pass
