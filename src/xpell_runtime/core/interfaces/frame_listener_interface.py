from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any


class IFrameListener(ABC):
    """Capability of objects that want the host's per-frame tick.

    Objects that do not implement this interface are simply not ticked.
    """

    @abstractmethod
    def on_frame(self, frame_number: int) -> Any:
        """Called once per host frame; may return an awaitable."""
