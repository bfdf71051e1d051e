"""
Listener records kept by the event bus.
"""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass, field
from typing import Any


@dataclass(frozen=True)
class ListenerOptions:
    """Delivery options for a listener.

    Attributes:
        once: Remove the listener after its first delivery.
        owner: Reference used to remove a group of listeners at once.
        tag: Free-form label for diagnostics.
    """

    once: bool = False
    owner: Any = None
    tag: str | None = None


@dataclass
class Listener:
    id: str
    event_name: str
    callback: Callable[[Any], Any]
    options: ListenerOptions = field(default_factory=ListenerOptions)
    # copied from options so owner sweeps do not dereference options
    owner: Any = None

    def __post_init__(self) -> None:
        if self.owner is None:
            self.owner = self.options.owner

    @property
    def once(self) -> bool:
        return self.options.once

    @property
    def tag(self) -> str | None:
        return self.options.tag
