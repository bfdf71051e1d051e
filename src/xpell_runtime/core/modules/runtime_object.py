"""
Addressable runtime objects.

A RuntimeObject is reachable by id inside its module. Commands targeted at an
object can only run the object's nano commands; module operations are never
reachable through an object.
"""

from __future__ import annotations

import logging
import uuid
from collections.abc import Callable, Mapping
from typing import Any, ClassVar

from xpell_runtime.core.commands.command import Command
from xpell_runtime.core.commands.nano_commands import (
    BUILTIN_NANO_COMMANDS,
    NanoCommand,
    NanoCommandRegistry,
)
from xpell_runtime.core.common.exceptions import UnknownNanoCommandError
from xpell_runtime.core.constants.node_constants import CHILDREN_KEY, ID_KEY, TYPE_KEY
from xpell_runtime.core.interfaces.event_bus_interface import IEventBus

logger = logging.getLogger(__name__)

DEFAULT_OBJECT_TYPE = "object"


class RuntimeObject:
    """Base class for objects owned by a module."""

    # merged under the descriptor data by Module.create
    defaults: ClassVar[dict[str, Any]] = {}
    # verbs added on top of the runtime's nano commands for this class
    extra_nano_commands: ClassVar[dict[str, NanoCommand]] = {}

    def __init__(
        self,
        data: Mapping[str, Any] | None = None,
        *,
        event_bus: IEventBus | None = None,
        nano_commands: NanoCommandRegistry | None = None,
    ) -> None:
        attrs = dict(data or {})
        self.object_id: str = str(attrs.pop(ID_KEY, None) or uuid.uuid4().hex)
        self.object_type: str = str(attrs.pop(TYPE_KEY, None) or DEFAULT_OBJECT_TYPE)
        attrs.pop(CHILDREN_KEY, None)
        self.name: str = str(attrs.pop("_name", None) or self.object_id)
        self.data: dict[str, Any] = attrs

        self.parent: RuntimeObject | None = None
        self.children: list[RuntimeObject] = []
        self.event_bus = event_bus

        registry = nano_commands if nano_commands is not None else BUILTIN_NANO_COMMANDS
        if self.extra_nano_commands:
            registry = registry.extend(self.extra_nano_commands)
        self.nano_commands = registry
        self.disposed = False

    def append(self, child: RuntimeObject) -> None:
        child.parent = self
        self.children.append(child)

    def on_create(self) -> None:
        """Called by the owning module once the object and its children exist."""

    def on(
        self, event_name: str, callback: Callable[[Any], Any], *, once: bool = False
    ) -> str | None:
        """Listen on the bus with this object as owner; released on dispose."""
        if self.event_bus is None:
            logger.warning(f"Object '{self.object_id}' has no event bus; listener ignored")
            return None
        return self.event_bus.on(event_name, callback, once=once, owner=self)

    async def execute(self, command: Command | Mapping[str, Any]) -> Any:
        """
        Run a nano command against this object.

        Raises:
            UnknownNanoCommandError: If the verb is not one of the object's
                nano commands.
        """
        if isinstance(command, Mapping):
            command = Command.from_dict(command)

        verb = command.op
        if verb not in self.nano_commands:
            raise UnknownNanoCommandError(self.object_id, verb, command.module or None)
        return await self.nano_commands.invoke(verb, command, self)

    def dispose(self) -> None:
        """Release listeners and references for this object and its subtree."""
        for child in list(self.children):
            child.dispose()
        if self.event_bus is not None:
            self.event_bus.remove_owner(self)
        if self.parent is not None and self in self.parent.children:
            self.parent.children.remove(self)
        self.children = []
        self.parent = None
        self.disposed = True

    def __repr__(self) -> str:
        return f'<{self.__class__.__name__} id="{self.object_id}" type="{self.object_type}">'
