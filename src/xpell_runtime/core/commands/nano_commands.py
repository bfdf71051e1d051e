"""
Nano commands: the minimal verbs every runtime object understands.

Objects only execute verbs found in their NanoCommandRegistry. The built-in
verbs are registered with the ``@nano_command`` decorator; the registry
handed to objects is a read-only view.
"""

from __future__ import annotations

import inspect
from collections.abc import Callable, Iterator, Mapping
from types import MappingProxyType
from typing import TYPE_CHECKING, Any

from xpell_runtime.core.commands.command import Command
from xpell_runtime.core.common.logging import get_logger

if TYPE_CHECKING:
    from xpell_runtime.core.modules.runtime_object import RuntimeObject

NanoCommand = Callable[[Command, "RuntimeObject"], Any]

logger = get_logger("xpell.runtime")

_builtin_registry: dict[str, NanoCommand] = {}


def nano_command(*verbs: str) -> Callable[[NanoCommand], NanoCommand]:
    """
    A decorator to register a built-in nano command under one or more verbs.

    Args:
        verbs: The verb (and optional aliases) to register.
    """

    def decorator(func: NanoCommand) -> NanoCommand:
        for verb in verbs:
            if verb in _builtin_registry:
                raise ValueError(f"Nano command '{verb}' is already registered.")
            _builtin_registry[verb] = func
        return func

    return decorator


@nano_command("info", "introspect")
def info(command: Command, target: RuntimeObject) -> str | None:
    object_id = getattr(target, "object_id", None)
    logger.info(f"XObject id {object_id}")
    return object_id


@nano_command("log")
def log(command: Command, target: RuntimeObject) -> None:
    value = command.params.get("1") if command.params else None
    if value:
        logger.info(str(value))
    else:
        logger.info(repr(target))


@nano_command("fire")
async def fire(command: Command, target: RuntimeObject) -> None:
    params = command.params or {}
    if params.get("1"):
        event_name, payload = params["1"], params.get("2")
    elif params.get("event"):
        event_name, payload = params["event"], params.get("data")
    else:
        return

    bus = getattr(target, "event_bus", None)
    if bus is None:
        logger.warning(
            "fire nano command ignored: object has no event bus",
            object_id=getattr(target, "object_id", None),
            event_name=event_name,
        )
        return
    await bus.fire(str(event_name), payload)


class NanoCommandRegistry(Mapping[str, NanoCommand]):
    """Immutable verb -> nano command mapping."""

    def __init__(self, commands: Mapping[str, NanoCommand] | None = None) -> None:
        source = _builtin_registry if commands is None else commands
        self._commands: Mapping[str, NanoCommand] = MappingProxyType(dict(source))

    @classmethod
    def default(cls) -> NanoCommandRegistry:
        """Registry holding the built-in verbs."""
        return cls()

    def extend(self, commands: Mapping[str, NanoCommand]) -> NanoCommandRegistry:
        """Return a new registry with ``commands`` added (or overriding)."""
        merged = dict(self._commands)
        merged.update(commands)
        return NanoCommandRegistry(merged)

    def __getitem__(self, verb: str) -> NanoCommand:
        return self._commands[verb]

    def __iter__(self) -> Iterator[str]:
        return iter(self._commands)

    def __len__(self) -> int:
        return len(self._commands)

    async def invoke(self, verb: str, command: Command, target: RuntimeObject) -> Any:
        """Run ``verb`` against ``target``, awaiting coroutine results."""
        result = self._commands[verb](command, target)
        if inspect.isawaitable(result):
            result = await result
        return result


BUILTIN_NANO_COMMANDS = NanoCommandRegistry.default()
