"""
The runtime context: process-wide collaborators bundled into one object.

A context is created once at process start (or once per test) and handed to
every module, instead of modules importing shared singletons.
"""

from __future__ import annotations

from dataclasses import dataclass, field

from xpell_runtime.core.commands.markup import MarkupConverter
from xpell_runtime.core.commands.nano_commands import NanoCommandRegistry
from xpell_runtime.core.commands.parser import CommandParser
from xpell_runtime.core.config.app_config import RuntimeConfig
from xpell_runtime.core.data.shared_store import SharedStore
from xpell_runtime.core.events.event_bus import EventBus


@dataclass
class RuntimeContext:
    config: RuntimeConfig = field(default_factory=RuntimeConfig)
    event_bus: EventBus | None = None
    store: SharedStore | None = None
    parser: CommandParser | None = None
    markup: MarkupConverter | None = None
    nano_commands: NanoCommandRegistry | None = None

    def __post_init__(self) -> None:
        if self.event_bus is None:
            self.event_bus = EventBus(self.config.event_bus)
        if self.store is None:
            self.store = SharedStore()
        if self.parser is None:
            self.parser = CommandParser(self.config.parser)
        if self.markup is None:
            self.markup = MarkupConverter()
        if self.nano_commands is None:
            self.nano_commands = NanoCommandRegistry.default()

    @classmethod
    def create(cls, config: RuntimeConfig | None = None) -> RuntimeContext:
        """Build a context with fresh collaborators for ``config``."""
        return cls(config=config if config is not None else RuntimeConfig())
