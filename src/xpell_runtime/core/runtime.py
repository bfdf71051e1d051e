"""
The runtime host: owns the registered modules and routes commands to them.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from typing import Any

from xpell_runtime.core.commands.command import Command
from xpell_runtime.core.common.exceptions import (
    ConfigurationError,
    ParsingError,
    UnknownModuleError,
)
from xpell_runtime.core.context import RuntimeContext
from xpell_runtime.core.modules.module import Module

logger = logging.getLogger(__name__)


class Runtime:
    """Routes commands to modules by name and drives the frame loop."""

    def __init__(self, context: RuntimeContext | None = None) -> None:
        self.context = context if context is not None else RuntimeContext.create()
        self._modules: dict[str, Module] = {}
        self.frame_number = 0

    def register_module(self, module: Module) -> Module:
        """
        Register and load a module.

        Raises:
            ConfigurationError: If a module with the same name is registered.
        """
        if module.name in self._modules:
            raise ConfigurationError(
                f"Module '{module.name}' is already registered",
                {"module": module.name},
            )
        self._modules[module.name] = module
        module.load()
        return module

    def get_module(self, name: str) -> Module | None:
        return self._modules.get(name)

    @property
    def modules(self) -> Mapping[str, Module]:
        return dict(self._modules)

    async def execute(self, command: Command | Mapping[str, Any]) -> Any:
        """
        Route a command to the module it names.

        Raises:
            UnknownModuleError: If no module with that name is registered.
        """
        if isinstance(command, Mapping):
            command = Command.from_dict(command)

        module = self._modules.get(command.module)
        if module is None:
            raise UnknownModuleError(command.module)
        return await module.execute(command)

    async def run(self, text: str) -> Any:
        """Parse rich-dialect text and execute it."""
        if not text or not text.strip():
            raise ParsingError("Unable to parse command", {"text": text})
        command = self.context.parser.parse_rich(text)
        logger.debug(f"Running command: {command.module} {command.op}")
        return await self.execute(command)

    async def on_frame(self, frame_number: int | None = None) -> int:
        """
        Tick every module in registration order.

        Without an explicit ``frame_number`` the runtime's own counter is
        incremented. Returns the frame number that was delivered.
        """
        if frame_number is None:
            frame_number = self.frame_number + 1
        self.frame_number = frame_number

        for module in list(self._modules.values()):
            await module.on_frame(frame_number)
        return frame_number
