from typing import Any

import pytest

from xpell_runtime.core.commands.command import Command
from xpell_runtime.core.commands.parser import CommandParser
from xpell_runtime.core.config.app_config import RuntimeConfig
from xpell_runtime.core.context import RuntimeContext
from xpell_runtime.core.events.event_bus import EventBus
from xpell_runtime.core.interfaces.frame_listener_interface import IFrameListener
from xpell_runtime.core.modules.module import Module, operation
from xpell_runtime.core.modules.runtime_object import RuntimeObject


class BoxObject(RuntimeObject):
    """A frame-ticked object used by module tests."""

    defaults = {"color": "white", "size": 1}

    def __init__(self, *args: Any, **kwargs: Any) -> None:
        super().__init__(*args, **kwargs)
        self.frames: list[int] = []
        self.created = False

    def on_create(self) -> None:
        self.created = True


class TickingBox(BoxObject, IFrameListener):
    def on_frame(self, frame_number: int) -> None:
        self.frames.append(frame_number)


class SampleModule(Module):
    """A module with a couple of operations for dispatch tests."""

    def __init__(self, name: str = "xui", context: RuntimeContext | None = None) -> None:
        super().__init__(name, context)
        self.calls: list[Command] = []
        self.import_object("box", BoxObject)
        self.import_object("ticker", TickingBox)

    @operation("create-box")
    def create_box(self, command: Command) -> RuntimeObject:
        self.calls.append(command)
        data = {"_type": "box"}
        object_id = command.get_param(1, "id")
        if object_id:
            data["_id"] = object_id
        color = command.get_param(2, "color")
        if color:
            data["color"] = color
        return self.create(data)

    @operation()
    async def echo(self, command: Command) -> dict[str, Any]:
        self.calls.append(command)
        return dict(command.params)


@pytest.fixture
def config() -> RuntimeConfig:
    return RuntimeConfig()


@pytest.fixture
def context(config: RuntimeConfig) -> RuntimeContext:
    return RuntimeContext.create(config)


@pytest.fixture
def event_bus() -> EventBus:
    return EventBus()


@pytest.fixture
def parser() -> CommandParser:
    return CommandParser()


@pytest.fixture
def sample_module(context: RuntimeContext) -> SampleModule:
    return SampleModule("xui", context)
