"""Xpell runtime: a command interpreter and dispatch runtime."""

from xpell_runtime.core.commands.command import Command
from xpell_runtime.core.commands.markup import MarkupConverter, MarkupMapping
from xpell_runtime.core.commands.parser import CommandParser, parse_rich, parse_simple
from xpell_runtime.core.context import RuntimeContext
from xpell_runtime.core.events.event_bus import EventBus
from xpell_runtime.core.modules.module import Module, operation
from xpell_runtime.core.modules.runtime_object import RuntimeObject
from xpell_runtime.core.runtime import Runtime

__version__ = "0.1.0"

__all__ = [
    "Command",
    "CommandParser",
    "EventBus",
    "MarkupConverter",
    "MarkupMapping",
    "Module",
    "Runtime",
    "RuntimeContext",
    "RuntimeObject",
    "operation",
    "parse_rich",
    "parse_simple",
]
