"""
Module: a named command namespace and the dispatcher for its commands.

Operations are declared with the ``@operation`` decorator (or registered at
runtime with ``register_operation``) and collected into an explicit dispatch
table when the module is constructed. Object-targeted commands are delegated
to the object, which only understands nano commands.

Example::

    class UIModule(Module):
        @operation("create-box")
        async def create_box(self, command: Command) -> RuntimeObject:
            ...

    await ui.run("create-box color:red")
"""

from __future__ import annotations

import inspect
import logging
from collections.abc import Callable, Mapping
from typing import Any, ClassVar

from xpell_runtime.core.commands.command import Command
from xpell_runtime.core.common.command_args import get_str
from xpell_runtime.core.common.exceptions import (
    InvalidCommandError,
    ObjectCreationError,
    ObjectNotFoundError,
    OperationNotFoundError,
    ParsingError,
)
from xpell_runtime.core.constants.node_constants import CHILDREN_KEY, TYPE_KEY
from xpell_runtime.core.context import RuntimeContext
from xpell_runtime.core.modules.object_manager import ObjectManager
from xpell_runtime.core.modules.runtime_object import RuntimeObject

logger = logging.getLogger(__name__)

OperationHandler = Callable[[Command], Any]

_OPERATION_ATTR = "_xpell_operation"


def normalize_op_name(name: str) -> str:
    """Make operation names separator-insensitive ("my-op" == "my_op")."""
    return name.strip().replace("-", "_").replace(" ", "_")


def operation(name: str | None = None) -> Callable[[Callable[..., Any]], Callable[..., Any]]:
    """
    A decorator that exposes a module method as an operation.

    Args:
        name: The operation name; defaults to the method name.
    """

    def decorator(func: Callable[..., Any]) -> Callable[..., Any]:
        setattr(func, _OPERATION_ATTR, normalize_op_name(name or func.__name__))
        return func

    return decorator


class Module:
    """Base class for runtime modules."""

    # operation name -> method attribute name, built per class
    _operation_table: ClassVar[dict[str, str]] = {}

    @classmethod
    def _build_operation_table(cls) -> dict[str, str]:
        table: dict[str, str] = {}
        for klass in reversed(cls.__mro__):
            for attr_name, value in vars(klass).items():
                op_name = getattr(value, _OPERATION_ATTR, None)
                if op_name:
                    table[op_name] = attr_name
        return table

    def __init_subclass__(cls, **kwargs: Any) -> None:
        super().__init_subclass__(**kwargs)
        cls._operation_table = cls._build_operation_table()

    def __init__(self, name: str, context: RuntimeContext | None = None) -> None:
        if not name or not name.strip():
            raise ValueError("Module name must not be empty.")
        self.name = name
        self.context = context if context is not None else RuntimeContext.create()
        self._object_manager = ObjectManager()
        self._operations: dict[str, OperationHandler] = {
            op_name: getattr(self, attr_name)
            for op_name, attr_name in type(self)._operation_table.items()
        }

    # lifecycle ----------------------------------------------------------------

    def load(self) -> None:
        """Called once when the module is registered with the runtime."""
        logger.info(f"Module {self.name} loaded")

    async def on_frame(self, frame_number: int) -> None:
        """
        Tick every owned frame listener, then publish the object count.

        The count is written to the shared store under
        ``"<module name>-om-objects"``.
        """
        for listener in self._object_manager.frame_listeners:
            result = listener.on_frame(frame_number)
            if inspect.isawaitable(result):
                await result
        suffix = self.context.config.modules.object_count_suffix
        self.context.store.set(f"{self.name}{suffix}", self._object_manager.count())

    def help(self, op: str | None = None) -> dict[str, Any]:
        """Override in modules to provide help text."""
        return {
            "module": self.name,
            "usage": f"{self.name} help",
            "ops": self.operations,
            "note": "No help() implemented for this module.",
        }

    # operations ---------------------------------------------------------------

    @property
    def operations(self) -> list[str]:
        return sorted(self._operations)

    def register_operation(self, name: str, handler: OperationHandler) -> None:
        """Add (or replace) an operation on this module instance."""
        self._operations[normalize_op_name(name)] = handler

    def has_operation(self, name: str) -> bool:
        return normalize_op_name(name) in self._operations

    @operation("help")
    async def _help(self, command: Command) -> dict[str, Any]:
        topic = get_str(command, "_op", "_command", default="")
        return self.help(topic or None)

    @operation("info")
    def _info(self, command: Command) -> dict[str, Any]:
        logger.info(f"module info: {self.name}")
        return {
            "module": self.name,
            "objects": self._object_manager.count(),
            "ops": self.operations,
        }

    # dispatch -----------------------------------------------------------------

    async def run(self, text: str, *, rich: bool = False) -> Any:
        """
        Parse command text and execute it on this module.

        The module name is prepended when the text does not start with it.

        Args:
            text: The command text.
            rich: Parse with the rich dialect (quotes, ``#object`` targets).
        """
        if not text or not text.strip():
            raise ParsingError("Unable to parse command", {"module": self.name})

        command_text = text.strip()
        if command_text.split(maxsplit=1)[0] != self.name:
            command_text = f"{self.name} {command_text}"

        parser = self.context.parser
        command = parser.parse_rich(command_text) if rich else parser.parse_simple(command_text)
        return await self.execute(command)

    async def execute(self, command: Command | Mapping[str, Any]) -> Any:
        """
        Execute a command on this module or on one of its objects.

        Raises:
            InvalidCommandError: If the command has no op.
            ObjectNotFoundError: If the target object does not exist.
            OperationNotFoundError: If the module has no such operation.
        """
        if isinstance(command, Mapping):
            command = Command.from_dict(command)
        if not isinstance(command, Command) or not command.op:
            raise InvalidCommandError(
                f"Invalid command: missing op (module: {self.name})",
                module_name=self.name,
            )

        if command.object_id:
            obj = self._object_manager.get_object(command.object_id)
            if obj is None:
                raise ObjectNotFoundError(self.name, command.object_id)
            return await obj.execute(command)

        handler = self._operations.get(normalize_op_name(command.op))
        if handler is None:
            raise OperationNotFoundError(self.name, command.op)

        result = handler(command)
        if inspect.isawaitable(result):
            result = await result
        return result

    # objects ------------------------------------------------------------------

    @property
    def object_manager(self) -> ObjectManager:
        return self._object_manager

    @property
    def objects(self) -> Mapping[str, RuntimeObject]:
        return self._object_manager.objects

    def get_object(self, object_id: str) -> RuntimeObject | None:
        return self._object_manager.get_object(object_id)

    def import_object(self, type_name: str, object_class: type[RuntimeObject]) -> None:
        """Make ``object_class`` creatable under descriptor type ``type_name``."""
        self._object_manager.register_object_class(type_name, object_class)

    def import_object_pack(self, object_pack: Any) -> None:
        """Register every class returned by ``object_pack.get_objects()``."""
        self._object_manager.register_object_classes(object_pack.get_objects())

    def create(self, data: Mapping[str, Any]) -> RuntimeObject:
        """
        Create an object (and its children) from a descriptor.

        Raises:
            ObjectCreationError: If the descriptor names an unknown type.
        """
        attrs = dict(data)
        type_name = attrs.get(TYPE_KEY)

        object_class: type[RuntimeObject] = RuntimeObject
        if type_name:
            found = self._object_manager.get_object_class(type_name)
            if found is None:
                raise ObjectCreationError(
                    f"Xpell object '{type_name}' not found (module: {self.name})",
                    object_type=type_name,
                    details={"module": self.name},
                )
            object_class = found
            if object_class.defaults:
                attrs = {**object_class.defaults, **attrs}

        obj = object_class(
            attrs,
            event_bus=self.context.event_bus,
            nano_commands=self.context.nano_commands,
        )
        self._object_manager.add_object(obj)

        try:
            for child_data in attrs.get(CHILDREN_KEY) or []:
                obj.append(self.create(child_data))
        except Exception:
            # a failed child leaves nothing of the subtree registered
            self._discard(obj)
            raise

        obj.on_create()
        if self.context.config.modules.log_create_object:
            logger.info(f"Module {self.name} created object {obj.object_id}")
        return obj

    def create_from_markup(self, markup: str) -> RuntimeObject | None:
        """Convert an XML string to a descriptor and create it."""
        descriptor = self.context.markup.from_string(markup)
        if not descriptor:
            return None
        return self.create(descriptor)

    def remove(self, object_id: str) -> None:
        """Dispose an object and unregister it and its descendants."""
        obj = self._object_manager.get_object(object_id)
        if obj is None:
            return

        self._discard(obj)

        if self.context.config.modules.log_remove_object:
            logger.info(f"Module {self.name} removed object {object_id}")

    def _discard(self, obj: RuntimeObject) -> None:
        nodes: list[RuntimeObject] = []

        def _walk(node: RuntimeObject) -> None:
            nodes.append(node)
            for child in node.children:
                _walk(child)

        _walk(obj)
        obj.dispose()

        # bottom-up; an id re-used by another object is left alone
        for node in reversed(nodes):
            if self._object_manager.get_object(node.object_id) is node:
                self._object_manager.remove_object(node.object_id)


Module._operation_table = Module._build_operation_table()
