"""
Per-module registry of runtime objects and object classes.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from types import MappingProxyType

from xpell_runtime.core.interfaces.frame_listener_interface import IFrameListener
from xpell_runtime.core.modules.runtime_object import RuntimeObject

logger = logging.getLogger(__name__)


class ObjectManager:
    """Keeps a module's objects by id and the object classes it can create."""

    def __init__(self) -> None:
        self._objects: dict[str, RuntimeObject] = {}
        self._object_classes: dict[str, type[RuntimeObject]] = {}
        # populated on add so frame ticks never probe every object
        self._frame_listeners: dict[str, IFrameListener] = {}

    # object classes ---------------------------------------------------------

    def register_object_class(self, type_name: str, object_class: type[RuntimeObject]) -> None:
        self._object_classes[type_name] = object_class

    def register_object_classes(self, classes: Mapping[str, type[RuntimeObject]]) -> None:
        for type_name, object_class in classes.items():
            self.register_object_class(type_name, object_class)

    def has_object_class(self, type_name: str) -> bool:
        return type_name in self._object_classes

    def get_object_class(self, type_name: str) -> type[RuntimeObject] | None:
        return self._object_classes.get(type_name)

    # objects ----------------------------------------------------------------

    def add_object(self, obj: RuntimeObject) -> None:
        if obj.object_id in self._objects:
            logger.warning(f"Replacing object with duplicate id '{obj.object_id}'")
            self.remove_object(obj.object_id)
        self._objects[obj.object_id] = obj
        if isinstance(obj, IFrameListener):
            self._frame_listeners[obj.object_id] = obj

    def get_object(self, object_id: str) -> RuntimeObject | None:
        return self._objects.get(object_id)

    def has_object(self, object_id: str) -> bool:
        return object_id in self._objects

    def remove_object(self, object_id: str) -> None:
        self._objects.pop(object_id, None)
        self._frame_listeners.pop(object_id, None)

    @property
    def objects(self) -> Mapping[str, RuntimeObject]:
        return MappingProxyType(self._objects)

    @property
    def frame_listeners(self) -> list[IFrameListener]:
        return list(self._frame_listeners.values())

    def count(self) -> int:
        return len(self._objects)
