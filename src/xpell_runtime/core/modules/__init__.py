from .module import Module, normalize_op_name, operation
from .object_manager import ObjectManager
from .runtime_object import RuntimeObject

__all__ = [
    "Module",
    "ObjectManager",
    "RuntimeObject",
    "normalize_op_name",
    "operation",
]
