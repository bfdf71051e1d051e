"""
Core data structures for the command system.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any

# Keys used by the serialized (wire) form of a command
WIRE_KEYS = {
    "module": "_module",
    "object_id": "_object",
    "op": "_op",
    "params": "_params",
}


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


@dataclass(frozen=True)
class Command:
    """
    Represents a parsed command addressed to a module or to one of its objects.

    Attributes:
        module: The name of the module that handles the command.
        op: The operation (or nano-command verb) to execute.
        params: A mapping of parameter names, or stringified 1-based
            positions, to their values.
        object_id: The id of the target object, for object-targeted commands.
        created_at: When the command was created.
    """

    module: str
    op: str
    params: Mapping[str, Any] = field(default_factory=dict)
    object_id: str | None = None
    created_at: datetime = field(default_factory=_utcnow)

    def get_param(self, position: int, name: str, default: Any = None) -> Any:
        """
        Get a parameter by name, falling back to its position.

        Commands carry parameters either by name (``xui op name:value``) or
        by position (``xui op value``); this accessor checks both.

        Args:
            position: The 1-based position of the parameter.
            name: The name of the parameter.
            default: Returned when neither key is present.
        """
        if name in self.params:
            return self.params[name]
        if str(position) in self.params:
            return self.params[str(position)]
        return default

    @property
    def is_object_command(self) -> bool:
        return bool(self.object_id)

    def to_dict(self) -> dict[str, Any]:
        """Return the serialized form of the command."""
        data: dict[str, Any] = {
            WIRE_KEYS["module"]: self.module,
            WIRE_KEYS["op"]: self.op,
            WIRE_KEYS["params"]: dict(self.params),
        }
        if self.object_id:
            data[WIRE_KEYS["object_id"]] = self.object_id
        return data

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> Command:
        """
        Build a command from a plain mapping.

        Accepts the serialized keys (``_module``, ``_object``, ``_op``,
        ``_params``) or the attribute names. A missing ``op`` is kept empty
        so that dispatch can reject the command with context.
        """

        def _pick(attr: str) -> Any:
            wire_key = WIRE_KEYS[attr]
            if wire_key in data:
                return data[wire_key]
            return data.get(attr)

        params = _pick("params") or {}
        return cls(
            module=str(_pick("module") or ""),
            op=str(_pick("op") or ""),
            params=dict(params),
            object_id=_pick("object_id") or None,
        )
