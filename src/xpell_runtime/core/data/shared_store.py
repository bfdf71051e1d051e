"""
Shared in-memory store for runtime state.

Modules and hosts exchange small values here by key (for example, each module
publishes its owned-object count every frame). It is not a persistence
mechanism.
"""

from __future__ import annotations

from typing import Any

_MISSING = object()


class SharedStore:
    """Process-wide key/value memory, passed around explicitly."""

    def __init__(self) -> None:
        self._objects: dict[str, Any] = {}
        self.variables: dict[str, str | int | float | bool] = {}

    @property
    def objects(self) -> dict[str, Any]:
        """Live mapping of stored objects."""
        return self._objects

    def set(self, key: str, value: Any) -> None:
        self._objects[key] = value

    def get(self, key: str, default: Any = None) -> Any:
        return self._objects.get(key, default)

    def has(self, key: str) -> bool:
        return key in self._objects

    def delete(self, key: str) -> None:
        self._objects.pop(key, None)

    def pick(self, key: str, default: Any = None) -> Any:
        """Return the value stored under ``key`` and remove it."""
        value = self._objects.pop(key, _MISSING)
        return default if value is _MISSING else value

    def clean(self) -> None:
        """Forget every stored object and variable."""
        self._objects.clear()
        self.variables.clear()

    def __contains__(self, key: object) -> bool:
        return key in self._objects

    def __len__(self) -> int:
        return len(self._objects)
