"""
Defensive, typed accessors for command parameters.

Commands often come from loosely-typed sources (typed text, markup, AI output),
so every accessor here falls back to the caller's default instead of raising.
Each function accepts a ``Command``, any object exposing a ``params`` mapping,
or a plain mapping of parameters.
"""

from __future__ import annotations

import json
import re
from collections.abc import Hashable, Iterable, Mapping
from typing import Any

_TRUE_TOKENS = {"1", "true", "yes", "on"}
_FALSE_TOKENS = {"0", "false", "no", "off"}
_LEADING_INT = re.compile(r"^\s*([+-]?\d+)")

Key = str | int


def _params_of(cmd: Any) -> Mapping[str, Any] | None:
    if cmd is None:
        return None
    if isinstance(cmd, Mapping):
        return cmd
    params = getattr(cmd, "params", None)
    if isinstance(params, Mapping):
        return params
    return None


def _keys(key: Key | Iterable[Key]) -> list[Any]:
    if isinstance(key, str) or not isinstance(key, Iterable):
        return [key]
    return list(key)


def _lookup(params: Mapping[str, Any], key: Any) -> Any:
    if isinstance(key, Hashable) and key in params:
        return params[key]
    # positional keys are stored as strings
    return params.get(str(key))


def get_param(cmd: Any, key: Key | Iterable[Key], default: Any = None) -> Any:
    """Return the first present, non-None value among ``key`` (or keys)."""
    params = _params_of(cmd)
    if not params:
        return default
    for k in _keys(key):
        value = _lookup(params, k)
        if value is not None:
            return value
    return default


def has_param(cmd: Any, key: Key | Iterable[Key]) -> bool:
    """Return True if any of the keys holds a non-None value."""
    params = _params_of(cmd)
    if not params:
        return False
    return any(_lookup(params, k) is not None for k in _keys(key))


def get_str(cmd: Any, *keys: Key, default: str | None = None) -> str | None:
    """Return the first present key's value converted to ``str``."""
    value = get_param(cmd, keys, None)
    if value is None:
        return default
    return str(value)


def get_bool(cmd: Any, key: Key, default: bool = False) -> bool:
    """Return a parameter coerced to a boolean.

    Booleans pass through, numbers are true unless zero, and the usual
    ``1/true/yes/on`` and ``0/false/no/off`` tokens are recognised
    case-insensitively. Anything else falls back to its truthiness.
    """
    value = get_param(cmd, key, default)

    if isinstance(value, bool):
        return value
    if isinstance(value, (int, float)):
        return value != 0
    if isinstance(value, str):
        token = value.strip().lower()
        if token in _TRUE_TOKENS:
            return True
        if token in _FALSE_TOKENS:
            return False

    return bool(value)


def get_int(cmd: Any, key: Key, default: int = 0) -> int:
    """Return the leading integer of the stringified parameter value.

    ``"12px"`` reads as 12 and ``"3.9"`` as 3; values with no leading
    integer yield ``default``.
    """
    value = get_param(cmd, key, default)
    match = _LEADING_INT.match(str(value))
    if not match:
        return default
    return int(match.group(1))


def get_json(cmd: Any, key: Key, default: Any = None) -> Any:
    """Return a structured parameter, parsing JSON text when needed."""
    value = get_param(cmd, key, default)

    if value is None:
        return default
    if isinstance(value, (dict, list)):
        return value
    if isinstance(value, str):
        try:
            return json.loads(value)
        except (ValueError, TypeError, RecursionError):
            return default

    return default
