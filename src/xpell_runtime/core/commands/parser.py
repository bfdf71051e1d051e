"""
Parses command text into Command records.

Two dialects are supported:

* simple: ``<module> <op> [<value> | <key>:<value>]*`` with no quoting.
* rich: ``<module> [#<object-id>] <op> [<key> <value> | <key>:<value>]*``
  with single- or double-quoted multi-word values.

Positional parameters are keyed by the 1-based position of their token among
the tokens following the command header, in both dialects.
"""

from __future__ import annotations

import logging
import re
from typing import Any

from xpell_runtime.core.commands.command import Command
from xpell_runtime.core.common.exceptions import ParsingError
from xpell_runtime.core.config.app_config import ParserConfig
from xpell_runtime.core.constants.parser_constants import (
    NAMED_PARAM_SEPARATOR,
    QUOTE_CHARS,
)

logger = logging.getLogger(__name__)

_QUOTED_SPAN = re.compile(r"""(['"])(.*?)\1""", re.DOTALL)
_WHITESPACE = re.compile(r"\s")


class CommandParser:
    """Parses command text in the simple and rich dialects."""

    def __init__(self, config: ParserConfig | None = None) -> None:
        """Initialize the parser from an optional parser configuration."""
        config = config or ParserConfig()
        self._object_selector: str = ""
        self._space_sentinel: str = ""
        self.object_selector = config.object_selector
        self.space_sentinel = config.space_sentinel

    @property
    def object_selector(self) -> str:
        """Return the prefix that marks an explicit object target."""
        return self._object_selector

    @object_selector.setter
    def object_selector(self, value: str) -> None:
        if not isinstance(value, str):
            raise TypeError("Object selector must be a string.")
        if value == "":
            raise ValueError("Object selector must not be empty.")
        self._object_selector = value

    @property
    def space_sentinel(self) -> str:
        """Return the placeholder used for whitespace inside quoted values."""
        return self._space_sentinel

    @space_sentinel.setter
    def space_sentinel(self, value: str) -> None:
        if not isinstance(value, str):
            raise TypeError("Space sentinel must be a string.")
        if value == "" or _WHITESPACE.search(value):
            raise ValueError("Space sentinel must be non-empty and contain no whitespace.")
        self._space_sentinel = value

    def parse_simple(self, text: str, module: str | None = None) -> Command:
        """
        Parses simple-dialect text.

        Args:
            text: The command text.
            module: Optional module name; when given, the first token is the op.

        Returns:
            The parsed Command.
        """
        tokens = (text or "").split()

        if module:
            module_name = module
            header = 1
        else:
            if not tokens:
                raise ParsingError("Missing module name", {"text": text})
            module_name = tokens[0]
            header = 2

        if len(tokens) < header:
            raise ParsingError(
                f"Missing operation (module: {module_name})",
                {"text": text, "module": module_name},
            )
        op = tokens[header - 1]

        params: dict[str, Any] = {}
        for position, token in enumerate(tokens[header:], start=1):
            if NAMED_PARAM_SEPARATOR in token:
                key, value = token.split(NAMED_PARAM_SEPARATOR, 1)
                params[key] = value
            else:
                params[str(position)] = token

        return Command(module=module_name, op=op, params=params)

    def parse_rich(self, text: str, module: str | None = None) -> Command:
        """
        Parses rich-dialect text (quoted values, optional object target).

        Args:
            text: The command text.
            module: Optional module name; when given, the text starts at the
                optional object selector or the op.

        Returns:
            The parsed Command.

        Raises:
            ParsingError: If the module, object id or op is missing, or a
                quoted value is never closed.
        """
        parts = self.escape_quoted_spaces(text or "").split()

        module_name = module if module else (parts.pop(0) if parts else "")
        if not module_name:
            raise ParsingError("Missing module name", {"text": text})

        object_id: str | None = None
        if parts and parts[0].startswith(self.object_selector):
            object_id = parts.pop(0)[len(self.object_selector) :]
            if not object_id:
                raise ParsingError(
                    f"Invalid object selector '{self.object_selector}'. "
                    f"Use '{self.object_selector}<id>'",
                    {"text": text, "module": module_name},
                )

        if not parts:
            raise ParsingError(
                f"Missing operation (module: {module_name})",
                {"text": text, "module": module_name},
            )
        op = parts.pop(0)

        params = self._fold_params(parts, text, module_name)
        return Command(module=module_name, op=op, params=params, object_id=object_id)

    def escape_quoted_spaces(self, text: str) -> str:
        """Replace whitespace inside matching quote pairs with the sentinel."""

        def _replace(match: re.Match[str]) -> str:
            quote, content = match.group(1), match.group(2)
            return f"{quote}{_WHITESPACE.sub(self.space_sentinel, content)}{quote}"

        return _QUOTED_SPAN.sub(_replace, text)

    def unescape(self, value: str) -> str:
        """Restore spaces replaced by ``escape_quoted_spaces``."""
        return value.replace(self.space_sentinel, " ")

    def _fold_params(
        self, parts: list[str], text: str, module_name: str
    ) -> dict[str, Any]:
        params: dict[str, Any] = {}
        pending_key: str | None = None
        pending_key_position = 0
        value_in_progress: str | None = None
        value_position = 0

        def _assign(value: str, position: int) -> None:
            nonlocal pending_key
            if pending_key is not None:
                params[pending_key] = value
                pending_key = None
            else:
                params[str(position)] = value

        def _flush_pending_key() -> None:
            # a key with nothing to attach to is kept as a positional value
            nonlocal pending_key
            if pending_key is not None:
                params[str(pending_key_position)] = pending_key
                pending_key = None

        for position, part in enumerate(parts, start=1):
            if value_in_progress is not None:
                value_in_progress += f" {part}"
                if part.endswith(value_in_progress[0]):
                    _assign(self.unescape(value_in_progress[1:-1]), value_position)
                    value_in_progress = None
                continue

            if part.startswith(QUOTE_CHARS):
                value_position = position
                if len(part) > 1 and part.endswith(part[0]):
                    _assign(self.unescape(part[1:-1]), position)
                else:
                    value_in_progress = part
                continue

            if NAMED_PARAM_SEPARATOR in part:
                _flush_pending_key()
                key, value = part.split(NAMED_PARAM_SEPARATOR, 1)
                params[key] = self.unescape(value)
                continue

            if pending_key is not None:
                _assign(self.unescape(part), position)
            else:
                pending_key = self.unescape(part)
                pending_key_position = position

        if value_in_progress is not None:
            raise ParsingError(
                f"Unclosed quoted parameter value (module: {module_name})",
                {"text": text, "module": module_name, "value": value_in_progress},
            )

        _flush_pending_key()
        return params


_default_parser = CommandParser()


def parse_simple(text: str, module: str | None = None) -> Command:
    """Parse simple-dialect text with the default parser configuration."""
    return _default_parser.parse_simple(text, module)


def parse_rich(text: str, module: str | None = None) -> Command:
    """Parse rich-dialect text with the default parser configuration."""
    return _default_parser.parse_rich(text, module)
