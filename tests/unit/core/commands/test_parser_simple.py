"""Tests for the simple command dialect."""

import pytest

from xpell_runtime.core.commands.parser import CommandParser, parse_simple
from xpell_runtime.core.common.exceptions import ParsingError


def test_named_parameter() -> None:
    cmd = parse_simple("m o k:v")

    assert cmd.module == "m"
    assert cmd.op == "o"
    assert dict(cmd.params) == {"k": "v"}
    assert cmd.object_id is None


def test_positional_parameter_uses_one_based_position() -> None:
    cmd = parse_simple("xui create box")

    assert cmd.module == "xui"
    assert cmd.op == "create"
    assert dict(cmd.params) == {"1": "box"}


def test_mixed_parameters_keep_token_positions() -> None:
    cmd = parse_simple("xui move left speed:10 fast")

    assert dict(cmd.params) == {"1": "left", "speed": "10", "3": "fast"}


def test_value_split_at_first_colon_only() -> None:
    cmd = parse_simple("net open url:http://example.com:8080")

    assert cmd.params["url"] == "http://example.com:8080"


def test_extra_whitespace_is_ignored() -> None:
    cmd = parse_simple("   xui    show   \t a:1  ")

    assert cmd.module == "xui"
    assert cmd.op == "show"
    assert dict(cmd.params) == {"a": "1"}


def test_explicit_module_makes_first_token_the_op() -> None:
    cmd = parse_simple("show id:main", module="xui")

    assert cmd.module == "xui"
    assert cmd.op == "show"
    assert dict(cmd.params) == {"id": "main"}


def test_empty_text_raises() -> None:
    with pytest.raises(ParsingError, match="Missing module name"):
        parse_simple("   ")


def test_missing_op_raises_with_module_name() -> None:
    with pytest.raises(ParsingError) as exc_info:
        parse_simple("xui")

    assert "xui" in str(exc_info.value)
    assert exc_info.value.details["module"] == "xui"


def test_simple_dialect_has_no_quoting() -> None:
    cmd = CommandParser().parse_simple('xui set "Hello World"')

    assert dict(cmd.params) == {"1": '"Hello', "2": 'World"'}
