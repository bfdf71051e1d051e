"""Tests for the rich (quoted, object-targeted) command dialect."""

import pytest

from xpell_runtime.core.commands.parser import CommandParser, parse_rich
from xpell_runtime.core.common.exceptions import ParsingError
from xpell_runtime.core.config.app_config import ParserConfig


def test_object_target_without_params() -> None:
    cmd = parse_rich("xui #main show")

    assert cmd.module == "xui"
    assert cmd.object_id == "main"
    assert cmd.op == "show"
    assert dict(cmd.params) == {}
    assert cmd.is_object_command


def test_double_quoted_value_keeps_spaces() -> None:
    cmd = parse_rich('xui set title "Hello World"')

    assert cmd.op == "set"
    assert dict(cmd.params) == {"title": "Hello World"}


def test_single_quoted_value_keeps_spaces() -> None:
    cmd = parse_rich("xui set title 'Hello   big World'")

    assert cmd.params["title"] == "Hello   big World"


def test_colon_parameter_with_quoted_value() -> None:
    cmd = parse_rich('xui set title:"Hi there" color:red')

    assert cmd.params["color"] == "red"
    assert cmd.params["title"] == '"Hi there"'


def test_key_value_pairs() -> None:
    cmd = parse_rich("xui #box move x 10 y 20")

    assert cmd.object_id == "box"
    assert dict(cmd.params) == {"x": "10", "y": "20"}


def test_dangling_key_is_kept_positionally() -> None:
    cmd = parse_rich("xui create box")

    assert dict(cmd.params) == {"1": "box"}


def test_dangling_key_before_colon_parameter() -> None:
    cmd = parse_rich("xui create box color:red")

    assert dict(cmd.params) == {"1": "box", "color": "red"}


def test_quoted_value_without_key_is_positional() -> None:
    cmd = parse_rich('xui say "good morning"')

    assert dict(cmd.params) == {"1": "good morning"}


def test_unterminated_quote_raises() -> None:
    with pytest.raises(ParsingError, match="Unclosed"):
        parse_rich('xui set title "Hello World')


def test_missing_module_raises() -> None:
    with pytest.raises(ParsingError, match="Missing module name"):
        parse_rich("")


def test_missing_op_raises() -> None:
    with pytest.raises(ParsingError, match="Missing operation"):
        parse_rich("xui #main")


def test_empty_object_selector_raises() -> None:
    with pytest.raises(ParsingError, match="Invalid object selector"):
        parse_rich("xui # show")


def test_explicit_module() -> None:
    cmd = parse_rich('#main set text "a b"', module="xui")

    assert cmd.module == "xui"
    assert cmd.object_id == "main"
    assert cmd.params["text"] == "a b"


def test_custom_object_selector() -> None:
    parser = CommandParser(ParserConfig(object_selector="@"))

    cmd = parser.parse_rich("xui @main show")

    assert cmd.object_id == "main"
    assert parser.parse_rich("xui #main show").op == "#main"


def test_invalid_parser_settings_rejected() -> None:
    parser = CommandParser()

    with pytest.raises(ValueError):
        parser.object_selector = ""
    with pytest.raises(ValueError):
        parser.space_sentinel = "a b"
    with pytest.raises(TypeError):
        parser.object_selector = 5  # type: ignore[assignment]


def test_escape_and_unescape_are_inverse_for_quoted_spans() -> None:
    parser = CommandParser()

    escaped = parser.escape_quoted_spaces('say "a b" c d')

    assert escaped == f'say "a{parser.space_sentinel}b" c d'
    assert parser.unescape(escaped) == 'say "a b" c d'
