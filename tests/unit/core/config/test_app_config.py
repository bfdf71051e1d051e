"""
Tests for the configuration module.
"""

from pathlib import Path

import pytest
import yaml

from xpell_runtime.core.common.exceptions import ConfigurationError
from xpell_runtime.core.config.app_config import (
    LogFormat,
    LogLevel,
    ParserConfig,
    RuntimeConfig,
    load_config,
)


def test_runtime_config_defaults() -> None:
    config = RuntimeConfig()

    assert config.logging.level == LogLevel.INFO
    assert config.logging.format == LogFormat.CONSOLE
    assert config.parser.object_selector == "#"
    assert config.parser.space_sentinel == "_%20_"
    assert config.event_bus.log_fire is False
    assert config.modules.object_count_suffix == "-om-objects"


def test_parser_config_validation() -> None:
    with pytest.raises(ValueError):
        ParserConfig(object_selector="")
    with pytest.raises(ValueError):
        ParserConfig(space_sentinel="a b")


def test_from_env() -> None:
    env = {
        "XPELL_LOG_LEVEL": "debug",
        "XPELL_LOG_FORMAT": "JSON",
        "XPELL_OBJECT_SELECTOR": "@",
        "XPELL_LOG_EVENTS": "true",
    }

    config = RuntimeConfig.from_env(environ=env)

    assert config.logging.level == LogLevel.DEBUG
    assert config.logging.format == LogFormat.JSON
    assert config.parser.object_selector == "@"
    assert config.event_bus.log_register is True
    assert config.event_bus.log_fire is True


def test_load_config_layers_file_and_env(tmp_path: Path) -> None:
    path = tmp_path / "runtime.yaml"
    path.write_text(
        yaml.safe_dump(
            {
                "logging": {"level": "WARNING"},
                "parser": {"object_selector": "$"},
                "modules": {"log_create_object": True},
            }
        ),
        encoding="utf-8",
    )

    config = load_config(path, environ={"XPELL_OBJECT_SELECTOR": "@"})

    assert config.logging.level == LogLevel.WARNING
    assert config.parser.object_selector == "@"
    assert config.parser.space_sentinel == "_%20_"
    assert config.modules.log_create_object is True


def test_load_config_missing_file_uses_defaults(tmp_path: Path) -> None:
    config = load_config(tmp_path / "absent.yaml", environ={})

    assert config == RuntimeConfig()


def test_load_config_rejects_other_formats(tmp_path: Path) -> None:
    path = tmp_path / "runtime.json"
    path.write_text("{}", encoding="utf-8")

    with pytest.raises(ConfigurationError, match="Unsupported configuration file format"):
        load_config(path, environ={})


def test_load_config_rejects_invalid_values(tmp_path: Path) -> None:
    path = tmp_path / "runtime.yml"
    path.write_text("parser:\n  object_selector: ''\n", encoding="utf-8")

    with pytest.raises(ConfigurationError, match="Invalid configuration"):
        load_config(path, environ={})


def test_load_config_rejects_non_mapping(tmp_path: Path) -> None:
    path = tmp_path / "runtime.yaml"
    path.write_text("- a\n- b\n", encoding="utf-8")

    with pytest.raises(ConfigurationError, match="must contain a mapping"):
        load_config(path, environ={})


def test_save_round_trip(tmp_path: Path) -> None:
    path = tmp_path / "saved.yaml"
    config = RuntimeConfig.from_env(environ={"XPELL_LOG_LEVEL": "ERROR"})

    config.save(path)

    assert load_config(path, environ={}) == config


def test_from_env_rejects_invalid_values() -> None:
    with pytest.raises(ConfigurationError, match="Invalid configuration") as exc_info:
        RuntimeConfig.from_env(environ={"XPELL_LOG_LEVEL": "LOUD"})

    assert exc_info.value.details["errors"]
