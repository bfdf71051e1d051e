from __future__ import annotations

import logging
import os
from collections.abc import Mapping
from enum import Enum
from pathlib import Path
from typing import Any

from pydantic import Field, ValidationError, field_validator

from xpell_runtime.core.common.exceptions import ConfigurationError
from xpell_runtime.core.constants.parser_constants import (
    DEFAULT_OBJECT_SELECTOR,
    DEFAULT_SPACE_SENTINEL,
)
from xpell_runtime.core.interfaces.model_bases import DomainModel

logger = logging.getLogger(__name__)


def _env_to_bool(name: str, default: bool, env: Mapping[str, str]) -> bool:
    """Return an environment variable parsed as a boolean flag."""
    value = env.get(name)
    if value is None:
        return default
    return value.strip().lower() in {"1", "true", "yes", "on"}


class LogLevel(str, Enum):
    """Log levels for configuration."""

    DEBUG = "DEBUG"
    INFO = "INFO"
    WARNING = "WARNING"
    ERROR = "ERROR"
    CRITICAL = "CRITICAL"


class LogFormat(str, Enum):
    """Log format options."""

    JSON = "json"
    CONSOLE = "console"


class LoggingConfig(DomainModel):
    """Logging configuration."""

    level: LogLevel = LogLevel.INFO
    log_file: str | None = None
    format: LogFormat = LogFormat.CONSOLE


class ParserConfig(DomainModel):
    """Command text parsing configuration."""

    object_selector: str = DEFAULT_OBJECT_SELECTOR
    space_sentinel: str = DEFAULT_SPACE_SENTINEL

    @field_validator("object_selector", "space_sentinel")
    @classmethod
    def validate_not_empty(cls, v: str) -> str:
        if not v:
            raise ValueError("must not be empty")
        if any(ch.isspace() for ch in v):
            raise ValueError("must not contain whitespace")
        return v


class EventBusConfig(DomainModel):
    """Debug logging switches for the event bus."""

    log_register: bool = False
    log_remove: bool = False
    log_fire: bool = False


class ModuleConfig(DomainModel):
    """Module behaviour configuration."""

    log_create_object: bool = False
    log_remove_object: bool = False
    # shared store key is "<module name><suffix>"
    object_count_suffix: str = "-om-objects"


class RuntimeConfig(DomainModel):
    """Complete runtime configuration."""

    logging: LoggingConfig = Field(default_factory=LoggingConfig)
    parser: ParserConfig = Field(default_factory=ParserConfig)
    event_bus: EventBusConfig = Field(default_factory=EventBusConfig)
    modules: ModuleConfig = Field(default_factory=ModuleConfig)

    def save(self, path: str | Path) -> None:
        """Save the current configuration to a YAML file."""
        import yaml

        p = Path(path)
        data = self.model_dump(mode="json", exclude_none=True)
        with p.open("w", encoding="utf-8") as f:
            yaml.safe_dump(data, f, sort_keys=False)

    @classmethod
    def from_env(cls, *, environ: Mapping[str, str] | None = None) -> RuntimeConfig:
        """Create RuntimeConfig from environment variables.

        Raises:
            ConfigurationError: If an environment value is invalid.
        """
        return _validate_config(_config_from_env(environ))


def _config_from_env(environ: Mapping[str, str] | None = None) -> dict[str, Any]:
    """Collect the configuration values that are set in the environment."""
    env: Mapping[str, str] = environ if environ is not None else os.environ
    config: dict[str, Any] = {}

    logging_section: dict[str, Any] = {}
    if env.get("XPELL_LOG_LEVEL"):
        logging_section["level"] = env["XPELL_LOG_LEVEL"].strip().upper()
    if env.get("XPELL_LOG_FILE"):
        logging_section["log_file"] = env["XPELL_LOG_FILE"]
    if env.get("XPELL_LOG_FORMAT"):
        logging_section["format"] = env["XPELL_LOG_FORMAT"].strip().lower()
    if logging_section:
        config["logging"] = logging_section

    if env.get("XPELL_OBJECT_SELECTOR"):
        config["parser"] = {"object_selector": env["XPELL_OBJECT_SELECTOR"]}

    if "XPELL_LOG_EVENTS" in env:
        flag = _env_to_bool("XPELL_LOG_EVENTS", False, env)
        config["event_bus"] = {
            "log_register": flag,
            "log_remove": flag,
            "log_fire": flag,
        }

    return config


def _merge_dicts(d1: dict[str, Any], d2: Mapping[str, Any]) -> dict[str, Any]:
    for k, v in d2.items():
        if k in d1 and isinstance(d1[k], dict) and isinstance(v, Mapping):
            _merge_dicts(d1[k], v)
        else:
            d1[k] = v
    return d1


def load_config(
    config_path: str | Path | None = None,
    *,
    environ: Mapping[str, str] | None = None,
) -> RuntimeConfig:
    """
    Load configuration from file and environment.

    Values are layered defaults <- YAML file <- environment.

    Args:
        config_path: Optional path to a YAML configuration file
        environ: Optional environment mapping (defaults to os.environ)

    Returns:
        RuntimeConfig instance
    """
    config_data: dict[str, Any] = RuntimeConfig().model_dump()

    if config_path:
        path = Path(config_path)
        if not path.exists():
            logger.warning(f"Configuration file not found: {config_path}")
        else:
            if path.suffix.lower() not in [".yaml", ".yml"]:
                raise ConfigurationError(
                    f"Unsupported configuration file format: {path.suffix}. Use YAML (.yaml/.yml).",
                    {"path": str(path)},
                )

            import yaml

            try:
                with open(path, encoding="utf-8") as f:
                    file_config = yaml.safe_load(f) or {}
            except yaml.YAMLError as exc:
                raise ConfigurationError(
                    f"Error loading configuration file: {exc!s}", {"path": str(path)}
                ) from exc

            if not isinstance(file_config, dict):
                raise ConfigurationError(
                    "Configuration file must contain a mapping", {"path": str(path)}
                )
            _merge_dicts(config_data, file_config)

    _merge_dicts(config_data, _config_from_env(environ))

    return _validate_config(config_data)


def _validate_config(data: Mapping[str, Any]) -> RuntimeConfig:
    try:
        return RuntimeConfig.model_validate(data)
    except ValidationError as exc:
        raise ConfigurationError(
            f"Invalid configuration: {exc.error_count()} error(s)",
            {"errors": exc.errors(include_url=False)},
        ) from exc
