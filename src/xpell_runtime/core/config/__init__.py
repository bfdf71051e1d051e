from .app_config import (
    EventBusConfig,
    LogFormat,
    LoggingConfig,
    LogLevel,
    ModuleConfig,
    ParserConfig,
    RuntimeConfig,
    load_config,
)

__all__ = [
    "EventBusConfig",
    "LogFormat",
    "LogLevel",
    "LoggingConfig",
    "ModuleConfig",
    "ParserConfig",
    "RuntimeConfig",
    "load_config",
]
