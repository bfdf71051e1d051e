"""
Common exception classes for the Xpell runtime.

This module defines custom exception classes used throughout the runtime
for better error handling and categorization.
"""

from __future__ import annotations


class XpellError(Exception):
    """Base exception class for all runtime errors."""

    def __init__(
        self,
        message: str,
        details: dict | None = None,
        *,
        code: str | None = None,
        level: str = "error",
        **kwargs,
    ):
        """Initialize the exception.

        Args:
            message: Human-readable error message
            details: Optional dictionary with additional error details
            code: Optional machine-readable error code
            level: Severity hint ("info", "warn", "error", "fatal")
        """
        super().__init__(message)
        self.message = message
        self.details = details or {}
        self.code = code or "xpell_error"
        self.level = level
        for key, value in (kwargs or {}).items():
            setattr(self, key, value)

    def to_dict(self) -> dict:
        error_dict = {
            "message": self.message,
            "type": self.__class__.__name__,
            "code": self.code,
            "level": self.level,
            "details": self.details,
        }

        for attr_name in dir(self):
            if (
                not attr_name.startswith("_")
                and attr_name not in ["message", "details", "code", "level", "args"]
                and not callable(getattr(self, attr_name))
            ):
                error_dict[attr_name] = getattr(self, attr_name)

        return {"error": error_dict}


class ParsingError(XpellError):
    """Raised when command text or markup cannot be parsed."""

    def __init__(
        self, message: str = "Parsing failed", details: dict | None = None, **kwargs
    ):
        super().__init__(message, details, code="parsing_error", **kwargs)


class ConfigurationError(XpellError):
    """Raised when there's a configuration issue."""

    def __init__(
        self,
        message: str = "Configuration error",
        details: dict | None = None,
        **kwargs,
    ):
        super().__init__(message, details, code="configuration_error", **kwargs)


class InvalidCommandError(XpellError):
    """Raised when a command record cannot be dispatched as given."""

    def __init__(
        self,
        message: str = "Invalid command",
        module_name: str | None = None,
        details: dict | None = None,
        **kwargs,
    ):
        det = details.copy() if details else {}
        if module_name:
            det.setdefault("module", module_name)
        super().__init__(message, det, code="invalid_command", **kwargs)
        self.module_name = module_name


class ResolutionError(XpellError):
    """Raised when a command target cannot be resolved."""

    def __init__(
        self,
        message: str = "Command target not found",
        details: dict | None = None,
        **kwargs,
    ):
        code = kwargs.pop("code", "resolution_error")
        super().__init__(message, details, code=code, **kwargs)


class ObjectNotFoundError(ResolutionError):
    def __init__(self, module_name: str, object_id: str):
        super().__init__(
            f"Module '{module_name}' cant find object id: {object_id}",
            {"module": module_name, "object_id": object_id},
            code="object_not_found",
        )
        self.module_name = module_name
        self.object_id = object_id


class OperationNotFoundError(ResolutionError):
    def __init__(self, module_name: str, op: str):
        super().__init__(
            f"Module '{module_name}' cant find op: {op}",
            {"module": module_name, "op": op},
            code="operation_not_found",
        )
        self.module_name = module_name
        self.op = op


class UnknownModuleError(ResolutionError):
    def __init__(self, module_name: str):
        super().__init__(
            f"Module '{module_name}' is not registered",
            {"module": module_name},
            code="unknown_module",
        )
        self.module_name = module_name


class UnknownNanoCommandError(ResolutionError):
    """Raised when an object is asked to run a verb outside its nano-commands."""

    def __init__(self, object_id: str, verb: str, module_name: str | None = None):
        where = f"Object '{object_id}'"
        if module_name:
            where = f"Module '{module_name}' object '{object_id}'"
        super().__init__(
            f"{where} has no nano command: {verb}",
            {"module": module_name, "object_id": object_id, "op": verb},
            code="unknown_nano_command",
        )
        self.object_id = object_id
        self.verb = verb


class ObjectCreationError(XpellError):
    def __init__(
        self,
        message: str = "Failed to create object",
        object_type: str | None = None,
        details: dict | None = None,
    ):
        det = details.copy() if details else {}
        if object_type:
            det.setdefault("object_type", object_type)
        super().__init__(message, det, code="object_creation_error")
