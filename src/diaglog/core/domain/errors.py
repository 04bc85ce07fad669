"""Domain-specific exception types for diaglog."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict


@dataclass
class DiagLogError(Exception):
    """Base exception for diaglog errors."""

    message: str
    code: str = "diaglog_error"
    details: Dict[str, Any] | None = None

    def __post_init__(self) -> None:
        super().__init__(self.message)
        if self.details is None:
            self.details = {}


class InvalidArgumentError(DiagLogError, ValueError):
    """Error raised when a required collaborator reference is missing."""

    def __init__(
        self,
        argument_name: str,
        message: str | None = None,
        *,
        details: Dict[str, Any] | None = None,
    ) -> None:
        details = dict(details or {})
        details.setdefault("argument_name", argument_name)
        self.argument_name = argument_name
        super().__init__(
            message=message or f"Argument must not be None: {argument_name}",
            code="invalid_argument",
            details=details,
        )


class ContractViolationError(DiagLogError, AssertionError):
    """Error raised when the interception boundary is miswired.

    Signals a programming error (e.g. parameter metadata that does not line
    up with the supplied arguments). Never caught inside the package.
    """

    def __init__(self, message: str, *, details: Dict[str, Any] | None = None) -> None:
        super().__init__(message=message, code="contract_violation", details=details)


class RecorderStateError(DiagLogError, RuntimeError):
    """Error raised when recorder phases are driven out of order."""

    def __init__(self, message: str, *, details: Dict[str, Any] | None = None) -> None:
        super().__init__(message=message, code="invalid_recorder_state", details=details)


class ConfigError(DiagLogError):
    """Error raised for configuration failures."""

    def __init__(self, message: str, *, details: Dict[str, Any] | None = None) -> None:
        super().__init__(message=message, code="config_error", details=details)


def require(value: Any, argument_name: str) -> Any:
    """Return ``value`` or raise ``InvalidArgumentError`` when it is None."""
    if value is None:
        raise InvalidArgumentError(argument_name)
    return value
