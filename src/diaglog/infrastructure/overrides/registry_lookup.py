"""
Override lookup backed by a static registry.

Keys are qualified names:

    package.module.Type                    class scope
    package.module.Type.method             method scope
    package.module.Type.method(password)   parameter scope, by name
    package.module.Type.method(1)          parameter scope, by position
    package.module.Type.method->return     return slot

Positions count declared parameters excluding the bound instance.
"""

from __future__ import annotations

from typing import Mapping, Optional

import structlog

from diaglog.core.domain.enums import LogActive
from diaglog.core.domain.invocation import MethodDescriptor, ParameterDescriptor

logger = structlog.get_logger(__name__)

RETURN_SUFFIX = "->return"


def type_key(target_type: type) -> str:
    return f"{target_type.__module__}.{target_type.__qualname__}"


def parameter_key(method_key: str, parameter: str | int) -> str:
    return f"{method_key}({parameter})"


def return_key(method_key: str) -> str:
    return f"{method_key}{RETURN_SUFFIX}"


class RegistryOverrideLookup:
    """Overrides registered at runtime or loaded from configuration."""

    def __init__(self, overrides: Optional[Mapping[str, LogActive | str]] = None) -> None:
        self._overrides: dict[str, LogActive] = {}
        for key, value in (overrides or {}).items():
            self.register(key, value)

    def __len__(self) -> int:
        return len(self._overrides)

    def register(self, key: str, log_active: LogActive | str) -> None:
        """Register an override under a qualified-name key."""
        self._overrides[key] = LogActive(log_active)
        logger.debug("override.registered", key=key, log_active=self._overrides[key].value)

    def register_type(self, target_type: type, log_active: LogActive) -> None:
        self.register(type_key(target_type), log_active)

    def register_method(self, method: MethodDescriptor, log_active: LogActive) -> None:
        self.register(method.qualified_name, log_active)

    def register_parameter(
        self, method: MethodDescriptor, parameter: str | int, log_active: LogActive
    ) -> None:
        self.register(parameter_key(method.qualified_name, parameter), log_active)

    def register_return(self, method: MethodDescriptor, log_active: LogActive) -> None:
        self.register(return_key(method.qualified_name), log_active)

    def type_override(self, target_type: Optional[type]) -> Optional[LogActive]:
        if target_type is None:
            return None
        return self._overrides.get(type_key(target_type))

    def method_override(self, method: MethodDescriptor) -> Optional[LogActive]:
        return self._overrides.get(method.qualified_name)

    def parameter_override(
        self, method: MethodDescriptor, parameter: ParameterDescriptor
    ) -> Optional[LogActive]:
        by_name = self._overrides.get(parameter_key(method.qualified_name, parameter.name))
        if by_name is not None:
            return by_name
        return self._overrides.get(parameter_key(method.qualified_name, parameter.position))

    def return_override(self, method: MethodDescriptor) -> Optional[LogActive]:
        return self._overrides.get(return_key(method.qualified_name))
