"""
Override Lookup Protocol

Abstracts where scope overrides come from. Each lookup answers "present
override or absent" for one scope; implementations may read decorator
markers, static configuration or a runtime registry.
"""

from __future__ import annotations

from typing import Optional, Protocol

from diaglog.core.domain.enums import LogActive
from diaglog.core.domain.invocation import MethodDescriptor, ParameterDescriptor


class OverrideLookupProtocol(Protocol):
    """Protocol for per-scope LogActive override lookups."""

    def type_override(self, target_type: Optional[type]) -> Optional[LogActive]:
        """Return the override attached to the target type, if any."""
        ...

    def method_override(self, method: MethodDescriptor) -> Optional[LogActive]:
        """Return the override attached to the method, if any."""
        ...

    def parameter_override(
        self, method: MethodDescriptor, parameter: ParameterDescriptor
    ) -> Optional[LogActive]:
        """Return the override attached to a parameter, if any."""
        ...

    def return_override(self, method: MethodDescriptor) -> Optional[LogActive]:
        """Return the override attached to the return slot, if any."""
        ...
