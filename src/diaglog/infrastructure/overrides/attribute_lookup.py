"""Override lookup backed by ``DiagnosticLogging`` markers."""

from __future__ import annotations

from typing import Optional

from diaglog.core.domain.enums import LogActive
from diaglog.core.domain.invocation import MethodDescriptor, ParameterDescriptor
from diaglog.infrastructure.overrides.markers import (
    MARKER_ATTRIBUTE,
    annotation_state,
    marker_state,
)


class AttributeOverrideLookup:
    """Reads overrides declared on the code itself.

    Class markers are only honoured on the class that declares them; a
    subclass of a marked class inherits nothing unless it is marked too.
    """

    def type_override(self, target_type: Optional[type]) -> Optional[LogActive]:
        if target_type is None:
            return None
        return marker_state(vars(target_type).get(MARKER_ATTRIBUTE))

    def method_override(self, method: MethodDescriptor) -> Optional[LogActive]:
        return marker_state(getattr(method.function, MARKER_ATTRIBUTE, None))

    def parameter_override(
        self, method: MethodDescriptor, parameter: ParameterDescriptor
    ) -> Optional[LogActive]:
        return annotation_state(parameter.annotation)

    def return_override(self, method: MethodDescriptor) -> Optional[LogActive]:
        return annotation_state(method.returns.annotation)
