"""Override lookup that consults several sources in order."""

from __future__ import annotations

from typing import Callable, Optional, Sequence

from diaglog.core.domain.enums import LogActive
from diaglog.core.domain.invocation import MethodDescriptor, ParameterDescriptor
from diaglog.core.interfaces.overrides import OverrideLookupProtocol


class ChainedOverrideLookup:
    """First present override wins, per scope."""

    def __init__(self, lookups: Sequence[OverrideLookupProtocol]) -> None:
        self._lookups = tuple(lookups)

    def _first(
        self, query: Callable[[OverrideLookupProtocol], Optional[LogActive]]
    ) -> Optional[LogActive]:
        for lookup in self._lookups:
            state = query(lookup)
            if state is not None:
                return state
        return None

    def type_override(self, target_type: Optional[type]) -> Optional[LogActive]:
        return self._first(lambda lookup: lookup.type_override(target_type))

    def method_override(self, method: MethodDescriptor) -> Optional[LogActive]:
        return self._first(lambda lookup: lookup.method_override(method))

    def parameter_override(
        self, method: MethodDescriptor, parameter: ParameterDescriptor
    ) -> Optional[LogActive]:
        return self._first(lambda lookup: lookup.parameter_override(method, parameter))

    def return_override(self, method: MethodDescriptor) -> Optional[LogActive]:
        return self._first(lambda lookup: lookup.return_override(method))
