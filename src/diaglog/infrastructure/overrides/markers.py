"""Declarative override markers.

Usage:
    @DiagnosticLogging(LogActive.ON)
    class AccountService:
        @DiagnosticLogging(LogActive.OFF)
        def rotate_keys(self) -> None:
            ...

        def login(
            self,
            username: str,
            password: Annotated[str, DiagnosticLogging(LogActive.OFF)],
        ) -> Annotated[Session, DiagnosticLogging(LogActive.OFF)]:
            ...
"""

from __future__ import annotations

import typing
from dataclasses import dataclass
from typing import Annotated, Any, Optional, TypeVar

from diaglog.core.domain.enums import LogActive

MARKER_ATTRIBUTE = "__diagnostic_logging__"

T = TypeVar("T")


@dataclass(frozen=True)
class DiagnosticLogging:
    """Attach a LogActive override to a class, function or annotation.

    Used as a decorator it stores itself on the decorated object. Used as
    ``typing.Annotated`` metadata it marks a parameter or the return slot.
    """

    log_active: LogActive = LogActive.ON

    def __post_init__(self) -> None:
        object.__setattr__(self, "log_active", LogActive(self.log_active))

    def __call__(self, target: T) -> T:
        holder = target
        if isinstance(target, (staticmethod, classmethod)):
            holder = target.__func__
        setattr(holder, MARKER_ATTRIBUTE, self)
        return target


def marker_state(marker: Any) -> Optional[LogActive]:
    """Return the LogActive carried by a marker object, if it is one."""
    if isinstance(marker, DiagnosticLogging):
        return marker.log_active
    if isinstance(marker, LogActive):
        return marker
    return None


def annotation_state(annotation: Any) -> Optional[LogActive]:
    """Return the first LogActive found in ``Annotated`` metadata."""
    if typing.get_origin(annotation) is not Annotated:
        return None
    for metadata in annotation.__metadata__:
        state = marker_state(metadata)
        if state is not None:
            return state
    return None
