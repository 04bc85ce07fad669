"""Scope policy resolution."""

from __future__ import annotations

from typing import Optional

from diaglog.core.domain.enums import LogActive


def resolve(override: Optional[LogActive], inherited: LogActive) -> LogActive:
    """Resolve the effective state of a scope.

    The same rule applies at every level (class, method, parameter, return):
    an override attached to the scope wins, otherwise the parent's state is
    inherited.

    Args:
        override: The override attached to the scope, or None if unset.
        inherited: The effective state of the enclosing scope.

    Returns:
        The effective LogActive for the scope.
    """
    if override is not None:
        return override
    return inherited
