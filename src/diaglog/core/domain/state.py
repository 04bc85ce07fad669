"""Per-invocation state carried from the pre-call to the post-call phase."""

from __future__ import annotations

from dataclasses import dataclass

from diaglog.core.domain.enums import LogActive


@dataclass(frozen=True)
class DiagnosticLogState:
    """Resolved method-level state of a single invocation."""

    active_state: LogActive
