"""
Invocation Recorder

Drives the two logging phases of a single invocation:

    IDLE --starting_invocation--> STARTED --completed_invocation--> ENDED

The "started" record carries the filtered arguments and is emitted when at
least one argument (or the method itself) is loggable. The "ended" record
carries the filtered return value. Structured fields are bound to the
logging context only for the duration of each log call.
"""

from __future__ import annotations

from enum import Enum
from typing import Any

import structlog
from structlog.contextvars import bound_contextvars

from diaglog.core.domain.enums import LogActive, LogType
from diaglog.core.domain.errors import RecorderStateError, require
from diaglog.core.domain.filters import filter_invocation_arguments, filter_return_value
from diaglog.core.domain.invocation import Invocation
from diaglog.core.domain.policy import resolve
from diaglog.core.domain.state import DiagnosticLogState
from diaglog.core.interfaces.logging import LoggerProtocol
from diaglog.core.interfaces.overrides import OverrideLookupProtocol

logger = structlog.get_logger(__name__)

LOG_TYPE_NAME = "LogType"
ARGUMENTS_NAME = "Arguments"
RETURN_VALUE_NAME = "ReturnValue"
NAMESPACE_NAME = "Namespace"
TYPE_NAME_NAME = "TypeName"
METHOD_NAME_NAME = "MethodName"
SOURCE_NAME = "Source"


class RecorderPhase(str, Enum):
    """Lifecycle of an InvocationRecorder."""

    IDLE = "idle"
    STARTED = "started"
    ENDED = "ended"


def invocation_enrichment(invocation: Invocation) -> dict[str, Any]:
    """Identity fields attached to both records of an invocation."""
    return {
        NAMESPACE_NAME: invocation.namespace,
        TYPE_NAME_NAME: invocation.type_name,
        METHOD_NAME_NAME: invocation.method_name,
        SOURCE_NAME: invocation.source,
    }


class InvocationRecorder:
    """Records one invocation. Not reusable once ENDED.

    Args:
        logger: Sink for the started/ended records.
        lookup: Source of class, method, parameter and return overrides.
        default_class_state: State inherited by types without an override.

    Raises:
        InvalidArgumentError: If logger or lookup is None.
    """

    def __init__(
        self,
        logger: LoggerProtocol,
        lookup: OverrideLookupProtocol,
        default_class_state: LogActive = LogActive.OFF,
    ) -> None:
        self._logger = require(logger, "logger")
        self._lookup = require(lookup, "lookup")
        self._default_class_state = default_class_state
        self._phase = RecorderPhase.IDLE

    @property
    def phase(self) -> RecorderPhase:
        return self._phase

    def resolve_method_state(self, invocation: Invocation) -> LogActive:
        """Resolve class state, then method state seeded by it."""
        method = require(invocation.method, "invocation.method")
        class_state = resolve(
            self._lookup.type_override(invocation.target_type),
            self._default_class_state,
        )
        return resolve(self._lookup.method_override(method), class_state)

    def starting_invocation(self, invocation: Invocation) -> DiagnosticLogState:
        """Run the pre-call phase.

        Returns:
            The method-level state to hand to ``completed_invocation``.

        Raises:
            InvalidArgumentError: If the invocation or its method metadata is
                None.
            ContractViolationError: If parameter metadata and arguments differ
                in length.
            RecorderStateError: If the recorder is not IDLE.
        """
        self._expect_phase(RecorderPhase.IDLE)
        require(invocation, "invocation")

        method_state = self.resolve_method_state(invocation)
        filtered = filter_invocation_arguments(invocation, self._lookup, method_state)
        self._phase = RecorderPhase.STARTED

        if filtered.any_loggable == LogActive.ON:
            with bound_contextvars(
                **{LOG_TYPE_NAME: LogType.DIAGNOSTIC},
                **invocation_enrichment(invocation),
                **{ARGUMENTS_NAME: filtered.values},
            ):
                self._logger.info(f"{invocation.source} invocation started")

        return DiagnosticLogState(method_state)

    def completed_invocation(
        self,
        invocation: Invocation,
        state: DiagnosticLogState,
    ) -> None:
        """Run the post-call phase.

        Reads the produced value from ``invocation.return_value``.

        The method-level state is resolved again from the overrides rather
        than taken from ``state``.

        Raises:
            InvalidArgumentError: If the invocation, its method metadata or
                the state is None.
            RecorderStateError: If the recorder is not STARTED.
        """
        self._expect_phase(RecorderPhase.STARTED)
        require(invocation, "invocation")
        require(state, "state")
        method = require(invocation.method, "invocation.method")

        method_state = self.resolve_method_state(invocation)
        if method_state != state.active_state:
            logger.debug(
                "diagnostic_state_changed",
                source=invocation.source,
                started=state.active_state.value,
                ended=method_state.value,
            )

        filtered = filter_return_value(
            invocation.return_value,
            self._lookup.return_override(method),
            method_state,
            method.returns.is_void,
        )
        self._phase = RecorderPhase.ENDED

        if filtered.loggable == LogActive.ON:
            with bound_contextvars(
                **{LOG_TYPE_NAME: LogType.DIAGNOSTIC},
                **invocation_enrichment(invocation),
                **{RETURN_VALUE_NAME: filtered.value},
            ):
                self._logger.info(f"{invocation.source} invocation ended")

    def _expect_phase(self, expected: RecorderPhase) -> None:
        if self._phase != expected:
            raise RecorderStateError(
                f"Recorder is {self._phase.value}, expected {expected.value}",
                details={"phase": self._phase.value, "expected": expected.value},
            )
