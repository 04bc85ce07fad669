"""
Payload Filtering

Builds the copies of argument and return values that are safe to place in a
log record. Values whose scope resolves to ``LogActive.OFF`` are replaced by a
single redaction sentinel so that hidden slots cannot be told apart from each
other; void results are replaced by a distinct void sentinel.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any, Optional, Sequence

from diaglog.core.domain.enums import LogActive
from diaglog.core.domain.errors import ContractViolationError, require
from diaglog.core.domain.policy import resolve

if TYPE_CHECKING:
    from diaglog.core.domain.invocation import Invocation
    from diaglog.core.interfaces.overrides import OverrideLookupProtocol


FILTERED_PARAMETER_SUBSTITUTE = "__FILTERED__"
VOID_SUBSTITUTE = "__VOID__"


@dataclass
class FilteredArguments:
    """Filtered argument list plus whether any argument is loggable."""

    values: list[Any] = field(default_factory=list)
    any_loggable: LogActive = LogActive.OFF


@dataclass
class FilteredReturnValue:
    """Filtered return value plus whether the ended record should be emitted."""

    value: Any
    loggable: LogActive


def filter_parameters(
    parameters: Sequence[tuple[Any, Optional[LogActive]]],
    method_state: LogActive,
) -> FilteredArguments:
    """Filter argument values according to their resolved parameter state.

    ``any_loggable`` starts at ``method_state`` and flips to ON as soon as one
    parameter resolves ON; it never flips back.

    Args:
        parameters: Ordered ``(value, override)`` pairs, one per parameter.
        method_state: Effective method-level state, inherited by parameters
            without an override.

    Returns:
        FilteredArguments in input order, same length as ``parameters``.

    Raises:
        InvalidArgumentError: If ``parameters`` is None.
    """
    require(parameters, "parameters")

    result = FilteredArguments(any_loggable=method_state)
    for value, override in parameters:
        if resolve(override, method_state) == LogActive.ON:
            result.any_loggable = LogActive.ON
            result.values.append(value)
        else:
            result.values.append(FILTERED_PARAMETER_SUBSTITUTE)

    return result


def filter_return_value(
    return_value: Any,
    return_override: Optional[LogActive],
    method_state: LogActive,
    returns_void: bool,
) -> FilteredReturnValue:
    """Filter the return value according to the resolved return state.

    When the return slot resolves OFF the value is redacted but ``loggable``
    is ``method_state``, so the ended record still follows the method-level
    decision.

    Args:
        return_value: Value produced by the real call.
        return_override: Override attached to the return slot, if any.
        method_state: Effective method-level state.
        returns_void: Whether the declared return type is void or
            awaitable-void.

    Returns:
        FilteredReturnValue with the value to log and the loggable state.
    """
    if resolve(return_override, method_state) == LogActive.OFF:
        return FilteredReturnValue(value=FILTERED_PARAMETER_SUBSTITUTE, loggable=method_state)

    value = VOID_SUBSTITUTE if returns_void else return_value
    return FilteredReturnValue(value=value, loggable=LogActive.ON)


def filter_invocation_arguments(
    invocation: "Invocation",
    lookup: "OverrideLookupProtocol",
    method_state: LogActive,
) -> FilteredArguments:
    """Pair an invocation's arguments with their overrides and filter them.

    Raises:
        InvalidArgumentError: If the invocation or its method metadata is None.
        ContractViolationError: If the parameter metadata does not match the
            number of supplied arguments.
    """
    require(invocation, "invocation")
    method = require(invocation.method, "invocation.method")
    arguments = require(invocation.arguments, "invocation.arguments")

    if len(method.parameters) != len(arguments):
        raise ContractViolationError(
            f"Parameter count mismatch for {method.name}: "
            f"{len(method.parameters)} declared, {len(arguments)} supplied",
            details={
                "method_name": method.name,
                "declared": len(method.parameters),
                "supplied": len(arguments),
            },
        )

    pairs = [
        (value, lookup.parameter_override(method, parameter))
        for parameter, value in zip(method.parameters, arguments)
    ]
    return filter_parameters(pairs, method_state)
