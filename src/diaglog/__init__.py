"""diaglog package."""

from diaglog.application.interceptor import DiagnosticLoggingInterceptor
from diaglog.application.recorder import InvocationRecorder, RecorderPhase
from diaglog.core.domain.enums import LogActive, LogType
from diaglog.core.domain.errors import (
    ContractViolationError,
    DiagLogError,
    InvalidArgumentError,
    RecorderStateError,
)
from diaglog.core.domain.filters import (
    FILTERED_PARAMETER_SUBSTITUTE,
    VOID_SUBSTITUTE,
    filter_parameters,
    filter_return_value,
)
from diaglog.core.domain.policy import resolve
from diaglog.core.domain.state import DiagnosticLogState
from diaglog.infrastructure.overrides import (
    AttributeOverrideLookup,
    ChainedOverrideLookup,
    DiagnosticLogging,
    RegistryOverrideLookup,
)

__version__ = "0.1.0"

__all__ = [
    "__version__",
    "AttributeOverrideLookup",
    "ChainedOverrideLookup",
    "ContractViolationError",
    "DiagLogError",
    "DiagnosticLogState",
    "DiagnosticLogging",
    "DiagnosticLoggingInterceptor",
    "FILTERED_PARAMETER_SUBSTITUTE",
    "InvalidArgumentError",
    "InvocationRecorder",
    "LogActive",
    "LogType",
    "RecorderPhase",
    "RecorderStateError",
    "RegistryOverrideLookup",
    "VOID_SUBSTITUTE",
    "filter_parameters",
    "filter_return_value",
    "resolve",
]
