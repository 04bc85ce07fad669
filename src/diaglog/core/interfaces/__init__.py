"""
Core Protocol Interfaces

Contracts for the collaborators of the diagnostic interceptor:

    - LoggerProtocol: the log sink (structlog bound loggers conform)
    - OverrideLookupProtocol: per-scope LogActive overrides
"""

from diaglog.core.interfaces.logging import LoggerProtocol
from diaglog.core.interfaces.overrides import OverrideLookupProtocol

__all__ = [
    "LoggerProtocol",
    "OverrideLookupProtocol",
]
