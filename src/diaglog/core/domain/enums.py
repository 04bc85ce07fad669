"""
Core Domain Enums

Defines the logging-policy states and record categories used by the
diagnostic interceptor.
"""

from enum import Enum


class LogActive(str, Enum):
    """Whether the content of a scope may be logged.

    There is deliberately no "inherit" member: a scope inherits from its
    parent when no override is attached to it (``None``).
    """

    ON = "on"
    OFF = "off"


class LogType(str, Enum):
    """Category discriminator attached to every emitted record."""

    DIAGNOSTIC = "diagnostic"
