"""Override lookup implementations."""

from diaglog.infrastructure.overrides.attribute_lookup import AttributeOverrideLookup
from diaglog.infrastructure.overrides.chained_lookup import ChainedOverrideLookup
from diaglog.infrastructure.overrides.markers import DiagnosticLogging
from diaglog.infrastructure.overrides.registry_lookup import RegistryOverrideLookup

__all__ = [
    "AttributeOverrideLookup",
    "ChainedOverrideLookup",
    "DiagnosticLogging",
    "RegistryOverrideLookup",
]
