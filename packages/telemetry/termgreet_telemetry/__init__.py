"""System fact providers for the info column."""

from .models import BatteryFacts, DiskFacts, MemoryFacts, PackageFacts, SystemFacts
from .provider import FactsProvider, facts_to_values, format_uptime

__all__ = [
    "BatteryFacts",
    "DiskFacts",
    "FactsProvider",
    "MemoryFacts",
    "PackageFacts",
    "SystemFacts",
    "facts_to_values",
    "format_uptime",
]
