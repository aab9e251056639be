"""Adapters — bindings for external commands and privileged filesystem ops.

Public re-exports for convenient access.
"""

from ghidra_setup.adapters.base import Adapter, ExecutionContext
from ghidra_setup.adapters.mock import MockAdapter
from ghidra_setup.adapters.registry import AdapterRegistry, default_registry

__all__ = [
    "Adapter",
    "AdapterRegistry",
    "ExecutionContext",
    "MockAdapter",
    "default_registry",
]
