"""Adapters — bindings to the filesystem and git.

Public re-exports for convenient access.
"""

from kdcontext.adapters.base import Adapter, ExecutionContext
from kdcontext.adapters.mock import MockAdapter
from kdcontext.adapters.registry import AdapterRegistry, default_registry

__all__ = [
    "Adapter",
    "AdapterRegistry",
    "ExecutionContext",
    "MockAdapter",
    "default_registry",
]
