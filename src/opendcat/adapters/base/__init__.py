"""Base adapter interface — Abstract classes for catalog search backends."""

from opendcat.adapters.base.adapter import SearchAdapter
from opendcat.adapters.base.registry import AdapterRegistry

__all__ = ["AdapterRegistry", "SearchAdapter"]
