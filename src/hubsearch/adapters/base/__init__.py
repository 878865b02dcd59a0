"""Base adapter interface — Shared pipeline and registry for entity adapters."""

from hubsearch.adapters.base.adapter import EntitySearchAdapter
from hubsearch.adapters.base.registry import AdapterRegistry

__all__ = ["AdapterRegistry", "EntitySearchAdapter"]
