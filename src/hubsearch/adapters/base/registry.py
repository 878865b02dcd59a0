"""Adapter Registry — Manages registration and retrieval of entity adapters.

The registry maps each entity type to its adapter class and, once
initialized, to the live adapter instance wired to a record store.
"""

from __future__ import annotations

import logging
from typing import Any

from hubsearch.adapters.base.adapter import AdapterHealth, EntitySearchAdapter
from hubsearch.models.query import EntityType

logger = logging.getLogger(__name__)


class AdapterNotFoundError(Exception):
    """Raised when a requested adapter is not registered."""


class AdapterRegistry:
    """Registry for managing entity adapter instances.

    Example:
        >>> registry = AdapterRegistry()
        >>> registry.register(EntityType.CONTENT, ContentSearchAdapter)
        >>> await registry.initialize_adapter(EntityType.CONTENT, store=posts_store)
        >>> adapter = registry.get(EntityType.CONTENT)
    """

    def __init__(self) -> None:
        self._classes: dict[EntityType, type[EntitySearchAdapter]] = {}
        self._instances: dict[EntityType, EntitySearchAdapter] = {}

    def register(self, entity_type: EntityType, adapter_class: type[EntitySearchAdapter]) -> None:
        """Register an adapter class for an entity type."""
        if entity_type in self._classes:
            logger.warning("Overwriting existing adapter registration: %s", entity_type.value)
        self._classes[entity_type] = adapter_class
        logger.info("Registered adapter: %s", entity_type.value)

    async def initialize_adapter(self, entity_type: EntityType, **kwargs: Any) -> EntitySearchAdapter:
        """Create and initialize an adapter instance.

        Args:
            entity_type: The registered entity type.
            **kwargs: Constructor parameters (``store`` at minimum).

        Returns:
            The initialized adapter instance.

        Raises:
            AdapterNotFoundError: If no adapter class is registered for the type.
        """
        if entity_type not in self._classes:
            raise AdapterNotFoundError(
                f"No adapter registered for '{entity_type.value}'. "
                f"Available adapters: {[t.value for t in self._classes]}"
            )

        adapter = self._classes[entity_type](**kwargs)
        await adapter.initialize()
        self._instances[entity_type] = adapter
        logger.info("Initialized adapter: %s", entity_type.value)
        return adapter

    def add(self, adapter: EntitySearchAdapter) -> None:
        """Install an already-constructed adapter (no initialization)."""
        self._classes.setdefault(adapter.entity_type, type(adapter))
        self._instances[adapter.entity_type] = adapter

    def get(self, entity_type: EntityType) -> EntitySearchAdapter:
        """Get an active adapter instance.

        Raises:
            AdapterNotFoundError: If the adapter is not active.
        """
        if entity_type not in self._instances:
            raise AdapterNotFoundError(
                f"Adapter '{entity_type.value}' is not initialized. Call initialize_adapter() first."
            )
        return self._instances[entity_type]

    def get_adapters(self, entity_types: list[EntityType]) -> list[EntitySearchAdapter]:
        """Active adapters for the requested types, in the requested order.

        Types without an active adapter are skipped with a warning.
        """
        adapters: list[EntitySearchAdapter] = []
        for entity_type in entity_types:
            adapter = self._instances.get(entity_type)
            if adapter is None:
                logger.warning("No active adapter for '%s', skipping", entity_type.value)
                continue
            adapters.append(adapter)
        return adapters

    async def health_check_all(self) -> dict[str, AdapterHealth]:
        """Run health checks on all active adapters."""
        results: dict[str, AdapterHealth] = {}
        for entity_type, adapter in self._instances.items():
            try:
                results[entity_type.value] = await adapter.health_check()
            except Exception as e:
                results[entity_type.value] = AdapterHealth(
                    status="unhealthy",
                    message=str(e),
                )
        return results

    async def shutdown_all(self) -> None:
        """Gracefully shut down all active adapters."""
        for entity_type, adapter in self._instances.items():
            try:
                await adapter.shutdown()
                logger.info("Shut down adapter: %s", entity_type.value)
            except Exception:
                logger.warning("Error shutting down adapter: %s", entity_type.value, exc_info=True)
        self._instances.clear()

    @property
    def registered_adapters(self) -> list[str]:
        """List all registered entity types."""
        return [t.value for t in self._classes]

    @property
    def active_adapters(self) -> list[str]:
        """List all active entity types."""
        return [t.value for t in self._instances]
