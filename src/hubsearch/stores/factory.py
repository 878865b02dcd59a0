"""Store factory — Builds one record store per entity type from settings."""

from __future__ import annotations

import logging

from hubsearch.adapters.base.exceptions import ConfigurationError
from hubsearch.config.settings import StoreSettings
from hubsearch.models.query import EntityType
from hubsearch.stores.base import RecordStore
from hubsearch.stores.http import HttpRecordStore
from hubsearch.stores.memory import InMemoryRecordStore, load_seed_file

logger = logging.getLogger(__name__)


def build_stores(settings: StoreSettings) -> dict[EntityType, RecordStore]:
    """Create the record stores described by ``settings``.

    Args:
        settings: Store configuration.

    Returns:
        Mapping of entity type to an uninitialized record store.

    Raises:
        ConfigurationError: If a collection name is missing or the seed file
            cannot be used.
    """
    missing = [t.value for t in EntityType if t not in settings.collections]
    if missing:
        raise ConfigurationError(f"No collection configured for: {', '.join(missing)}")

    if settings.backend == "http":
        return {
            entity_type: HttpRecordStore(
                base_url=settings.base_url,
                collection=collection,
                api_key=settings.api_key,
                timeout=settings.timeout,
            )
            for entity_type, collection in settings.collections.items()
        }

    seed: dict[str, list[dict]] = {}
    if settings.seed_path:
        try:
            seed = load_seed_file(settings.seed_path)
        except (OSError, ValueError) as e:
            raise ConfigurationError(f"Cannot load seed file {settings.seed_path}: {e}") from e
        logger.info("Loaded seed data from %s", settings.seed_path)

    return {
        entity_type: InMemoryRecordStore(collection, seed.get(entity_type.value, []))
        for entity_type, collection in settings.collections.items()
    }
