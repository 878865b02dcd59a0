"""Record stores — Persistence collaborators queried by the entity adapters.

Built-in stores:
  - memory: in-process collections (tests, development, seed files)
  - http: document-store gateway reached over HTTP

Implement ``RecordStore`` to plug in another backend.
"""

from hubsearch.stores.base import OrderBy, RecordStore, StoreConstraint

__all__ = ["OrderBy", "RecordStore", "StoreConstraint"]
