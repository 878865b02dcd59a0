"""Entity adapter layer — One search adapter per record type.

Built-in adapters:
  - content: community posts (title + body, ranked by upvotes)
  - group: public communities (name + description, ranked by members)
  - profile: member and mentor profiles (name + bio + skills, ranked by rating)

Subclass ``EntitySearchAdapter`` to make another record type searchable.
"""

from hubsearch.adapters.content.adapter import ContentSearchAdapter
from hubsearch.adapters.group.adapter import GroupSearchAdapter
from hubsearch.adapters.profile.adapter import ProfileSearchAdapter
from hubsearch.models.query import EntityType

ADAPTER_CLASSES = {
    EntityType.CONTENT: ContentSearchAdapter,
    EntityType.GROUP: GroupSearchAdapter,
    EntityType.PROFILE: ProfileSearchAdapter,
}

__all__ = ["ADAPTER_CLASSES", "ContentSearchAdapter", "GroupSearchAdapter", "ProfileSearchAdapter"]
