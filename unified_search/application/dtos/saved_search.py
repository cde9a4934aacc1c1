"""DTOs for saved search persistence."""

from dataclasses import dataclass

from unified_search.domain.value_objects.core import SearchQuery


@dataclass(frozen=True)
class SavedSearchCreate:
    """Fields sent to the store to create or replace a saved search."""

    name: str
    description: str
    query: SearchQuery
    is_shared_with_group: bool = False
