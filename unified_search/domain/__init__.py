"""Domain layer: entities, value objects, enums, and exceptions.

No dependencies on infrastructure or presentation. Used by application
and infrastructure layers.
"""

from unified_search.domain.entities import SavedSearch
from unified_search.domain.enums import EntityType, SearchStatus, SuggestionKind
from unified_search.domain.exceptions import (
    AuthenticationException,
    SavedSearchNotFoundException,
    SavedSearchStoreError,
    SearchRequestError,
    UnifiedSearchException,
    ValidationException,
)
from unified_search.domain.value_objects import FilterValue, ResultKey, SearchQuery

__all__ = [
    # Entities
    "SavedSearch",
    # Enums
    "EntityType",
    "SearchStatus",
    "SuggestionKind",
    # Exceptions
    "AuthenticationException",
    "SavedSearchNotFoundException",
    "SavedSearchStoreError",
    "SearchRequestError",
    "UnifiedSearchException",
    "ValidationException",
    # Value objects
    "FilterValue",
    "ResultKey",
    "SearchQuery",
]
