"""Domain entities.

Pure domain models; no persistence or transport concerns.
"""

from unified_search.domain.entities.saved_search import (
    MAX_DESCRIPTION_LENGTH,
    MAX_NAME_LENGTH,
    MAX_QUERY_LENGTH,
    SavedSearch,
    validate_saved_search_fields,
)

__all__ = [
    "MAX_DESCRIPTION_LENGTH",
    "MAX_NAME_LENGTH",
    "MAX_QUERY_LENGTH",
    "SavedSearch",
    "validate_saved_search_fields",
]
