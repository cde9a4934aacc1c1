"""Domain value objects and shared value types."""

from unified_search.domain.value_objects.core import (
    FilterValue,
    ResultKey,
    SearchQuery,
    normalize_entity_types,
)

__all__ = [
    "FilterValue",
    "ResultKey",
    "SearchQuery",
    "normalize_entity_types",
]
