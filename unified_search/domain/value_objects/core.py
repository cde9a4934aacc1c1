"""Domain value objects for unified search.

Value objects are immutable types that represent domain concepts with
self-validation. They have no identity, only value.
"""

from collections.abc import Iterable, Mapping
from dataclasses import dataclass, field, replace
from typing import Union

from unified_search.domain.enums import EntityType

# Extra filter values accepted by the search API (status, priority, date range, ...).
FilterValue = Union[str, int, float, bool, list[str], None]


def normalize_entity_types(
    entity_types: Iterable[EntityType | str] | None,
) -> frozenset[EntityType]:
    """Coerce to a frozenset of EntityType; empty or None collapses to all types.

    Raises:
        ValueError: If a value is not a known entity type.
    """
    if entity_types is None:
        return EntityType.all()
    selected = frozenset(EntityType(value) for value in entity_types)
    return selected or EntityType.all()


@dataclass(frozen=True)
class SearchQuery:
    """Query text plus the entity types and extra filters it applies to.

    entity_types is never empty: an empty selection collapses to the full
    default set at construction.
    """

    text: str
    entity_types: frozenset[EntityType] = field(default_factory=EntityType.all)
    filters: Mapping[str, FilterValue] = field(default_factory=dict)

    def __post_init__(self) -> None:
        if self.text is None:
            raise ValueError("Query text must be a string")
        object.__setattr__(self, "entity_types", normalize_entity_types(self.entity_types))
        object.__setattr__(self, "filters", dict(self.filters or {}))

    @property
    def is_blank(self) -> bool:
        """True when the text is empty or whitespace only."""
        return not self.text.strip()

    def with_text(self, text: str) -> "SearchQuery":
        """Return a copy with different text (same types and filters)."""
        return replace(self, text=text)

    def with_entity_types(self, entity_types: Iterable[EntityType]) -> "SearchQuery":
        """Return a copy restricted to entity_types (empty means all)."""
        return replace(self, entity_types=frozenset(entity_types))

    def sorted_entity_types(self) -> list[EntityType]:
        """Entity types in declaration order (stable for requests and display)."""
        return [entity_type for entity_type in EntityType if entity_type in self.entity_types]


@dataclass(frozen=True)
class ResultKey:
    """Identity of a search result: (entity_type, id).

    Ids are only unique within an entity type, so both parts are required.
    """

    entity_type: EntityType
    id: str

    def __post_init__(self) -> None:
        if not self.id:
            raise ValueError("Result id must be a non-empty string")
