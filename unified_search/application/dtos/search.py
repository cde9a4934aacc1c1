"""DTOs for search requests, results and suggestions (no dependency on transport)."""

from dataclasses import dataclass, field
from datetime import datetime
from typing import Any

from unified_search.domain.enums import EntityType, SuggestionKind
from unified_search.domain.value_objects.core import ResultKey, SearchQuery


@dataclass(frozen=True)
class SearchResultItem:
    """Single search hit. Identity is (entity_type, id)."""

    id: str
    entity_type: EntityType
    title: str
    score: float = 0.0
    metadata: dict[str, Any] = field(default_factory=dict, compare=False)

    @property
    def key(self) -> ResultKey:
        return ResultKey(self.entity_type, self.id)


@dataclass(frozen=True)
class SearchResultPage:
    """One page of results as returned by the search gateway.

    next_offset is the server offset of the following page (None when there
    is nothing after this one). facet_counts maps a facet name (entityTypes,
    statuses, ...) to the number of values it offers.
    """

    items: list[SearchResultItem]
    total_count: int
    execution_time_ms: float = 0.0
    next_offset: int | None = None
    facet_counts: dict[str, int] = field(default_factory=dict)


@dataclass(frozen=True)
class SearchSuggestion:
    """Candidate completion or related term offered while typing."""

    text: str
    kind: SuggestionKind = SuggestionKind.AUTOCOMPLETE
    entity_type: EntityType | None = None
    score: float = 0.0


@dataclass(frozen=True)
class SearchRequest:
    """Search request tagged with the session generation that issued it."""

    query: SearchQuery
    offset: int
    page_size: int
    generation: int


@dataclass(frozen=True)
class SuggestionRequest:
    """Suggestion request tagged with the suggestion sequence number."""

    text: str
    entity_types: frozenset[EntityType]
    limit: int
    sequence: int


@dataclass(frozen=True)
class SearchHistoryEntry:
    """A past search recorded by the backend for the signed-in user."""

    id: str
    query: str
    entity_types: frozenset[EntityType] = field(default_factory=EntityType.all)
    result_count: int = 0
    searched_at: datetime | None = None
