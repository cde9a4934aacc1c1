"""Search API wire schemas (camelCase JSON <-> application DTOs)."""

import re
from datetime import datetime
from typing import Any

from pydantic import AliasChoices, BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel

from unified_search.application.dtos.saved_search import SavedSearchCreate
from unified_search.application.dtos.search import (
    SearchHistoryEntry,
    SearchRequest,
    SearchResultItem,
    SearchSuggestion,
)
from unified_search.domain.entities.saved_search import SavedSearch
from unified_search.domain.enums import EntityType, SuggestionKind
from unified_search.domain.value_objects.core import SearchQuery, normalize_entity_types
from unified_search.shared.utils.datetime import ensure_utc

_CAMEL_BOUNDARY = re.compile(r"(?<!^)(?=[A-Z])")


class CamelModel(BaseModel):
    """Base for wire models: camelCase aliases, populate by Python name too."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        extra="ignore",
    )


class SearchRequestBody(CamelModel):
    """POST /search body."""

    query: str
    entity_types: list[str]
    filters: dict[str, Any] = Field(default_factory=dict)
    offset: int = Field(0, ge=0)
    page_size: int = Field(..., ge=1)

    @classmethod
    def from_request(cls, request: SearchRequest) -> "SearchRequestBody":
        return cls(
            query=request.query.text,
            entity_types=[t.value for t in request.query.sorted_entity_types()],
            filters=dict(request.query.filters),
            offset=request.offset,
            page_size=request.page_size,
        )


class SearchResultItemResponse(CamelModel):
    """Single hit as returned by the search API."""

    id: str
    entity_type: str
    title: str = Field(default="", validation_alias=AliasChoices("title", "name"))
    score: float = Field(default=0.0, validation_alias=AliasChoices("score", "searchScore"))
    metadata: dict[str, Any] = Field(default_factory=dict)

    @field_validator("id", mode="before")
    @classmethod
    def coerce_id(cls, value: Any) -> str:
        """Numeric ids are accepted and kept as strings."""
        return str(value)

    def to_item(self) -> SearchResultItem:
        """Convert to a DTO. Raises ValueError for an unknown entity type."""
        return SearchResultItem(
            id=self.id,
            entity_type=EntityType(self.entity_type.lower()),
            title=self.title,
            score=self.score,
            metadata=dict(self.metadata),
        )


class SearchResponseBody(CamelModel):
    """POST /search response.

    Facets arrive either as ready counts (facetCounts) or as the raw facet
    lists (facets: {entityTypes: [...], statuses: [...]}), counted by length.
    """

    items: list[SearchResultItemResponse] = Field(default_factory=list)
    total_count: int = Field(0, ge=0)
    execution_time_ms: float = 0.0
    facet_counts: dict[str, int] = Field(default_factory=dict)
    facets: dict[str, list[Any] | None] = Field(default_factory=dict)

    def resolved_facet_counts(self) -> dict[str, int]:
        if self.facet_counts:
            return dict(self.facet_counts)
        return {name: len(values or []) for name, values in self.facets.items()}


class SearchSuggestionResponse(CamelModel):
    """Suggestion entry; accepts both text/kind/score and term/type/confidence."""

    text: str = Field(validation_alias=AliasChoices("text", "term"))
    kind: SuggestionKind = Field(
        default=SuggestionKind.AUTOCOMPLETE,
        validation_alias=AliasChoices("kind", "type"),
    )
    entity_type: str | None = None
    score: float = Field(default=0.0, validation_alias=AliasChoices("score", "confidence"))

    @field_validator("kind", mode="before")
    @classmethod
    def normalize_kind(cls, value: Any) -> Any:
        """Map 'DidYouMean' / 'didYouMean' / 'did_you_mean' to SuggestionKind values."""
        if isinstance(value, str):
            snake = _CAMEL_BOUNDARY.sub("_", value).lower()
            if snake in {kind.value for kind in SuggestionKind}:
                return snake
            return SuggestionKind.AUTOCOMPLETE
        return value

    def to_suggestion(self) -> SearchSuggestion:
        entity_type = None
        if self.entity_type and self.entity_type.lower() in EntityType.values():
            entity_type = EntityType(self.entity_type.lower())
        return SearchSuggestion(
            text=self.text,
            kind=self.kind,
            entity_type=entity_type,
            score=self.score,
        )


class SuggestionsResponseBody(CamelModel):
    """GET /search/suggestions response."""

    suggestions: list[SearchSuggestionResponse] = Field(default_factory=list)


class SearchHistoryEntryResponse(CamelModel):
    """GET /search/history entry."""

    id: str
    query: str = Field(validation_alias=AliasChoices("query", "searchQuery", "searchTerm"))
    entity_types: list[str] = Field(default_factory=list)
    result_count: int = Field(default=0, validation_alias=AliasChoices("resultCount", "resultsCount"))
    searched_at: datetime | None = Field(
        default=None,
        validation_alias=AliasChoices("searchedAt", "createdAt", "searchedDate"),
    )

    @field_validator("id", mode="before")
    @classmethod
    def coerce_id(cls, value: Any) -> str:
        return str(value)

    def to_entry(self) -> SearchHistoryEntry:
        known = [value for value in self.entity_types if value in EntityType.values()]
        return SearchHistoryEntry(
            id=self.id,
            query=self.query,
            entity_types=normalize_entity_types(EntityType(value) for value in known),
            result_count=self.result_count,
            searched_at=ensure_utc(self.searched_at),
        )


class SavedSearchQueryBody(CamelModel):
    """Stored query part of a saved search."""

    text: str
    entity_types: list[str] = Field(default_factory=list)
    filters: dict[str, Any] = Field(default_factory=dict)

    @classmethod
    def from_query(cls, query: SearchQuery) -> "SavedSearchQueryBody":
        return cls(
            text=query.text,
            entity_types=[t.value for t in query.sorted_entity_types()],
            filters=dict(query.filters),
        )

    def to_query(self) -> SearchQuery:
        known = [value for value in self.entity_types if value in EntityType.values()]
        return SearchQuery(
            text=self.text,
            entity_types=frozenset(EntityType(value) for value in known),
            filters=self.filters,
        )


class SavedSearchBody(CamelModel):
    """POST/PUT /saved-searches body."""

    name: str
    description: str = ""
    query: SavedSearchQueryBody
    is_shared_with_group: bool = False

    @classmethod
    def from_create(cls, data: SavedSearchCreate) -> "SavedSearchBody":
        return cls(
            name=data.name,
            description=data.description,
            query=SavedSearchQueryBody.from_query(data.query),
            is_shared_with_group=data.is_shared_with_group,
        )


class SavedSearchResponse(SavedSearchBody):
    """Saved search as returned by the API."""

    id: str
    description: str | None = ""
    created_at: datetime | None = None

    @field_validator("id", mode="before")
    @classmethod
    def coerce_id(cls, value: Any) -> str:
        return str(value)

    def to_entity(self) -> SavedSearch:
        return SavedSearch(
            id=self.id,
            name=self.name,
            description=self.description or "",
            query=self.query.to_query(),
            is_shared_with_group=self.is_shared_with_group,
            created_at=ensure_utc(self.created_at),
        )
