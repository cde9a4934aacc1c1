"""Wire schemas for the search API."""

from unified_search.schemas.search import (
    SavedSearchBody,
    SavedSearchQueryBody,
    SavedSearchResponse,
    SearchHistoryEntryResponse,
    SearchRequestBody,
    SearchResponseBody,
    SearchResultItemResponse,
    SearchSuggestionResponse,
    SuggestionsResponseBody,
)

__all__ = [
    "SavedSearchBody",
    "SavedSearchQueryBody",
    "SavedSearchResponse",
    "SearchHistoryEntryResponse",
    "SearchRequestBody",
    "SearchResponseBody",
    "SearchResultItemResponse",
    "SearchSuggestionResponse",
    "SuggestionsResponseBody",
]
