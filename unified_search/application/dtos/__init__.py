"""Application DTOs: transport-agnostic request, result and state types."""

from unified_search.application.dtos.saved_search import SavedSearchCreate
from unified_search.application.dtos.search import (
    SearchHistoryEntry,
    SearchRequest,
    SearchResultItem,
    SearchResultPage,
    SearchSuggestion,
    SuggestionRequest,
)
from unified_search.application.dtos.state import ErrorInfo, SearchSessionState

__all__ = [
    "ErrorInfo",
    "SavedSearchCreate",
    "SearchHistoryEntry",
    "SearchRequest",
    "SearchResultItem",
    "SearchResultPage",
    "SearchSessionState",
    "SearchSuggestion",
    "SuggestionRequest",
]
