"""Application services: the search components and their state."""

from unified_search.application.services.entity_filter import EntityFilterState
from unified_search.application.services.query_input import QueryInputCoordinator
from unified_search.application.services.result_navigator import (
    ResultNavigator,
    edit_route_for,
    route_for,
)
from unified_search.application.services.saved_searches import SavedSearchManager
from unified_search.application.services.search_session import (
    SearchExecutionController,
    reduce,
)
from unified_search.application.services.suggestions import SuggestionManager

__all__ = [
    "EntityFilterState",
    "QueryInputCoordinator",
    "ResultNavigator",
    "SavedSearchManager",
    "SearchExecutionController",
    "SuggestionManager",
    "edit_route_for",
    "reduce",
    "route_for",
]
