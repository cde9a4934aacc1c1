"""Application layer: DTOs, interfaces, services, use cases.

Depends only on domain and protocol definitions (DIP).
Infrastructure implements the interfaces (search gateway, saved search stores).
"""

from unified_search.application.interfaces import (
    IAddressBar,
    IAuthContext,
    INavigator,
    ISavedSearchStore,
    ISearchGateway,
)
from unified_search.application.services import (
    EntityFilterState,
    QueryInputCoordinator,
    ResultNavigator,
    SavedSearchManager,
    SearchExecutionController,
    SuggestionManager,
)
from unified_search.application.use_cases import SearchPageCoordinator

__all__ = [
    "EntityFilterState",
    "IAddressBar",
    "IAuthContext",
    "INavigator",
    "ISavedSearchStore",
    "ISearchGateway",
    "QueryInputCoordinator",
    "ResultNavigator",
    "SavedSearchManager",
    "SearchExecutionController",
    "SearchPageCoordinator",
    "SuggestionManager",
]
