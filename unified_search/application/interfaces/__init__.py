"""Application ports: protocols implemented by infrastructure and the host UI."""

from unified_search.application.interfaces.services import (
    IAddressBar,
    IAuthContext,
    INavigator,
    ISavedSearchStore,
    ISearchGateway,
)

__all__ = [
    "IAddressBar",
    "IAuthContext",
    "INavigator",
    "ISavedSearchStore",
    "ISearchGateway",
]
