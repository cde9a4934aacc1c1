"""Infrastructure: HTTP gateway, saved search stores, address bar.

Implements the application ports (ISearchGateway, ISavedSearchStore,
IAddressBar).
"""

from unified_search.infrastructure.browser import UrlAddressBar
from unified_search.infrastructure.external.search_api import (
    HttpSavedSearchStore,
    HttpSearchGateway,
)
from unified_search.infrastructure.persistence import InMemorySavedSearchStore

__all__ = [
    "HttpSavedSearchStore",
    "HttpSearchGateway",
    "InMemorySavedSearchStore",
    "UrlAddressBar",
]
