"""REST search API: gateway and saved search store."""

from unified_search.infrastructure.external.search_api.client import (
    HttpSavedSearchStore,
    HttpSearchGateway,
)

__all__ = ["HttpSavedSearchStore", "HttpSearchGateway"]
