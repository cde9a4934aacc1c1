"""Service interfaces (ports) for the application layer.

Protocols define contracts that infrastructure or the host UI must fulfill
(DIP). All types reference application DTOs or domain types only.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol

if TYPE_CHECKING:
    from unified_search.application.dtos.saved_search import SavedSearchCreate
    from unified_search.application.dtos.search import (
        SearchHistoryEntry,
        SearchRequest,
        SearchResultPage,
        SearchSuggestion,
        SuggestionRequest,
    )
    from unified_search.domain.entities.saved_search import SavedSearch


class ISearchGateway(Protocol):
    """Protocol for the backend search engine (request/response contract)."""

    async def search(self, request: SearchRequest) -> SearchResultPage:
        """Execute a search page. Raises SearchRequestError on failure."""

    async def suggest(self, request: SuggestionRequest) -> list[SearchSuggestion]:
        """Return suggestions for partial text. Raises SearchRequestError on failure."""

    async def history(self, limit: int) -> list[SearchHistoryEntry]:
        """Return the user's most recent searches, newest first."""

    async def clear_history(self) -> None:
        """Delete the user's search history."""


class ISavedSearchStore(Protocol):
    """Protocol for saved search persistence, scoped to the signed-in user."""

    async def list_all(self) -> list[SavedSearch]:
        """Return saved searches owned by (or shared with) the user, newest first."""

    async def create(self, data: SavedSearchCreate) -> SavedSearch:
        """Persist a new saved search and return it with its assigned id."""

    async def update(self, saved_search_id: str, data: SavedSearchCreate) -> SavedSearch:
        """Replace a saved search. Raises SavedSearchNotFoundException if missing."""

    async def delete(self, saved_search_id: str) -> None:
        """Delete a saved search. Raises SavedSearchNotFoundException if missing."""


class IAuthContext(Protocol):
    """Opaque sign-in capability."""

    def is_signed_in(self) -> bool:
        """Return True when a user session is established."""


class INavigator(Protocol):
    """Navigation capability provided by the host router."""

    def navigate(self, path: str, new_context: bool = False) -> None:
        """Go to path; new_context opens it in a new tab/window."""


class IAddressBar(Protocol):
    """Address-bar synchronization (replace state without navigation)."""

    def get_param(self, name: str) -> str | None:
        """Return the current value of query parameter name, or None."""

    def replace_param(self, name: str, value: str | None) -> None:
        """Set (or remove when None) a query parameter without navigating."""
