"""Search page: wires input, suggestions, session, filters, saved searches and routing."""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Mapping
from typing import TYPE_CHECKING

from unified_search.application.dtos.search import (
    SearchHistoryEntry,
    SearchResultItem,
    SearchSuggestion,
)
from unified_search.application.dtos.state import SearchSessionState
from unified_search.application.services.entity_filter import EntityFilterState
from unified_search.application.services.query_input import QueryInputCoordinator
from unified_search.application.services.result_navigator import ResultNavigator
from unified_search.application.services.saved_searches import SavedSearchManager
from unified_search.application.services.search_session import SearchExecutionController
from unified_search.application.services.suggestions import SuggestionManager
from unified_search.core.config import Settings, get_settings
from unified_search.core.constants import KEY_ARROW_DOWN, KEY_ARROW_UP, KEY_ENTER, KEY_ESCAPE
from unified_search.domain.enums import EntityType
from unified_search.domain.exceptions import UnifiedSearchException
from unified_search.domain.value_objects.core import FilterValue, SearchQuery

if TYPE_CHECKING:
    from unified_search.application.interfaces.services import (
        IAddressBar,
        IAuthContext,
        INavigator,
        ISavedSearchStore,
        ISearchGateway,
    )
    from unified_search.domain.entities.saved_search import SavedSearch

logger = logging.getLogger(__name__)


class SearchPageCoordinator:
    """Drives one search page session.

    Typing only refreshes suggestions (and, with auto_search, the results
    once the input settles); a search is submitted on Enter, on suggestion
    selection, on applying a saved search, or from the initial address-bar
    query. Every submission mirrors its text into the address bar.
    """

    def __init__(
        self,
        gateway: ISearchGateway,
        saved_search_store: ISavedSearchStore,
        auth: IAuthContext,
        navigator: INavigator,
        address_bar: IAddressBar,
        settings: Settings | None = None,
        default_entity_types: frozenset[EntityType] | None = None,
    ) -> None:
        settings = settings or get_settings()
        self._gateway = gateway
        self._address_bar = address_bar
        self._history_limit = settings.history_limit
        self._query_param = settings.address_bar_query_param
        self._auto_search = settings.auto_search
        self._filters: dict[str, FilterValue] = {}

        self.entity_filter = EntityFilterState(default_entity_types)
        self.query_input = QueryInputCoordinator(settings.debounce_seconds)
        self.suggestions = SuggestionManager(
            gateway,
            min_length=settings.suggestion_min_length,
            limit=settings.suggestion_limit,
        )
        self.session = SearchExecutionController(gateway, page_size=settings.page_size)
        self.saved_searches = SavedSearchManager(saved_search_store, auth)
        self.navigator = ResultNavigator(navigator)

        self._unsubscribers = [
            self.query_input.subscribe(self._on_settled),
            self.suggestions.subscribe(self._on_suggestions_changed),
        ]

    @property
    def state(self) -> SearchSessionState:
        return self.session.state

    @property
    def filters(self) -> dict[str, FilterValue]:
        return dict(self._filters)

    def set_filters(self, filters: Mapping[str, FilterValue]) -> None:
        """Replace the extra filters used by the next submission."""
        self._filters = dict(filters)

    def current_query(self) -> SearchQuery:
        """Query built from the input text, selected entity types and extra filters."""
        return SearchQuery(
            text=self.query_input.text.strip(),
            entity_types=self.entity_filter.selected(),
            filters=self._filters,
        )

    async def start(self) -> SearchSessionState:
        """Seed the input from the address bar and submit when a query is present."""
        initial = self._address_bar.get_param(self._query_param)
        if initial and initial.strip():
            logger.debug("Seeding search from address bar")
            return await self.submit_text(initial)
        return self.state

    def on_text_changed(self, text: str) -> None:
        self.query_input.on_text_changed(text)
        self.session.begin_debounce()

    async def on_key(self, key: str) -> bool:
        """Handle a key from the search input. Returns True if the key was consumed."""
        if key == KEY_ARROW_DOWN:
            self.suggestions.select_next()
        elif key == KEY_ARROW_UP:
            self.suggestions.select_previous()
        elif key == KEY_ENTER:
            if self.suggestions.current_selection() is not None:
                await self.select_suggestion()
            else:
                await self.submit_text()
        elif key == KEY_ESCAPE:
            self.suggestions.clear()
        else:
            return False
        return True

    def on_blur(self) -> None:
        self.suggestions.clear()

    async def submit_text(self, text: str | None = None) -> SearchSessionState:
        """Submit text (default: the current input) immediately, skipping any pending debounce."""
        if text is None:
            text = self.query_input.text
        self.query_input.cancel_pending()
        self.query_input.set_text(text)
        self.suggestions.clear()
        return await self._submit(self.current_query())

    async def select_suggestion(self, index: int | None = None) -> SearchSessionState:
        """Submit a suggestion's text (default: the highlighted one)."""
        if index is None:
            suggestion = self.suggestions.current_selection()
        else:
            suggestion = self.suggestions.suggestion_at(index)
        if suggestion is None:
            return self.state
        return await self.submit_text(suggestion.text)

    def toggle_entity_type(self, entity_type: EntityType) -> frozenset[EntityType]:
        """Toggle a type filter; takes effect at the next submission."""
        return self.entity_filter.toggle(entity_type)

    async def load_more(self) -> SearchSessionState:
        return await self.session.load_more()

    async def retry(self) -> SearchSessionState:
        return await self.session.retry()

    async def save_current(
        self,
        name: str,
        description: str = "",
        is_shared: bool = False,
    ) -> SavedSearch:
        """Save the current query. Raises ValidationException for an empty query."""
        return await self.saved_searches.create(name, description, self.current_query(), is_shared)

    async def list_saved(self) -> list[SavedSearch]:
        return await self.saved_searches.list()

    async def delete_saved(self, saved_search_id: str) -> None:
        await self.saved_searches.delete(saved_search_id)

    async def apply_saved(self, saved: SavedSearch) -> SearchSessionState:
        """Restore a saved search into the input and filters, then submit it."""
        query = self.saved_searches.apply(saved)
        self.entity_filter.set_selected(query.entity_types)
        self._filters = dict(query.filters)
        self.query_input.cancel_pending()
        self.query_input.set_text(query.text)
        self.suggestions.clear()
        return await self._submit(query)

    async def search_history(self, limit: int | None = None) -> list[SearchHistoryEntry]:
        """Recent searches, newest first; [] when the history cannot be loaded."""
        try:
            return await self._gateway.history(limit or self._history_limit)
        except UnifiedSearchException as e:
            logger.warning("Search history unavailable: %s", e.message)
            return []

    async def clear_history(self) -> None:
        """Delete the search history. Raises SearchRequestError on failure."""
        await self._gateway.clear_history()

    def open_result(self, result: SearchResultItem) -> bool:
        return self.navigator.open(result)

    def open_result_in_new_context(self, result: SearchResultItem) -> bool:
        return self.navigator.open_in_new_context(result)

    def teardown(self) -> None:
        """Stop timers, abort fetches and detach listeners."""
        self.session.cancel()
        self.query_input.close()
        for unsubscribe in self._unsubscribers:
            unsubscribe()
        self._unsubscribers.clear()
        self.suggestions.clear()

    async def _submit(self, query: SearchQuery) -> SearchSessionState:
        self._address_bar.replace_param(self._query_param, query.text or None)
        return await self.session.submit(query)

    async def _on_settled(self, text: str) -> None:
        self.session.end_debounce()
        if not text.strip():
            self.suggestions.clear()
            self.session.reset()
            return
        suggestions = self.suggestions.request_suggestions(text, self.entity_filter.selected())
        if not self._auto_search:
            await suggestions
            return
        # Suggestions and results are fetched side by side; neither waits on the other.
        await asyncio.gather(suggestions, self._submit(self.current_query()))

    def _on_suggestions_changed(
        self,
        suggestions: tuple[SearchSuggestion, ...],
        selected_index: int,
    ) -> None:
        self.session.sync_suggestions(suggestions, selected_index)
