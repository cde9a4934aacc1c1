"""Suggestion manager: sequenced suggestion fetches and keyboard selection.

Each fetch is tagged with a local sequence number; only the response to the
latest issued request is applied, so out-of-order network responses never
make the list flicker back to an older query.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Iterable
from typing import TYPE_CHECKING

from unified_search.application.dtos.search import SearchSuggestion, SuggestionRequest
from unified_search.application.dtos.state import ErrorInfo
from unified_search.core.config import get_settings
from unified_search.core.constants import NO_SELECTION
from unified_search.domain.enums import EntityType
from unified_search.domain.exceptions import UnifiedSearchException
from unified_search.domain.value_objects.core import normalize_entity_types

if TYPE_CHECKING:
    from unified_search.application.interfaces.services import ISearchGateway

logger = logging.getLogger(__name__)

SuggestionListener = Callable[[tuple[SearchSuggestion, ...], int], None]


class SuggestionManager:
    """Owns the visible suggestion list, its selection index and the sequence counter."""

    def __init__(
        self,
        gateway: "ISearchGateway",
        min_length: int | None = None,
        limit: int | None = None,
    ) -> None:
        settings = get_settings()
        self._gateway = gateway
        self._min_length = settings.suggestion_min_length if min_length is None else min_length
        self._limit = settings.suggestion_limit if limit is None else limit
        self._sequence = 0
        self._suggestions: tuple[SearchSuggestion, ...] = ()
        self._selected_index = NO_SELECTION
        self._last_error: ErrorInfo | None = None
        self._listeners: list[SuggestionListener] = []

    @property
    def suggestions(self) -> tuple[SearchSuggestion, ...]:
        return self._suggestions

    @property
    def selected_index(self) -> int:
        return self._selected_index

    @property
    def sequence(self) -> int:
        """Latest issued sequence number."""
        return self._sequence

    @property
    def last_error(self) -> ErrorInfo | None:
        return self._last_error

    def subscribe(self, listener: SuggestionListener) -> Callable[[], None]:
        """Register a listener for (suggestions, selected_index) changes."""
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    async def request_suggestions(
        self,
        query: str,
        entity_types: Iterable[EntityType] | None = None,
    ) -> bool:
        """Fetch suggestions for query. Returns True if the response was applied.

        Text shorter than the minimum length clears the list without a
        fetch. Failures clear the list and are recorded in last_error; they
        are never raised.
        """
        self._sequence += 1
        sequence = self._sequence
        text = query.strip()
        if len(text) < self._min_length:
            self._apply([], error=None)
            return False

        request = SuggestionRequest(
            text=text,
            entity_types=normalize_entity_types(entity_types),
            limit=self._limit,
            sequence=sequence,
        )
        try:
            suggestions = await self._gateway.suggest(request)
        except UnifiedSearchException as e:
            return self._fail(sequence, e.message, e.error_code, getattr(e, "retryable", True))
        except Exception as e:
            logger.exception("Unexpected suggestion failure for sequence %s", sequence)
            return self._fail(sequence, str(e) or "Suggestion request failed", "UNEXPECTED_ERROR", True)

        if sequence != self._sequence:
            logger.debug(
                "Discarding stale suggestions (sequence %s, latest %s)", sequence, self._sequence
            )
            return False
        self._apply(suggestions[: self._limit], error=None)
        return True

    def select_next(self) -> int:
        """Move the highlight down, wrapping to the first entry."""
        if not self._suggestions:
            return self._selected_index
        if self._selected_index < len(self._suggestions) - 1:
            self._selected_index += 1
        else:
            self._selected_index = 0
        self._notify()
        return self._selected_index

    def select_previous(self) -> int:
        """Move the highlight up, wrapping to the last entry."""
        if not self._suggestions:
            return self._selected_index
        if self._selected_index > 0:
            self._selected_index -= 1
        else:
            self._selected_index = len(self._suggestions) - 1
        self._notify()
        return self._selected_index

    def current_selection(self) -> SearchSuggestion | None:
        """Return the highlighted suggestion, or None when nothing is highlighted."""
        if 0 <= self._selected_index < len(self._suggestions):
            return self._suggestions[self._selected_index]
        return None

    def suggestion_at(self, index: int) -> SearchSuggestion | None:
        if 0 <= index < len(self._suggestions):
            return self._suggestions[index]
        return None

    def clear(self) -> None:
        """Clear list and highlight (Escape/blur); in-flight responses are discarded."""
        self._sequence += 1
        self._apply([], error=None)

    def _fail(self, sequence: int, message: str, error_code: str, retryable: bool) -> bool:
        if sequence != self._sequence:
            logger.debug("Discarding stale suggestion failure (sequence %s)", sequence)
            return False
        logger.warning("Suggestion request failed: %s", message)
        self._apply([], error=ErrorInfo(message=message, error_code=error_code, retryable=retryable))
        return False

    def _apply(self, suggestions: list[SearchSuggestion], error: ErrorInfo | None) -> None:
        self._suggestions = tuple(suggestions)
        self._selected_index = NO_SELECTION
        self._last_error = error
        self._notify()

    def _notify(self) -> None:
        for listener in list(self._listeners):
            listener(self._suggestions, self._selected_index)
