"""Search execution controller and its pure state transitions.

SearchSessionState is only ever replaced by reduce(state, event). The
controller issues gateway requests tagged with the current generation and
feeds the outcome back as events; reduce() discards anything whose
generation no longer matches or that arrives after cancel().
"""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Callable, Iterable
from dataclasses import dataclass, replace
from typing import TYPE_CHECKING

from unified_search.application.dtos.search import (
    SearchRequest,
    SearchResultItem,
    SearchResultPage,
    SearchSuggestion,
)
from unified_search.application.dtos.state import ErrorInfo, SearchSessionState
from unified_search.core.config import get_settings
from unified_search.core.constants import NO_SELECTION
from unified_search.domain.enums import SearchStatus
from unified_search.domain.exceptions import UnifiedSearchException
from unified_search.domain.value_objects.core import ResultKey, SearchQuery

if TYPE_CHECKING:
    from unified_search.application.interfaces.services import ISearchGateway

logger = logging.getLogger(__name__)

StateListener = Callable[[SearchSessionState], None]


# ---- Events ----


@dataclass(frozen=True)
class QuerySubmitted:
    query: SearchQuery


@dataclass(frozen=True)
class DebounceStarted:
    pass


@dataclass(frozen=True)
class DebounceSettled:
    pass


@dataclass(frozen=True)
class LoadMoreStarted:
    pass


@dataclass(frozen=True)
class PageLoaded:
    generation: int
    page: SearchResultPage
    append: bool = False


@dataclass(frozen=True)
class FetchFailed:
    generation: int
    error: ErrorInfo


@dataclass(frozen=True)
class SuggestionsSynced:
    suggestions: tuple[SearchSuggestion, ...]
    selected_index: int = NO_SELECTION


@dataclass(frozen=True)
class Cancelled:
    pass


@dataclass(frozen=True)
class SessionReset:
    pass


SessionEvent = (
    QuerySubmitted
    | DebounceStarted
    | DebounceSettled
    | LoadMoreStarted
    | PageLoaded
    | FetchFailed
    | SuggestionsSynced
    | Cancelled
    | SessionReset
)


# ---- Reducer ----


def dedupe_results(
    items: Iterable[SearchResultItem],
    existing: Iterable[SearchResultItem] = (),
) -> tuple[SearchResultItem, ...]:
    """Return items whose (entity_type, id) is not in existing, first occurrence wins."""
    seen: set[ResultKey] = {item.key for item in existing}
    unique: list[SearchResultItem] = []
    for item in items:
        if item.key in seen:
            continue
        seen.add(item.key)
        unique.append(item)
    return tuple(unique)


def _is_current(state: SearchSessionState, generation: int) -> bool:
    return state.active and generation == state.generation


def _settled_status(state: SearchSessionState) -> SearchStatus:
    if state.error is not None:
        return SearchStatus.ERROR
    if state.generation and not state.query.is_blank:
        return SearchStatus.SUCCESS
    return SearchStatus.IDLE


def reduce(state: SearchSessionState, event: SessionEvent) -> SearchSessionState:
    """Apply event to state and return the next snapshot (state is never mutated)."""
    if isinstance(event, QuerySubmitted):
        return replace(
            state,
            query=event.query,
            generation=state.generation + 1,
            status=SearchStatus.IDLE if event.query.is_blank else SearchStatus.FETCHING,
            results=(),
            total_count=0,
            next_offset=None,
            execution_time_ms=0.0,
            facet_counts={},
            error=None,
            active=True,
        )

    if isinstance(event, DebounceStarted):
        if state.status in (SearchStatus.IDLE, SearchStatus.SUCCESS, SearchStatus.ERROR):
            return replace(state, status=SearchStatus.DEBOUNCING)
        return state

    if isinstance(event, DebounceSettled):
        if state.status == SearchStatus.DEBOUNCING:
            return replace(state, status=_settled_status(state))
        return state

    if isinstance(event, LoadMoreStarted):
        if state.has_more and state.active:
            return replace(state, status=SearchStatus.LOADING_MORE)
        return state

    if isinstance(event, PageLoaded):
        expected = SearchStatus.LOADING_MORE if event.append else SearchStatus.FETCHING
        if not _is_current(state, event.generation) or state.status != expected:
            return state
        page = event.page
        if event.append:
            added = dedupe_results(page.items, state.results)
            results = state.results + added
            # A page with nothing new means the backend has no more to give.
            total_count = max(page.total_count, len(results)) if added else len(results)
            next_offset = page.next_offset if added else None
            facet_counts = dict(page.facet_counts) if page.facet_counts else state.facet_counts
        else:
            results = dedupe_results(page.items)
            total_count = max(page.total_count, len(results))
            next_offset = page.next_offset
            facet_counts = dict(page.facet_counts)
        return replace(
            state,
            status=SearchStatus.SUCCESS,
            results=results,
            total_count=total_count,
            next_offset=next_offset,
            execution_time_ms=page.execution_time_ms,
            facet_counts=facet_counts,
            error=None,
        )

    if isinstance(event, FetchFailed):
        if not _is_current(state, event.generation) or not state.status.is_in_flight:
            return state
        return replace(
            state,
            status=SearchStatus.ERROR,
            results=(),
            total_count=0,
            next_offset=None,
            facet_counts={},
            error=event.error,
        )

    if isinstance(event, SuggestionsSynced):
        return replace(
            state,
            suggestions=tuple(event.suggestions),
            selected_suggestion_index=event.selected_index,
        )

    if isinstance(event, Cancelled):
        status = state.status
        if status == SearchStatus.FETCHING:
            status = SearchStatus.IDLE
        elif status == SearchStatus.LOADING_MORE:
            status = SearchStatus.SUCCESS
        return replace(state, status=status, active=False)

    if isinstance(event, SessionReset):
        return SearchSessionState(generation=state.generation + 1)

    raise TypeError(f"Unknown session event: {event!r}")


# ---- Controller ----


class SearchExecutionController:
    """Owns the authoritative SearchSessionState.

    Only responses tagged with the current generation are applied, so the
    visible results always belong to the latest submission regardless of
    network arrival order. A superseded fetch is left to finish and
    discarded; cancel() aborts in-flight fetches outright.
    """

    def __init__(self, gateway: "ISearchGateway", page_size: int | None = None) -> None:
        self._gateway = gateway
        self._page_size = get_settings().page_size if page_size is None else page_size
        if self._page_size <= 0:
            raise ValueError("page_size must be positive")
        self._state = SearchSessionState()
        self._listeners: list[StateListener] = []
        self._inflight: set[asyncio.Future] = set()
        self._aborted: set[asyncio.Future] = set()

    @property
    def state(self) -> SearchSessionState:
        return self._state

    @property
    def page_size(self) -> int:
        return self._page_size

    def subscribe(self, listener: StateListener) -> Callable[[], None]:
        """Register a state listener. Returns a function that unsubscribes it."""
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    async def submit(self, query: SearchQuery) -> SearchSessionState:
        """Start a new generation for query and fetch its first page.

        Whitespace-only text resets to Idle without a fetch. Failures end
        in status Error; they are never raised to the caller.
        """
        self._dispatch(QuerySubmitted(query))
        if query.is_blank:
            return self._state
        request = SearchRequest(
            query=query,
            offset=0,
            page_size=self._page_size,
            generation=self._state.generation,
        )
        logger.debug("Submitting search generation %s", request.generation)
        await self._fetch(request, append=False)
        return self._state

    async def load_more(self) -> SearchSessionState:
        """Fetch the next page for the current generation; no-op unless more results exist.

        The request starts at the server-reported next_offset of the last page,
        or at len(results) when the gateway did not report one.
        """
        state = self._state
        if not state.active or not state.has_more:
            return state
        self._dispatch(LoadMoreStarted())
        request = SearchRequest(
            query=state.query,
            offset=len(state.results) if state.next_offset is None else state.next_offset,
            page_size=self._page_size,
            generation=state.generation,
        )
        await self._fetch(request, append=True)
        return self._state

    async def retry(self) -> SearchSessionState:
        """Resubmit the current query after a failure (new generation)."""
        if self._state.status != SearchStatus.ERROR:
            return self._state
        return await self.submit(self._state.query)

    def cancel(self) -> None:
        """Mark the session inactive and abort in-flight fetches."""
        self._dispatch(Cancelled())
        for task in list(self._inflight):
            self._aborted.add(task)
            task.cancel()

    def reset(self) -> None:
        """Return to a clean Idle session; pending responses become stale."""
        self._dispatch(SessionReset())

    def begin_debounce(self) -> None:
        self._dispatch(DebounceStarted())

    def end_debounce(self) -> None:
        self._dispatch(DebounceSettled())

    def sync_suggestions(
        self,
        suggestions: Iterable[SearchSuggestion],
        selected_index: int = NO_SELECTION,
    ) -> None:
        """Mirror the suggestion manager's list and highlight into the snapshot."""
        self._dispatch(SuggestionsSynced(tuple(suggestions), selected_index))

    async def _fetch(self, request: SearchRequest, append: bool) -> None:
        task = asyncio.ensure_future(self._gateway.search(request))
        self._inflight.add(task)
        try:
            page = await task
        except asyncio.CancelledError:
            if task in self._aborted:
                logger.debug("Search generation %s aborted", request.generation)
                return
            raise
        except UnifiedSearchException as e:
            error = ErrorInfo(
                message=e.message,
                error_code=e.error_code,
                retryable=getattr(e, "retryable", True),
            )
            self._fail(request.generation, error)
            return
        except Exception as e:
            logger.exception("Unexpected search failure for generation %s", request.generation)
            self._fail(
                request.generation,
                ErrorInfo(message=str(e) or "Search failed", error_code="UNEXPECTED_ERROR"),
            )
            return
        finally:
            self._inflight.discard(task)
            self._aborted.discard(task)

        if not _is_current(self._state, request.generation):
            logger.debug(
                "Discarding stale page for generation %s (current %s, active=%s)",
                request.generation,
                self._state.generation,
                self._state.active,
            )
            return
        self._dispatch(PageLoaded(request.generation, page, append))

    def _fail(self, generation: int, error: ErrorInfo) -> None:
        if not _is_current(self._state, generation):
            logger.debug("Discarding stale failure for generation %s", generation)
            return
        logger.warning("Search generation %s failed: %s", generation, error.message)
        self._dispatch(FetchFailed(generation, error))

    def _dispatch(self, event: SessionEvent) -> None:
        new_state = reduce(self._state, event)
        if new_state is self._state:
            return
        self._state = new_state
        for listener in list(self._listeners):
            listener(new_state)
