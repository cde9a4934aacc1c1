"""Test doubles and builders shared by unit and integration tests."""

import asyncio

from unified_search.application.dtos.search import (
    SearchHistoryEntry,
    SearchRequest,
    SearchResultItem,
    SearchResultPage,
    SearchSuggestion,
    SuggestionRequest,
)
from unified_search.domain.enums import EntityType


class ControlledGateway:
    """ISearchGateway whose calls block until the test resolves them."""

    def __init__(self) -> None:
        self.search_calls: list[SearchRequest] = []
        self.suggest_calls: list[SuggestionRequest] = []
        self._search_futures: list[asyncio.Future] = []
        self._suggest_futures: list[asyncio.Future] = []
        self.history_entries: list[SearchHistoryEntry] = []
        self.history_error: Exception | None = None
        self.history_limits: list[int] = []
        self.clear_history_calls = 0

    async def search(self, request: SearchRequest) -> SearchResultPage:
        future = asyncio.get_running_loop().create_future()
        self.search_calls.append(request)
        self._search_futures.append(future)
        return await future

    async def suggest(self, request: SuggestionRequest) -> list[SearchSuggestion]:
        future = asyncio.get_running_loop().create_future()
        self.suggest_calls.append(request)
        self._suggest_futures.append(future)
        return await future

    async def history(self, limit: int) -> list[SearchHistoryEntry]:
        self.history_limits.append(limit)
        if self.history_error is not None:
            raise self.history_error
        return self.history_entries[:limit]

    async def clear_history(self) -> None:
        self.clear_history_calls += 1
        self.history_entries = []

    def resolve_search(self, index: int, page: SearchResultPage) -> None:
        if not self._search_futures[index].done():
            self._search_futures[index].set_result(page)

    def fail_search(self, index: int, error: Exception) -> None:
        if not self._search_futures[index].done():
            self._search_futures[index].set_exception(error)

    def resolve_suggest(self, index: int, suggestions: list[SearchSuggestion]) -> None:
        if not self._suggest_futures[index].done():
            self._suggest_futures[index].set_result(suggestions)

    def fail_suggest(self, index: int, error: Exception) -> None:
        if not self._suggest_futures[index].done():
            self._suggest_futures[index].set_exception(error)


class FakeAuth:
    def __init__(self, signed_in: bool = True) -> None:
        self.signed_in = signed_in

    def is_signed_in(self) -> bool:
        return self.signed_in


def make_item(
    item_id: str,
    entity_type: EntityType = EntityType.TASKS,
    title: str = "",
) -> SearchResultItem:
    return SearchResultItem(id=item_id, entity_type=entity_type, title=title or f"Item {item_id}")


def make_page(
    ids: list[str],
    total_count: int,
    entity_type: EntityType = EntityType.TASKS,
    execution_time_ms: float = 5.0,
    next_offset: int | None = None,
    facet_counts: dict[str, int] | None = None,
) -> SearchResultPage:
    return SearchResultPage(
        items=[make_item(item_id, entity_type) for item_id in ids],
        total_count=total_count,
        execution_time_ms=execution_time_ms,
        next_offset=next_offset,
        facet_counts=facet_counts or {},
    )


async def settle(rounds: int = 5) -> None:
    """Let scheduled tasks run up to their next suspension point."""
    for _ in range(rounds):
        await asyncio.sleep(0)
