"""SearchPageCoordinator: wiring of input, suggestions, session, filters and routing."""

import asyncio

import pytest

from tests.helpers import ControlledGateway, make_item, make_page, settle
from unified_search.application.dtos.search import SearchHistoryEntry, SearchSuggestion
from unified_search.application.use_cases.search_page import SearchPageCoordinator
from unified_search.core.config import Settings
from unified_search.domain.enums import EntityType, SearchStatus
from unified_search.domain.exceptions import SearchRequestError, ValidationException
from unified_search.infrastructure.browser.address_bar import UrlAddressBar

WAIT = 0.05


@pytest.fixture
def coordinator(gateway, store, auth, navigator, address_bar, settings) -> SearchPageCoordinator:
    page = SearchPageCoordinator(
        gateway=gateway,
        saved_search_store=store,
        auth=auth,
        navigator=navigator,
        address_bar=address_bar,
        settings=settings,
    )
    yield page
    page.teardown()


async def _load_suggestions(
    coordinator: SearchPageCoordinator,
    gateway: ControlledGateway,
    text: str,
    *suggestions: str,
) -> None:
    coordinator.on_text_changed(text)
    await asyncio.sleep(WAIT)
    gateway.resolve_suggest(
        len(gateway.suggest_calls) - 1, [SearchSuggestion(s) for s in suggestions]
    )
    await coordinator.query_input.drain()


async def test_start_seeds_and_submits_from_address_bar(
    gateway, store, auth, navigator, settings
) -> None:
    address_bar = UrlAddressBar("/search?q=chores")
    coordinator = SearchPageCoordinator(gateway, store, auth, navigator, address_bar, settings)

    task = asyncio.create_task(coordinator.start())
    await settle()
    assert gateway.search_calls[0].query.text == "chores"
    gateway.resolve_search(0, make_page(["1"], total_count=1))
    state = await task

    assert state.status == SearchStatus.SUCCESS
    assert coordinator.query_input.text == "chores"
    coordinator.teardown()


async def test_start_without_query_does_nothing(coordinator, gateway) -> None:
    state = await coordinator.start()

    assert state.status == SearchStatus.IDLE
    assert gateway.search_calls == []


async def test_typing_fetches_suggestions_but_not_results(coordinator, gateway) -> None:
    coordinator.on_text_changed("cho")
    assert coordinator.state.status == SearchStatus.DEBOUNCING

    await asyncio.sleep(WAIT)
    assert len(gateway.suggest_calls) == 1
    assert gateway.suggest_calls[0].text == "cho"

    gateway.resolve_suggest(0, [SearchSuggestion("chores"), SearchSuggestion("chocolate")])
    await coordinator.query_input.drain()

    assert gateway.search_calls == []
    assert coordinator.state.status == SearchStatus.IDLE
    assert [s.text for s in coordinator.state.suggestions] == ["chores", "chocolate"]


async def test_suggestion_selection_bypasses_pending_debounce(
    coordinator, gateway, address_bar
) -> None:
    """Selecting a suggestion while a debounce is pending submits at once and cancels it."""
    await _load_suggestions(coordinator, gateway, "cho", "chores", "chocolate")

    coordinator.on_text_changed("chor")
    assert coordinator.query_input.is_debouncing
    assert await coordinator.on_key("ArrowDown") is True
    assert coordinator.state.selected_suggestion_index == 0

    task = asyncio.create_task(coordinator.on_key("Enter"))
    await settle()

    assert not coordinator.query_input.is_debouncing
    assert gateway.search_calls[0].query.text == "chores"
    assert address_bar.get_param("q") == "chores"
    assert coordinator.state.suggestions == ()

    gateway.resolve_search(0, make_page(["1"], total_count=1))
    await task
    await asyncio.sleep(WAIT)

    assert len(gateway.suggest_calls) == 1
    assert coordinator.state.status == SearchStatus.SUCCESS


async def test_select_suggestion_by_index(coordinator, gateway) -> None:
    await _load_suggestions(coordinator, gateway, "cho", "chores", "chocolate")

    task = asyncio.create_task(coordinator.select_suggestion(1))
    await settle()

    assert gateway.search_calls[0].query.text == "chocolate"
    gateway.resolve_search(0, make_page([], total_count=0))
    await task


async def test_enter_without_selection_submits_input(coordinator, gateway) -> None:
    coordinator.on_text_changed("laundry")
    task = asyncio.create_task(coordinator.on_key("Enter"))
    await settle()

    assert gateway.search_calls[0].query.text == "laundry"
    gateway.resolve_search(0, make_page(["1"], total_count=1))
    await task


async def test_escape_clears_suggestions(coordinator, gateway) -> None:
    await _load_suggestions(coordinator, gateway, "cho", "chores")
    await coordinator.on_key("ArrowDown")

    assert await coordinator.on_key("Escape") is True

    assert coordinator.state.suggestions == ()
    assert coordinator.state.selected_suggestion_index == -1


async def test_unhandled_key_is_not_consumed(coordinator) -> None:
    assert await coordinator.on_key("Tab") is False


async def test_blur_clears_suggestions(coordinator, gateway) -> None:
    await _load_suggestions(coordinator, gateway, "cho", "chores")

    coordinator.on_blur()

    assert coordinator.suggestions.suggestions == ()


async def test_blank_settle_resets_session(coordinator, gateway, address_bar) -> None:
    task = asyncio.create_task(coordinator.submit_text("chores"))
    await settle()
    gateway.resolve_search(0, make_page(["1"], total_count=1))
    await task

    coordinator.on_text_changed("   ")
    await asyncio.sleep(WAIT)
    await coordinator.query_input.drain()

    assert coordinator.state.status == SearchStatus.IDLE
    assert coordinator.state.results == ()
    assert gateway.suggest_calls == []


async def test_toggle_applies_at_next_submission(coordinator, gateway) -> None:
    coordinator.toggle_entity_type(EntityType.TASKS)
    assert gateway.search_calls == []

    task = asyncio.create_task(coordinator.submit_text("x"))
    await settle()

    assert EntityType.TASKS not in gateway.search_calls[0].query.entity_types
    gateway.resolve_search(0, make_page([], total_count=0))
    await task


async def test_save_apply_and_resubmit_reproduce_request(coordinator, gateway) -> None:
    """Saved {chores, Tasks+Boards} reapplied later sends an identical query."""
    coordinator.entity_filter.set_selected([EntityType.TASKS, EntityType.BOARDS])
    task = asyncio.create_task(coordinator.submit_text("chores"))
    await settle()
    gateway.resolve_search(0, make_page(["1", "2"], total_count=2))
    await task

    saved = await coordinator.save_current("Weekly Chores")
    coordinator.entity_filter.reset()
    coordinator.query_input.set_text("something else")

    task = asyncio.create_task(coordinator.apply_saved(saved))
    await settle()

    assert gateway.search_calls[1].query == gateway.search_calls[0].query
    assert coordinator.entity_filter.selected() == frozenset({EntityType.TASKS, EntityType.BOARDS})
    assert coordinator.query_input.text == "chores"
    gateway.resolve_search(1, make_page(["1", "2"], total_count=2))
    state = await task
    assert [item.id for item in state.results] == ["1", "2"]


async def test_save_current_with_empty_query_raises(coordinator) -> None:
    generation = coordinator.state.generation

    with pytest.raises(ValidationException):
        await coordinator.save_current("Nothing")

    assert coordinator.state.generation == generation


async def test_list_and_delete_saved(coordinator) -> None:
    coordinator.query_input.set_text("chores")
    saved = await coordinator.save_current("Chores")

    assert [s.id for s in await coordinator.list_saved()] == [saved.id]
    await coordinator.delete_saved(saved.id)
    assert await coordinator.list_saved() == []


async def test_load_more_and_retry_delegate(coordinator, gateway) -> None:
    task = asyncio.create_task(coordinator.submit_text("x"))
    await settle()
    gateway.resolve_search(0, make_page(["1"], total_count=2))
    await task

    task = asyncio.create_task(coordinator.load_more())
    await settle()
    assert gateway.search_calls[1].offset == 1
    gateway.fail_search(1, RuntimeError("reset"))
    await task
    assert coordinator.state.status == SearchStatus.ERROR

    task = asyncio.create_task(coordinator.retry())
    await settle()
    gateway.resolve_search(2, make_page(["1", "2"], total_count=2))
    state = await task
    assert state.status == SearchStatus.SUCCESS


async def test_open_result_uses_route_table(coordinator, navigator) -> None:
    assert coordinator.open_result(make_item("9", EntityType.FAMILIES)) is True
    navigator.navigate.assert_called_once_with("/family/9", new_context=False)

    assert coordinator.open_result_in_new_context(make_item("9", EntityType.BOARDS)) is True
    navigator.navigate.assert_called_with("/boards/9", new_context=True)


async def test_teardown_discards_in_flight_search(coordinator, gateway) -> None:
    task = asyncio.create_task(coordinator.submit_text("chores"))
    await settle()

    coordinator.teardown()
    state = await task

    assert state.active is False
    assert state.results == ()


async def test_auto_search_submits_on_settle(gateway, store, auth, navigator, address_bar) -> None:
    settings = Settings(debounce_ms=10, auto_search=True, telemetry_enabled=False)
    coordinator = SearchPageCoordinator(gateway, store, auth, navigator, address_bar, settings)

    coordinator.on_text_changed("chores")
    await asyncio.sleep(WAIT)
    gateway.resolve_suggest(0, [])
    await settle()

    assert gateway.search_calls[0].query.text == "chores"
    gateway.resolve_search(0, make_page(["1"], total_count=1))
    await coordinator.query_input.drain()

    assert coordinator.state.status == SearchStatus.SUCCESS
    assert address_bar.get_param("q") == "chores"
    coordinator.teardown()


async def test_auto_search_does_not_wait_for_suggestions(
    gateway, store, auth, navigator, address_bar
) -> None:
    """A suggestion fetch that never answers must not hold back the search."""
    settings = Settings(debounce_ms=10, auto_search=True, telemetry_enabled=False)
    coordinator = SearchPageCoordinator(gateway, store, auth, navigator, address_bar, settings)

    coordinator.on_text_changed("milk")
    await asyncio.sleep(WAIT)

    assert len(gateway.suggest_calls) == 1
    assert len(gateway.search_calls) == 1
    assert gateway.search_calls[0].query.text == "milk"

    gateway.resolve_search(0, make_page(["1"], total_count=1))
    await settle()
    assert coordinator.state.status == SearchStatus.SUCCESS

    gateway.resolve_suggest(0, [SearchSuggestion("milkshake")])
    await coordinator.query_input.drain()

    assert len(gateway.search_calls) == 1
    assert coordinator.state.generation == 1
    assert coordinator.state.status == SearchStatus.SUCCESS
    coordinator.teardown()


async def test_search_history_uses_configured_limit(coordinator, gateway) -> None:
    gateway.history_entries = [SearchHistoryEntry(id=str(i), query=f"q{i}") for i in range(25)]

    entries = await coordinator.search_history()

    assert gateway.history_limits == [20]
    assert [entry.id for entry in entries] == [str(i) for i in range(20)]


async def test_search_history_failure_returns_empty(coordinator, gateway) -> None:
    gateway.history_error = SearchRequestError("history", "HTTP 500", 500)

    assert await coordinator.search_history(5) == []
    assert gateway.history_limits == [5]


async def test_clear_history_delegates(coordinator, gateway) -> None:
    gateway.history_entries = [SearchHistoryEntry(id="1", query="chores")]

    await coordinator.clear_history()

    assert gateway.clear_history_calls == 1
    assert await coordinator.search_history() == []
