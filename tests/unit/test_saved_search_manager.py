"""SavedSearchManager over the in-memory store (round trip, validation, auth)."""

from unittest.mock import AsyncMock

import pytest

from tests.helpers import FakeAuth
from unified_search.application.services.saved_searches import SavedSearchManager
from unified_search.domain.entities.saved_search import MAX_NAME_LENGTH
from unified_search.domain.enums import EntityType
from unified_search.domain.exceptions import SavedSearchNotFoundException, ValidationException
from unified_search.domain.value_objects.core import SearchQuery
from unified_search.infrastructure.persistence.saved_search_memory import InMemorySavedSearchStore


@pytest.fixture
def manager(store: InMemorySavedSearchStore, auth: FakeAuth) -> SavedSearchManager:
    return SavedSearchManager(store, auth)


def _chores() -> SearchQuery:
    return SearchQuery(
        "chores",
        frozenset({EntityType.TASKS, EntityType.BOARDS}),
        {"status": ["open"]},
    )


async def test_create_then_apply_round_trips_query(manager) -> None:
    """Save {chores, Tasks+Boards} as 'Weekly Chores'; apply returns the identical query."""
    saved = await manager.create("Weekly Chores", "", _chores(), is_shared=True)

    assert saved.id
    assert saved.name == "Weekly Chores"
    assert saved.is_shared_with_group is True
    assert saved.created_at is not None
    assert manager.apply(saved) == _chores()


async def test_list_returns_newest_first(manager) -> None:
    first = await manager.create("First", "", SearchQuery("a1"))
    second = await manager.create("Second", "", SearchQuery("b1"))

    listed = await manager.list()

    assert [s.id for s in listed] == [second.id, first.id]
    assert manager.saved_searches == listed


async def test_list_when_signed_out_skips_store() -> None:
    store = AsyncMock()
    manager = SavedSearchManager(store, FakeAuth(signed_in=False))

    assert await manager.list() == []
    store.list_all.assert_not_called()


async def test_create_with_blank_query_raises_without_store_call() -> None:
    store = AsyncMock()
    manager = SavedSearchManager(store, FakeAuth())

    with pytest.raises(ValidationException) as exc_info:
        await manager.create("Empty", "", SearchQuery("   "))

    assert exc_info.value.details == {"field": "query"}
    store.create.assert_not_called()


async def test_create_requires_name(manager) -> None:
    with pytest.raises(ValidationException):
        await manager.create("  ", "", _chores())


async def test_create_rejects_long_name(manager) -> None:
    with pytest.raises(ValidationException):
        await manager.create("n" * (MAX_NAME_LENGTH + 1), "", _chores())


async def test_create_strips_html_from_name_and_description(manager) -> None:
    saved = await manager.create("<b>Chores</b>", "<script>x</script>weekly", _chores())

    assert saved.name == "Chores"
    assert "<script>" not in saved.description


async def test_update_replaces_fields(manager) -> None:
    saved = await manager.create("Chores", "", _chores())

    updated = await manager.update(saved.id, "Daily Chores", "every day", _chores().with_text("daily"))

    assert updated.id == saved.id
    assert updated.name == "Daily Chores"
    assert updated.query.text == "daily"
    assert manager.saved_searches[0].name == "Daily Chores"


async def test_update_unknown_id_raises(manager) -> None:
    with pytest.raises(SavedSearchNotFoundException):
        await manager.update("missing", "Name", "", _chores())


async def test_delete_removes_from_store_and_cache(manager, store) -> None:
    saved = await manager.create("Chores", "", _chores())

    await manager.delete(saved.id)

    assert await store.list_all() == []
    assert manager.saved_searches == []


async def test_delete_unknown_id_raises(manager) -> None:
    with pytest.raises(SavedSearchNotFoundException):
        await manager.delete("missing")


async def test_saved_query_is_stored_verbatim(manager) -> None:
    """Filter values with markup characters and untrimmed text replay unchanged."""
    query = SearchQuery(
        " chores",
        frozenset({EntityType.TASKS}),
        {"assignee": "Tom & Jerry", "tag": "a<b"},
    )

    saved = await manager.create("Weekly", "", query)

    assert manager.apply(saved) == query
    listed = await manager.list()
    assert listed[0].query.text == " chores"
    assert listed[0].query.filters == {"assignee": "Tom & Jerry", "tag": "a<b"}
