"""In-memory saved search store (offline use and tests)."""

from dataclasses import replace

from unified_search.application.dtos.saved_search import SavedSearchCreate
from unified_search.domain.entities.saved_search import SavedSearch
from unified_search.domain.exceptions import SavedSearchNotFoundException
from unified_search.shared.telemetry.logging import get_logger
from unified_search.shared.utils.datetime import utc_now
from unified_search.shared.utils.generators import generate_cuid

logger = get_logger(__name__)


class InMemorySavedSearchStore:
    """ISavedSearchStore kept in a process-local list, newest first."""

    def __init__(self, initial: list[SavedSearch] | None = None) -> None:
        self._items: list[SavedSearch] = list(initial or [])

    async def list_all(self) -> list[SavedSearch]:
        return list(self._items)

    async def create(self, data: SavedSearchCreate) -> SavedSearch:
        saved = SavedSearch(
            id=generate_cuid(),
            name=data.name,
            description=data.description,
            query=data.query,
            is_shared_with_group=data.is_shared_with_group,
            created_at=utc_now(),
        )
        self._items.insert(0, saved)
        logger.debug("Stored saved search %s", saved.id)
        return saved

    async def update(self, saved_search_id: str, data: SavedSearchCreate) -> SavedSearch:
        index = self._index_of(saved_search_id)
        updated = replace(
            self._items[index],
            name=data.name,
            description=data.description,
            query=data.query,
            is_shared_with_group=data.is_shared_with_group,
        )
        self._items[index] = updated
        return updated

    async def delete(self, saved_search_id: str) -> None:
        del self._items[self._index_of(saved_search_id)]

    def _index_of(self, saved_search_id: str) -> int:
        for index, item in enumerate(self._items):
            if item.id == saved_search_id:
                return index
        raise SavedSearchNotFoundException(saved_search_id)
