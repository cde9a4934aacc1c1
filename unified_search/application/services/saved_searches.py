"""Saved search manager: CRUD over named searches for the signed-in user."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from unified_search.application.dtos.saved_search import SavedSearchCreate
from unified_search.domain.entities.saved_search import SavedSearch, validate_saved_search_fields
from unified_search.domain.exceptions import SavedSearchNotFoundException
from unified_search.domain.value_objects.core import SearchQuery
from unified_search.shared.utils.sanitization import InputSanitizer

if TYPE_CHECKING:
    from unified_search.application.interfaces.services import IAuthContext, ISavedSearchStore

logger = logging.getLogger(__name__)


class SavedSearchManager:
    """Create, list, update and delete saved searches; apply one back to a query.

    Never triggers a search: apply() only returns the stored query for the
    caller to submit. The query is stored exactly as given, so
    apply(create(name, description, query)) == query. Validation failures
    raise ValidationException before the store is touched.
    """

    def __init__(self, store: "ISavedSearchStore", auth: "IAuthContext") -> None:
        self._store = store
        self._auth = auth
        self._saved_searches: list[SavedSearch] = []

    @property
    def saved_searches(self) -> list[SavedSearch]:
        """Last loaded list (newest first)."""
        return list(self._saved_searches)

    async def create(
        self,
        name: str,
        description: str,
        query: SearchQuery,
        is_shared: bool = False,
    ) -> SavedSearch:
        """Persist query under name.

        Raises:
            ValidationException: Empty name or query text, or a field too long.
            SavedSearchStoreError: The store failed.
        """
        data = self._build(name, description, query, is_shared)
        saved = await self._store.create(data)
        self._saved_searches.insert(0, saved)
        logger.info("Saved search created: %s", saved.id)
        return saved

    async def update(
        self,
        saved_search_id: str,
        name: str,
        description: str,
        query: SearchQuery,
        is_shared: bool = False,
    ) -> SavedSearch:
        """Replace the fields of an existing saved search."""
        data = self._build(name, description, query, is_shared)
        saved = await self._store.update(saved_search_id, data)
        self._saved_searches = [
            saved if existing.id == saved_search_id else existing
            for existing in self._saved_searches
        ]
        logger.info("Saved search updated: %s", saved_search_id)
        return saved

    async def list(self) -> list[SavedSearch]:
        """Load saved searches; [] without calling the store when not signed in."""
        if not self._auth.is_signed_in():
            logger.debug("Not signed in; skipping saved search load")
            self._saved_searches = []
            return []
        saved = await self._store.list_all()
        self._saved_searches = sorted(
            saved,
            key=lambda item: item.created_at.timestamp() if item.created_at else 0.0,
            reverse=True,
        )
        return list(self._saved_searches)

    async def delete(self, saved_search_id: str) -> None:
        """Delete a saved search.

        Raises:
            SavedSearchNotFoundException: Unknown id.
        """
        if not saved_search_id:
            raise SavedSearchNotFoundException(saved_search_id)
        await self._store.delete(saved_search_id)
        self._saved_searches = [s for s in self._saved_searches if s.id != saved_search_id]
        logger.info("Saved search deleted: %s", saved_search_id)

    def apply(self, saved: SavedSearch) -> SearchQuery:
        """Return the stored query unchanged."""
        return saved.query

    @staticmethod
    def _build(
        name: str,
        description: str,
        query: SearchQuery,
        is_shared: bool,
    ) -> SavedSearchCreate:
        # Only the display fields are sanitized; the query is replayed verbatim.
        clean_name = InputSanitizer.sanitize_text(name)
        clean_description = InputSanitizer.sanitize_text(description)
        validate_saved_search_fields(clean_name, clean_description, query)
        return SavedSearchCreate(
            name=clean_name,
            description=clean_description,
            query=query,
            is_shared_with_group=is_shared,
        )
