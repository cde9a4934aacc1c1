"""Entity filter state: the non-empty set of entity types a search covers."""

import logging
from collections.abc import Callable, Iterable

from unified_search.domain.enums import EntityType
from unified_search.domain.value_objects.core import normalize_entity_types

logger = logging.getLogger(__name__)

FilterListener = Callable[[frozenset[EntityType]], None]


class EntityFilterState:
    """Owns the selected entity types. Single writer, many readers.

    The selection is never empty: deselecting the last selected type
    restores the defaults. Changes notify listeners but never trigger a
    fetch; the new selection is picked up at the next submission.
    """

    def __init__(self, defaults: Iterable[EntityType] | None = None) -> None:
        self._defaults = normalize_entity_types(defaults)
        self._selected = self._defaults
        self._listeners: list[FilterListener] = []

    @property
    def defaults(self) -> frozenset[EntityType]:
        return self._defaults

    def selected(self) -> frozenset[EntityType]:
        """Return the current (non-empty) selection."""
        return self._selected

    def is_selected(self, entity_type: EntityType) -> bool:
        return entity_type in self._selected

    def toggle(self, entity_type: EntityType) -> frozenset[EntityType]:
        """Add or remove entity_type; removing the last one restores the defaults."""
        if entity_type in self._selected:
            remaining = self._selected - {entity_type}
            if not remaining:
                logger.debug("Last entity type %s deselected; restoring defaults", entity_type.value)
                remaining = self._defaults
            self._set(remaining)
        else:
            self._set(self._selected | {entity_type})
        return self._selected

    def set_selected(self, entity_types: Iterable[EntityType]) -> frozenset[EntityType]:
        """Replace the selection; an empty selection restores the defaults."""
        selected = frozenset(EntityType(value) for value in entity_types)
        self._set(selected or self._defaults)
        return self._selected

    def reset(self, defaults: Iterable[EntityType] | None = None) -> frozenset[EntityType]:
        """Restore the defaults; when defaults is given it also becomes the new default set."""
        if defaults is not None:
            self._defaults = normalize_entity_types(defaults)
        self._set(self._defaults)
        return self._selected

    def subscribe(self, listener: FilterListener) -> Callable[[], None]:
        """Register a change listener. Returns a function that unsubscribes it."""
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def _set(self, selected: frozenset[EntityType]) -> None:
        if selected == self._selected:
            return
        self._selected = selected
        for listener in list(self._listeners):
            listener(selected)
