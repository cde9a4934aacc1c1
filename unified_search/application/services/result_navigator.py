"""Result navigator: maps a search result to the in-app path that shows it."""

import logging
from collections.abc import Callable
from types import MappingProxyType
from typing import TYPE_CHECKING
from urllib.parse import quote

from unified_search.application.dtos.search import SearchResultItem
from unified_search.domain.enums import EntityType

if TYPE_CHECKING:
    from unified_search.application.interfaces.services import INavigator

logger = logging.getLogger(__name__)

RouteBuilder = Callable[[SearchResultItem], str]


def _by_title(path: str, param: str) -> RouteBuilder:
    return lambda item: f"{path}?{param}={quote(item.title, safe='')}"


ROUTES: MappingProxyType[EntityType, RouteBuilder] = MappingProxyType({
    EntityType.TASKS: lambda item: f"/tasks/{item.id}",
    EntityType.FAMILIES: lambda item: f"/family/{item.id}",
    EntityType.ACHIEVEMENTS: lambda item: f"/gamification?achievement={item.id}",
    EntityType.BOARDS: lambda item: f"/boards/{item.id}",
    EntityType.NOTIFICATIONS: lambda item: f"/notifications?highlight={item.id}",
    EntityType.ACTIVITIES: lambda item: f"/dashboard?activity={item.id}",
    EntityType.TAGS: _by_title("/tasks", "tag"),
    EntityType.CATEGORIES: _by_title("/tasks", "category"),
    EntityType.TEMPLATES: lambda item: f"/boards?template={item.id}",
})

# Only tasks and boards have an edit view.
EDIT_ROUTES: MappingProxyType[EntityType, RouteBuilder] = MappingProxyType({
    EntityType.TASKS: lambda item: f"/tasks/{item.id}?edit=true",
    EntityType.BOARDS: lambda item: f"/boards/{item.id}?edit=true",
})


def missing_routes() -> set[EntityType]:
    """Entity types without a route in ROUTES (empty when the table is complete)."""
    return set(EntityType) - set(ROUTES)


_missing = missing_routes()
if _missing:
    raise RuntimeError(
        "No route mapping for entity types: " + ", ".join(sorted(t.value for t in _missing))
    )


def route_for(result: SearchResultItem) -> str | None:
    """Destination path for result, or None when it cannot be opened."""
    if not result.id:
        return None
    if result.entity_type in (EntityType.TAGS, EntityType.CATEGORIES) and not result.title:
        return None
    return ROUTES[result.entity_type](result)


def edit_route_for(result: SearchResultItem) -> str | None:
    """Edit path for result, or None for types without an edit view."""
    builder = EDIT_ROUTES.get(result.entity_type)
    if builder is None or not result.id:
        return None
    return builder(result)


class ResultNavigator:
    """Opens results through the host navigation capability."""

    def __init__(self, navigator: "INavigator") -> None:
        self._navigator = navigator

    def route_for(self, result: SearchResultItem) -> str | None:
        return route_for(result)

    def edit_route_for(self, result: SearchResultItem) -> str | None:
        return edit_route_for(result)

    def open(self, result: SearchResultItem) -> bool:
        """Navigate to result. Returns False when it has no route."""
        return self._go(route_for(result), result, new_context=False)

    def open_in_new_context(self, result: SearchResultItem) -> bool:
        """Open result in a new tab/window. Returns False when it has no route."""
        return self._go(route_for(result), result, new_context=True)

    def open_editor(self, result: SearchResultItem) -> bool:
        """Navigate to the edit view of result. Returns False when it has none."""
        return self._go(edit_route_for(result), result, new_context=False)

    def _go(self, path: str | None, result: SearchResultItem, new_context: bool) -> bool:
        if path is None:
            logger.debug("No route for %s result %s", result.entity_type.value, result.id)
            return False
        self._navigator.navigate(path, new_context=new_context)
        return True
