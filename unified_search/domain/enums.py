"""Domain enumerations for unified search.

Enums represent fixed sets of domain values (entity types, suggestion
kinds, session status).
"""

from enum import Enum


class EntityType(str, Enum):
    """What category of object a search result represents.

    Values match the wire format of the search API.
    """

    TASKS = "tasks"
    FAMILIES = "families"
    ACHIEVEMENTS = "achievements"
    BOARDS = "boards"
    NOTIFICATIONS = "notifications"
    ACTIVITIES = "activities"
    TAGS = "tags"
    CATEGORIES = "categories"
    TEMPLATES = "templates"

    @classmethod
    def values(cls) -> list[str]:
        """Return all entity type values as strings.

        Returns:
            List of enum value strings (e.g. for validation or serialization).
        """
        return [entity_type.value for entity_type in cls]

    @classmethod
    def all(cls) -> frozenset["EntityType"]:
        """Return the full default selection (every entity type)."""
        return frozenset(cls)


class SuggestionKind(str, Enum):
    """Why a suggestion was offered."""

    AUTOCOMPLETE = "autocomplete"
    DID_YOU_MEAN = "did_you_mean"
    RELATED_TERM = "related_term"
    POPULAR_SEARCH = "popular_search"
    RECENT_SEARCH = "recent_search"


class SearchStatus(str, Enum):
    """Lifecycle status of the authoritative search session.

    IDLE -> (DEBOUNCING) -> FETCHING -> SUCCESS | ERROR;
    SUCCESS -> LOADING_MORE -> SUCCESS | ERROR.
    """

    IDLE = "idle"
    DEBOUNCING = "debouncing"
    FETCHING = "fetching"
    LOADING_MORE = "loading_more"
    SUCCESS = "success"
    ERROR = "error"

    @property
    def is_in_flight(self) -> bool:
        """True while a search or page request is outstanding."""
        return self in (SearchStatus.FETCHING, SearchStatus.LOADING_MORE)
