"""Saved search domain entity.

A named, persisted combination of query text and filters owned by the
requesting user. Created explicitly, read on demand, deleted explicitly;
never auto-expires.
"""

from dataclasses import dataclass
from datetime import datetime

from unified_search.domain.exceptions import ValidationException
from unified_search.domain.value_objects.core import SearchQuery

MAX_NAME_LENGTH = 100
MAX_DESCRIPTION_LENGTH = 500
MAX_QUERY_LENGTH = 500


def validate_saved_search_fields(name: str, description: str, query: SearchQuery) -> None:
    """Validate name, description and query text limits.

    Raises:
        ValidationException: On empty name/query text or length overflow.
    """
    if not name or not name.strip():
        raise ValidationException("Saved search name is required", field="name")
    if len(name) > MAX_NAME_LENGTH:
        raise ValidationException(
            f"Saved search name must not exceed {MAX_NAME_LENGTH} characters", field="name"
        )
    if len(description or "") > MAX_DESCRIPTION_LENGTH:
        raise ValidationException(
            f"Description must not exceed {MAX_DESCRIPTION_LENGTH} characters",
            field="description",
        )
    if query.is_blank:
        raise ValidationException("Cannot save a search with empty query text", field="query")
    if len(query.text) > MAX_QUERY_LENGTH:
        raise ValidationException(
            f"Query text must not exceed {MAX_QUERY_LENGTH} characters", field="query"
        )


@dataclass(frozen=True)
class SavedSearch:
    """Persisted named search. Validation runs on construction."""

    id: str
    name: str
    description: str
    query: SearchQuery
    is_shared_with_group: bool = False
    created_at: datetime | None = None

    def __post_init__(self) -> None:
        if not self.id:
            raise ValidationException("Saved search ID is required", field="id")
        validate_saved_search_fields(self.name, self.description, self.query)
