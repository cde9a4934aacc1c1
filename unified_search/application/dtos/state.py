"""DTOs for search session state (immutable snapshots)."""

from dataclasses import dataclass, field

from unified_search.application.dtos.search import SearchResultItem, SearchSuggestion
from unified_search.core.constants import NO_SELECTION
from unified_search.domain.enums import SearchStatus
from unified_search.domain.value_objects.core import SearchQuery


@dataclass(frozen=True)
class ErrorInfo:
    """Failure detail shown in the error panel (with a retry action when retryable)."""

    message: str
    error_code: str
    retryable: bool = True


@dataclass(frozen=True)
class SearchSessionState:
    """Authoritative search session snapshot.

    Owned by SearchExecutionController; replaced (never mutated) on every
    transition. results are append-only within one generation. next_offset
    is the server offset for load_more when the gateway reported one.
    """

    query: SearchQuery = field(default_factory=lambda: SearchQuery(""))
    generation: int = 0
    status: SearchStatus = SearchStatus.IDLE
    results: tuple[SearchResultItem, ...] = ()
    total_count: int = 0
    next_offset: int | None = None
    execution_time_ms: float = 0.0
    facet_counts: dict[str, int] = field(default_factory=dict)
    suggestions: tuple[SearchSuggestion, ...] = ()
    selected_suggestion_index: int = NO_SELECTION
    error: ErrorInfo | None = None
    active: bool = True

    @property
    def has_more(self) -> bool:
        """True when a further page exists for the current results."""
        return self.status == SearchStatus.SUCCESS and len(self.results) < self.total_count

    @property
    def is_loading(self) -> bool:
        return self.status.is_in_flight
