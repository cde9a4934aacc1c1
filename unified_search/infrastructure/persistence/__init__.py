"""Local persistence implementations."""

from unified_search.infrastructure.persistence.saved_search_memory import InMemorySavedSearchStore

__all__ = ["InMemorySavedSearchStore"]
