"""Use cases: page-level orchestration of the search services."""

from unified_search.application.use_cases.search_page import SearchPageCoordinator

__all__ = ["SearchPageCoordinator"]
