"""
Unified Search

Client-side coordination for unified multi-entity search: debounced input,
sequenced suggestions, generation-guarded search sessions with pagination,
saved searches, and result routing.
"""

from unified_search.application.use_cases.search_page import SearchPageCoordinator
from unified_search.shared.telemetry import setup_logging

__version__ = "1.0.0"
__all__ = ["SearchPageCoordinator", "setup_logging"]
