"""Core constants: API paths and keyboard keys.

Single source of truth for literal values shared by the gateway and the
search page coordinator.
"""

# Search API paths (relative to settings.api_base_url)
SEARCH_PATH = "/search"
SUGGESTIONS_PATH = "/search/suggestions"
HISTORY_PATH = "/search/history"
SAVED_SEARCHES_PATH = "/saved-searches"

# Keys handled by the search input (DOM KeyboardEvent.key names)
KEY_ARROW_DOWN = "ArrowDown"
KEY_ARROW_UP = "ArrowUp"
KEY_ENTER = "Enter"
KEY_ESCAPE = "Escape"

# Selection index meaning "no suggestion highlighted"
NO_SELECTION = -1
