"""Application configuration (settings and environment).

Single source of truth for all configuration. Uses pydantic-settings
with .env support; every field can be overridden with an environment
variable prefixed by UNIFIED_SEARCH_ (e.g. UNIFIED_SEARCH_DEBOUNCE_MS).
"""

from functools import lru_cache

from pydantic import model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Settings loaded from environment and .env.

    All settings have defaults. Tunables for the search session (debounce
    window, page size, suggestion limits) are validated in
    validate_search_tunables.
    """

    # App
    app_name: str = "unified-search"
    app_version: str = "1.0.0"
    debug: bool = False

    # Search API (base URL includes the version segment, e.g. https://host/api/v1)
    api_base_url: str = "http://localhost:5000/api/v1"
    request_timeout_seconds: float = 30.0

    # Input / session tunables
    debounce_ms: int = 300
    page_size: int = 20
    suggestion_min_length: int = 2
    suggestion_limit: int = 10
    auto_search: bool = False
    history_limit: int = 20

    # Address bar parameter that mirrors the current query text
    address_bar_query_param: str = "q"

    # OpenTelemetry spans around gateway calls (API only; exporter is host-configured)
    telemetry_enabled: bool = True

    model_config = SettingsConfigDict(
        env_prefix="UNIFIED_SEARCH_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        case_sensitive=False,
    )

    @model_validator(mode="after")
    def validate_search_tunables(self) -> "Settings":
        """Validate session tunables.

        - debounce_ms must be >= 0 (0 settles on the next loop iteration).
        - page_size, suggestion_limit must be >= 1.
        - suggestion_min_length must be >= 1.
        """
        if self.debounce_ms < 0:
            raise ValueError(f"debounce_ms must be >= 0, got: {self.debounce_ms}")
        if self.page_size < 1:
            raise ValueError(f"page_size must be >= 1, got: {self.page_size}")
        if self.suggestion_limit < 1:
            raise ValueError(f"suggestion_limit must be >= 1, got: {self.suggestion_limit}")
        if self.history_limit < 1:
            raise ValueError(f"history_limit must be >= 1, got: {self.history_limit}")
        if self.suggestion_min_length < 1:
            raise ValueError(
                f"suggestion_min_length must be >= 1, got: {self.suggestion_min_length}"
            )
        if self.request_timeout_seconds <= 0:
            raise ValueError("request_timeout_seconds must be positive")
        return self

    @property
    def debounce_seconds(self) -> float:
        """Debounce window in seconds (asyncio timers take seconds)."""
        return self.debounce_ms / 1000


@lru_cache
def get_settings() -> Settings:
    """Return cached settings (single instance per process).

    Validation runs on first call, not at import time. In tests, call
    get_settings.cache_clear() before overriding env vars so the next
    get_settings() uses the new values.

    Returns:
        Loaded and validated Settings instance.
    """
    return Settings()
