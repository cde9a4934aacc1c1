"""Host-page capabilities backed by plain values."""

from unified_search.infrastructure.browser.address_bar import UrlAddressBar

__all__ = ["UrlAddressBar"]
