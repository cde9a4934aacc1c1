"""Address bar over a URL string.

Implements IAddressBar for hosts that expose the page URL as text: reads
query parameters from it and rewrites it in place (the equivalent of a
history replaceState), optionally reporting each rewrite to a callback.
"""

from collections.abc import Callable

from unified_search.shared.utils.url import get_query_param, replace_query_param


class UrlAddressBar:
    """IAddressBar backed by a URL string."""

    def __init__(self, url: str = "/search", on_replace: Callable[[str], None] | None = None) -> None:
        self._url = url
        self._on_replace = on_replace

    @property
    def url(self) -> str:
        return self._url

    def get_param(self, name: str) -> str | None:
        return get_query_param(self._url, name)

    def replace_param(self, name: str, value: str | None) -> None:
        new_url = replace_query_param(self._url, name, value)
        if new_url == self._url:
            return
        self._url = new_url
        if self._on_replace is not None:
            self._on_replace(new_url)
