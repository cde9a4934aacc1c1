"""Query-string helpers for address-bar synchronization."""

from urllib.parse import parse_qsl, urlencode, urlsplit, urlunsplit


def get_query_param(url: str, name: str) -> str | None:
    """Return the first value of query parameter name in url, or None."""
    for key, value in parse_qsl(urlsplit(url).query, keep_blank_values=True):
        if key == name:
            return value
    return None


def replace_query_param(url: str, name: str, value: str | None) -> str:
    """Return url with parameter name set to value (removed when value is None or empty).

    Other parameters keep their order; the fragment is preserved.
    """
    parts = urlsplit(url)
    params = [(k, v) for k, v in parse_qsl(parts.query, keep_blank_values=True) if k != name]
    if value:
        params.append((name, value))
    return urlunsplit(parts._replace(query=urlencode(params)))
