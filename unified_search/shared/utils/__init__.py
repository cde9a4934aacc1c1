"""Shared utilities: datetime, generators, sanitization, URLs."""

from unified_search.shared.utils.datetime import ensure_utc, utc_now
from unified_search.shared.utils.generators import generate_cuid
from unified_search.shared.utils.sanitization import InputSanitizer
from unified_search.shared.utils.url import get_query_param, replace_query_param

__all__ = [
    "generate_cuid",
    "utc_now",
    "ensure_utc",
    "InputSanitizer",
    "get_query_param",
    "replace_query_param",
]
