"""Input sanitization for user-supplied saved search fields."""

from typing import ClassVar

import nh3


class InputSanitizer:
    """
    Sanitize user inputs that are persisted and later displayed
    (saved search names and descriptions).
    """

    ALLOWED_TAGS: ClassVar[list[str]] = []
    ALLOWED_ATTRIBUTES: ClassVar[dict[str, list[str]]] = {}

    @classmethod
    def sanitize_html(cls, value: str) -> str:
        """Remove all HTML tags and sanitize with nh3 (strict by default).

        Args:
            value: Raw string that may contain HTML.

        Returns:
            Sanitized string safe for HTML display.
        """
        if not value:
            return value
        # nh3: tags = set of allowed tag names; attributes = dict[tag, set[attr]]
        attrs = {k: set(v) for k, v in cls.ALLOWED_ATTRIBUTES.items()}
        return nh3.clean(
            value,
            tags=set(cls.ALLOWED_TAGS),
            attributes=attrs,
        )

    @classmethod
    def sanitize_text(cls, value: str | None) -> str:
        """Sanitize and strip surrounding whitespace; None becomes ''."""
        if not value:
            return ""
        return cls.sanitize_html(value).strip()

