"""Slug generator service.

Generates URL-friendly slugs from product names and blog titles. Slugs
are minted once at creation and never regenerated.
"""

import re
from typing import Any, Mapping


class SlugGenerator:
    """Generate URL-friendly slugs.

    Slug rules:
    - Lowercase, surrounding whitespace trimmed
    - Whitespace runs become a single hyphen
    - Only ASCII letters, digits, underscores and hyphens survive
    - No repeated hyphens
    """

    SOURCE_FIELDS = ("name", "title")
    FALLBACK_SOURCE = "item"

    _WHITESPACE = re.compile(r"\s+")
    _INVALID_CHARS = re.compile(r"[^A-Za-z0-9_-]+")
    _REPEATED_HYPHENS = re.compile(r"--+")

    @classmethod
    def generate(cls, text: Any) -> str:
        """Generate a slug from text.

        Args:
            text: The text to convert to a slug (e.g., product name).

        Returns:
            URL-friendly slug.

        Examples:
            >>> SlugGenerator.generate("  Ethiopia   Yirgacheffe!!")
            'ethiopia-yirgacheffe'
            >>> SlugGenerator.generate("Caramel & Sea Salt")
            'caramel-sea-salt'
        """
        slug = str(text).lower().strip()
        slug = cls._WHITESPACE.sub("-", slug)
        slug = cls._INVALID_CHARS.sub("", slug)
        return cls._REPEATED_HYPHENS.sub("-", slug)

    @classmethod
    def source_text(cls, data: Mapping[str, Any]) -> str:
        """Pick the human-readable field a slug is derived from.

        Uses ``name`` (products), then ``title`` (blogs), then the literal
        word ``item``. Empty values count as missing.
        """
        for field_name in cls.SOURCE_FIELDS:
            value = data.get(field_name)
            if value:
                return str(value)
        return cls.FALLBACK_SOURCE

    @classmethod
    def for_document(cls, data: Mapping[str, Any]) -> str:
        """Generate the slug for a new document's field bag."""
        return cls.generate(cls.source_text(data))
