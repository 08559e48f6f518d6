"""Highlight tag enumeration and its display palette."""

from __future__ import annotations

from enum import Enum
from types import MappingProxyType
from typing import Mapping


class HighlightTag(str, Enum):
    """Classification attached to a single grapheme."""

    PLAIN = "plain"
    NUMBER = "number"
    STRING = "string"
    CHARACTER = "character"
    COMMENT = "comment"
    BLOCK_COMMENT = "block_comment"
    PRIMARY_KEYWORD = "primary_keyword"
    SECONDARY_KEYWORD = "secondary_keyword"
    MATCH = "match"

    @property
    def color(self) -> str:
        return TAG_COLORS[self]


TAG_COLORS: Mapping[HighlightTag, str] = MappingProxyType(
    {
        HighlightTag.PLAIN: "#ffffff",
        HighlightTag.NUMBER: "#dca3a3",
        HighlightTag.STRING: "#d336be",
        HighlightTag.CHARACTER: "#6c71c4",
        HighlightTag.COMMENT: "#859900",
        HighlightTag.BLOCK_COMMENT: "#859900",
        HighlightTag.PRIMARY_KEYWORD: "#b58900",
        HighlightTag.SECONDARY_KEYWORD: "#2aa198",
        HighlightTag.MATCH: "#268bd2",
    }
)

__all__ = ["HighlightTag", "TAG_COLORS"]
