"""Dataclasses describing highlighting rule sets and file types."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable


def _normalize_keywords(keywords: Iterable[str]) -> tuple[str, ...]:
    seen: dict[str, None] = {}
    for keyword in keywords:
        cleaned = keyword.strip()
        if cleaned:
            seen.setdefault(cleaned, None)
    # Longest first so a keyword never shadows a longer one sharing its prefix.
    return tuple(sorted(seen, key=len, reverse=True))


def _normalize_extensions(extensions: Iterable[str]) -> tuple[str, ...]:
    values = (ext.strip().lstrip(".").lower() for ext in extensions)
    return tuple(dict.fromkeys(value for value in values if value))


@dataclass(frozen=True, slots=True)
class HighlightingOptions:
    """Which constructs a file type highlights, plus its keyword lists."""

    numbers: bool = False
    strings: bool = False
    characters: bool = False
    comments: bool = False
    multiline_comments: bool = False
    primary_keywords: tuple[str, ...] = ()
    secondary_keywords: tuple[str, ...] = ()

    def __post_init__(self) -> None:
        object.__setattr__(
            self, "primary_keywords", _normalize_keywords(self.primary_keywords)
        )
        object.__setattr__(
            self, "secondary_keywords", _normalize_keywords(self.secondary_keywords)
        )

    @property
    def enabled(self) -> bool:
        return any(
            (
                self.numbers,
                self.strings,
                self.characters,
                self.comments,
                self.multiline_comments,
                self.primary_keywords,
                self.secondary_keywords,
            )
        )


@dataclass(frozen=True, slots=True)
class FileType:
    """Named rule set selected by file extension."""

    name: str
    extensions: tuple[str, ...] = ()
    options: HighlightingOptions = HighlightingOptions()

    def __post_init__(self) -> None:
        if not self.name:
            raise ValueError("file type name cannot be empty")
        object.__setattr__(self, "extensions", _normalize_extensions(self.extensions))


PLAIN_TEXT = FileType(name="No filetype")

__all__ = ["FileType", "HighlightingOptions", "PLAIN_TEXT"]
