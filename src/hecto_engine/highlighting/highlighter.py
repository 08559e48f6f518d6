"""Single-line tokenizer producing one highlight tag per grapheme.

``highlight`` is a pure function: it sees one line, the file type's rule set,
the active search word and whether the previous line ended inside a block
comment. It returns the tags and the carry for the next line, so a document
highlights by folding the carry through its rows in order.
"""

from __future__ import annotations

import string
from typing import Callable, List, NamedTuple, Optional, Sequence, Tuple

from hecto_engine.graphemes import find_units, grapheme_tuple

from .models import HighlightingOptions
from .tags import HighlightTag

_DIGITS = frozenset(string.digits)


class Span(NamedTuple):
    """A matcher's claim: tag everything up to ``end`` (exclusive)."""

    end: int
    tag: HighlightTag
    unterminated: bool = False


Matcher = Callable[[Sequence[str], int, HighlightingOptions], Optional[Span]]


def is_separator(unit: str) -> bool:
    """A non-alphanumeric boundary, judged on the grapheme's base character."""

    return not unit[:1].isalnum()


def _find_pair(units: Sequence[str], start: int, first: str, second: str) -> int:
    index = find_units(units, (first, second), start)
    return -1 if index is None else index


def _starts_with(units: Sequence[str], index: int, *expected: str) -> bool:
    if index + len(expected) > len(units):
        return False
    return all(units[index + i] == unit for i, unit in enumerate(expected))


def match_block_comment(
    units: Sequence[str], index: int, options: HighlightingOptions
) -> Optional[Span]:
    if not options.multiline_comments or not _starts_with(units, index, "/", "*"):
        return None
    closing = _find_pair(units, index + 2, "*", "/")
    if closing < 0:
        return Span(len(units), HighlightTag.BLOCK_COMMENT, unterminated=True)
    return Span(closing + 2, HighlightTag.BLOCK_COMMENT)


def match_character(
    units: Sequence[str], index: int, options: HighlightingOptions
) -> Optional[Span]:
    if not options.characters or units[index] != "'" or index + 1 >= len(units):
        return None
    closing = index + 3 if units[index + 1] == "\\" else index + 2
    if closing < len(units) and units[closing] == "'":
        return Span(closing + 1, HighlightTag.CHARACTER)
    return None


def match_line_comment(
    units: Sequence[str], index: int, options: HighlightingOptions
) -> Optional[Span]:
    if options.comments and _starts_with(units, index, "/", "/"):
        return Span(len(units), HighlightTag.COMMENT)
    return None


def _match_keyword(
    units: Sequence[str],
    index: int,
    keywords: Sequence[str],
    tag: HighlightTag,
) -> Optional[Span]:
    if not keywords:
        return None
    if index > 0 and not is_separator(units[index - 1]):
        return None
    for keyword in keywords:
        parts = grapheme_tuple(keyword)
        end = index + len(parts)
        if not _starts_with(units, index, *parts):
            continue
        if end < len(units) and not is_separator(units[end]):
            continue
        return Span(end, tag)
    return None


def match_primary_keyword(
    units: Sequence[str], index: int, options: HighlightingOptions
) -> Optional[Span]:
    return _match_keyword(
        units, index, options.primary_keywords, HighlightTag.PRIMARY_KEYWORD
    )


def match_secondary_keyword(
    units: Sequence[str], index: int, options: HighlightingOptions
) -> Optional[Span]:
    return _match_keyword(
        units, index, options.secondary_keywords, HighlightTag.SECONDARY_KEYWORD
    )


def match_string(
    units: Sequence[str], index: int, options: HighlightingOptions
) -> Optional[Span]:
    if not options.strings or units[index] != '"':
        return None
    cursor = index + 1
    while cursor < len(units):
        unit = units[cursor]
        if unit == "\\":
            cursor += 2
            continue
        if unit == '"':
            return Span(cursor + 1, HighlightTag.STRING)
        cursor += 1
    return Span(len(units), HighlightTag.STRING)


def match_number(
    units: Sequence[str], index: int, options: HighlightingOptions
) -> Optional[Span]:
    if not options.numbers or units[index] not in _DIGITS:
        return None
    if index > 0 and not is_separator(units[index - 1]):
        return None
    cursor = index + 1
    while cursor < len(units) and (units[cursor] in _DIGITS or units[cursor] == "."):
        cursor += 1
    return Span(cursor, HighlightTag.NUMBER)


MATCHERS: Tuple[Matcher, ...] = (
    match_block_comment,
    match_character,
    match_line_comment,
    match_primary_keyword,
    match_secondary_keyword,
    match_string,
    match_number,
)


def overlay_matches(
    units: Sequence[str], tags: List[HighlightTag], word: Optional[str]
) -> None:
    """Retag every non-overlapping occurrence of ``word`` as a search match."""

    if not word:
        return
    needle = grapheme_tuple(word)
    index = find_units(units, needle, 0)
    while index is not None:
        end = index + len(needle)
        tags[index:end] = [HighlightTag.MATCH] * len(needle)
        index = find_units(units, needle, end)


def highlight(
    units: Sequence[str],
    options: HighlightingOptions,
    word: Optional[str] = None,
    entering_block_comment: bool = False,
) -> Tuple[List[HighlightTag], bool]:
    """Tag ``units`` and report whether the line ends inside a block comment."""

    tags: List[HighlightTag] = []
    index = 0
    in_block_comment = entering_block_comment

    if entering_block_comment:
        closing = _find_pair(units, 0, "*", "/")
        index = len(units) if closing < 0 else closing + 2
        tags.extend([HighlightTag.BLOCK_COMMENT] * index)
        in_block_comment = closing < 0

    while index < len(units):
        for matcher in MATCHERS:
            span = matcher(units, index, options)
            if span is not None:
                break
        else:
            tags.append(HighlightTag.PLAIN)
            index += 1
            continue

        tags.extend([span.tag] * (span.end - index))
        index = span.end
        if span.unterminated:
            in_block_comment = True

    overlay_matches(units, tags, word)
    return tags, in_block_comment


__all__ = [
    "MATCHERS",
    "Matcher",
    "Span",
    "highlight",
    "is_separator",
    "match_block_comment",
    "match_character",
    "match_line_comment",
    "match_number",
    "match_primary_keyword",
    "match_secondary_keyword",
    "match_string",
    "overlay_matches",
]
