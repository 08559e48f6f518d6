"""Grapheme-cluster segmentation and searching.

Every column in the engine counts extended grapheme clusters, so these helpers
are the only place that turns strings into editable units.
"""

from __future__ import annotations

from functools import lru_cache
from typing import List, Optional, Sequence

import regex

_CLUSTER = regex.compile(r"\X")


def split_graphemes(text: str) -> List[str]:
    """Return the extended grapheme clusters of ``text`` in order."""

    return _CLUSTER.findall(text)


@lru_cache(maxsize=512)
def grapheme_tuple(text: str) -> tuple[str, ...]:
    return tuple(_CLUSTER.findall(text))


def find_units(
    units: Sequence[str],
    needle: Sequence[str],
    start: int = 0,
    end: Optional[int] = None,
    *,
    reverse: bool = False,
) -> Optional[int]:
    """Index of ``needle`` inside ``units[start:end]``, or ``None``.

    The match must lie entirely inside the window. ``reverse`` returns the
    rightmost match instead of the leftmost.
    """

    width = len(needle)
    stop = len(units) if end is None else min(end, len(units))
    if width == 0 or start < 0 or stop - start < width:
        return None
    candidates = range(stop - width, start - 1, -1) if reverse else range(
        start, stop - width + 1
    )
    first = needle[0]
    for index in candidates:
        if units[index] != first:
            continue
        if all(units[index + offset] == needle[offset] for offset in range(1, width)):
            return index
    return None


__all__ = ["find_units", "grapheme_tuple", "split_graphemes"]
