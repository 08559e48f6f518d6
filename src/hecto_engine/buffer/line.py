"""A single editable row addressed in grapheme clusters."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import List, NamedTuple, Optional

from hecto_engine.graphemes import find_units, grapheme_tuple, split_graphemes
from hecto_engine.highlighting import HighlightingOptions, HighlightTag, highlight

from .state import SearchDirection


class RenderSegment(NamedTuple):
    """Run of consecutive graphemes sharing one highlight tag."""

    text: str
    tag: HighlightTag


@dataclass(slots=True)
class Line:
    """Row content as grapheme clusters plus an aligned list of tags.

    Content and tags are kept as two parallel lists. Any content mutation
    throws the tags away; they are rebuilt by the next ``highlight`` call.
    """

    _units: List[str] = field(default_factory=list)
    tags: List[HighlightTag] = field(default_factory=list)
    highlighted: bool = False
    _entering: bool = False
    _carry: bool = False
    _word: Optional[str] = None

    @classmethod
    def from_text(cls, text: str) -> "Line":
        return cls(_units=split_graphemes(text))

    @property
    def text(self) -> str:
        return "".join(self._units)

    @property
    def graphemes(self) -> tuple[str, ...]:
        return tuple(self._units)

    def __len__(self) -> int:
        return len(self._units)

    def is_empty(self) -> bool:
        return not self._units

    def insert(self, column: int, char: str) -> None:
        if column >= len(self._units):
            self._replace(self.text + char)
            return
        column = max(column, 0)
        head = "".join(self._units[:column])
        tail = "".join(self._units[column:])
        self._replace(head + char + tail)

    def delete(self, column: int) -> None:
        if column < 0 or column >= len(self._units):
            return
        units = list(self._units)
        del units[column]
        self._replace("".join(units))

    def split(self, column: int) -> "Line":
        """Truncate to ``[0, column)`` and return the tail as a new line."""

        column = max(0, min(column, len(self._units)))
        tail = Line(_units=self._units[column:])
        self._units = self._units[:column]
        self.unhighlight()
        return tail

    def append(self, other: "Line") -> None:
        self._replace(self.text + other.text)

    def find(
        self,
        query: str,
        at: int,
        direction: SearchDirection = SearchDirection.FORWARD,
    ) -> Optional[int]:
        """Grapheme index of ``query`` searching from (or up to) ``at``."""

        if not query or at < 0 or at > len(self._units):
            return None
        needle = grapheme_tuple(query)
        if direction is SearchDirection.FORWARD:
            return find_units(self._units, needle, at)
        return find_units(self._units, needle, 0, at, reverse=True)

    def render(self, start: int, end: int) -> List[RenderSegment]:
        """Window ``[start, end)`` into tag runs; tabs become one blank cell."""

        end = min(end, len(self._units))
        start = min(max(start, 0), end)
        segments: List[RenderSegment] = []
        current: Optional[HighlightTag] = None
        chunk: List[str] = []
        for index in range(start, end):
            unit = self._units[index]
            tag = self.tags[index] if index < len(self.tags) else HighlightTag.PLAIN
            if tag is not current and chunk:
                segments.append(RenderSegment("".join(chunk), current or tag))
                chunk = []
            current = tag
            chunk.append(" " if unit == "\t" else unit)
        if chunk and current is not None:
            segments.append(RenderSegment("".join(chunk), current))
        return segments

    def highlight(
        self,
        options: HighlightingOptions,
        word: Optional[str] = None,
        entering_block_comment: bool = False,
    ) -> bool:
        """Retag the line if needed and return the block-comment carry."""

        if (
            self.highlighted
            and not word
            and self._word is None
            and self._entering == entering_block_comment
        ):
            return self._carry

        self.tags, self._carry = highlight(
            self._units, options, word, entering_block_comment
        )
        self._entering = entering_block_comment
        self._word = word or None
        self.highlighted = True
        return self._carry

    def unhighlight(self) -> None:
        self.highlighted = False
        self.tags = []

    def _replace(self, text: str) -> None:
        self._units = split_graphemes(text)
        self.unhighlight()


__all__ = ["Line", "RenderSegment"]
