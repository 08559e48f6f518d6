"""Cursor movement and scroll-into-view arithmetic."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Tuple

from hecto_engine.buffer import Document, Position, clamp_position, row_length


class Direction(str, Enum):
    UP = "up"
    DOWN = "down"
    LEFT = "left"
    RIGHT = "right"
    PAGE_UP = "page_up"
    PAGE_DOWN = "page_down"
    HOME = "home"
    END = "end"


@dataclass(slots=True)
class Viewport:
    """Cursor, scroll offset and visible size, all in grapheme cells.

    The cursor row may equal ``len(document)``: that is the caret below the
    last line where typing appends a new row.
    """

    rows: int = 24
    columns: int = 80
    cursor: Position = Position()
    offset: Position = Position()

    def __post_init__(self) -> None:
        self.rows = max(1, self.rows)
        self.columns = max(1, self.columns)

    @property
    def size(self) -> Tuple[int, int]:
        return (self.rows, self.columns)

    def move_cursor(self, direction: Direction, document: Document) -> Position:
        row, column = self.cursor
        height = len(document)
        width = row_length(document, row)

        if direction is Direction.UP:
            if row > 0:
                row -= 1
        elif direction is Direction.DOWN:
            if row < height:
                row += 1
        elif direction is Direction.LEFT:
            if column > 0:
                column -= 1
            elif row > 0:
                row -= 1
                column = row_length(document, row)
        elif direction is Direction.RIGHT:
            if column < width:
                column += 1
            elif row < height:
                row += 1
                column = 0
        elif direction is Direction.PAGE_UP:
            row = row - self.rows if row > self.rows else 0
        elif direction is Direction.PAGE_DOWN:
            row = min(row + self.rows, height)
        elif direction is Direction.HOME:
            column = 0
        elif direction is Direction.END:
            column = width

        column = min(column, row_length(document, row))
        self.cursor = Position(row, column)
        self.scroll()
        return self.cursor

    def set_cursor(self, position: Position, document: Document) -> Position:
        self.cursor = clamp_position(document, Position(*position))
        self.scroll()
        return self.cursor

    def scroll(self) -> Position:
        """Shift the offset by the least amount that keeps the cursor visible."""

        row, column = self.cursor
        offset_row, offset_column = self.offset

        if row < offset_row:
            offset_row = row
        elif row >= offset_row + self.rows:
            offset_row = row - self.rows + 1

        if column < offset_column:
            offset_column = column
        elif column >= offset_column + self.columns:
            offset_column = column - self.columns + 1

        self.offset = Position(offset_row, offset_column)
        return self.offset

    def resize(self, rows: int, columns: int) -> None:
        self.rows = max(1, rows)
        self.columns = max(1, columns)
        self.scroll()

    def screen_cursor(self) -> Tuple[int, int]:
        """Cursor position relative to the window as ``(x, y)``."""

        return (
            self.cursor.column - self.offset.column,
            self.cursor.row - self.offset.row,
        )

    def visible_row_range(self, document: Document) -> range:
        start = self.offset.row
        return range(start, min(start + self.rows, len(document)))

    def column_window(self) -> Tuple[int, int]:
        return (self.offset.column, self.offset.column + self.columns)


__all__ = ["Direction", "Viewport"]
