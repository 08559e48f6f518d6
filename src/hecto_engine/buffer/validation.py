"""Bounds helpers shared by the document and the viewport.

Out-of-range positions are expected (the cursor can briefly outrun the
content), so these helpers answer questions instead of raising.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from .state import Position

if TYPE_CHECKING:
    from .document import Document


def row_in_range(document: "Document", row: int, *, allow_end: bool = False) -> bool:
    limit = len(document) if allow_end else len(document) - 1
    return 0 <= row <= limit


def row_length(document: "Document", row: int) -> int:
    line = document.row(row)
    return len(line) if line is not None else 0


def clamp_position(document: "Document", position: Position) -> Position:
    """Pull ``position`` into ``[0, len]`` rows and ``[0, row length]`` columns."""

    row = max(0, min(position.row, len(document)))
    column = max(0, min(position.column, row_length(document, row)))
    return Position(row, column)


__all__ = ["clamp_position", "row_in_range", "row_length"]
