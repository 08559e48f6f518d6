"""Position and direction types shared by the document and the viewport."""

from __future__ import annotations

from enum import Enum
from typing import NamedTuple


class Position(NamedTuple):
    """Logical caret location: document row and grapheme column."""

    row: int = 0
    column: int = 0


class SearchDirection(str, Enum):
    FORWARD = "forward"
    BACKWARD = "backward"


__all__ = ["Position", "SearchDirection"]
