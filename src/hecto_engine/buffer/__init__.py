"""Line storage, documents and the positions that address them."""

from .errors import (
    DocumentError,
    DocumentIOError,
    DocumentNotFoundError,
    NoFileNameError,
)
from .state import Position, SearchDirection
from .line import Line, RenderSegment
from .document import Document
from .validation import clamp_position, row_in_range, row_length

__all__ = [
    "Document",
    "DocumentError",
    "DocumentIOError",
    "DocumentNotFoundError",
    "Line",
    "NoFileNameError",
    "Position",
    "RenderSegment",
    "SearchDirection",
    "clamp_position",
    "row_in_range",
    "row_length",
]
