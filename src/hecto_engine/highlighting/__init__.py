"""File-type rule sets and the per-line syntax highlighter."""

from .models import PLAIN_TEXT, FileType, HighlightingOptions
from .tags import TAG_COLORS, HighlightTag
from .registry import FileTypeConflictError, FileTypeRegistry, RegistryStats
from .highlighter import highlight, is_separator
from .defaults import DEFAULT_FILE_TYPES, load_default_filetypes

__all__ = [
    "DEFAULT_FILE_TYPES",
    "FileType",
    "FileTypeConflictError",
    "FileTypeRegistry",
    "HighlightTag",
    "HighlightingOptions",
    "PLAIN_TEXT",
    "RegistryStats",
    "TAG_COLORS",
    "highlight",
    "is_separator",
    "load_default_filetypes",
]
