"""Grapheme-accurate text-buffer engine for a terminal editor."""

__all__ = [
    "adapters",
    "buffer",
    "graphemes",
    "highlighting",
    "runtime",
    "session",
    "view",
]

__version__ = "0.1.0"
