"""Cursor and viewport arithmetic."""

from .viewport import Direction, Viewport

__all__ = ["Direction", "Viewport"]
