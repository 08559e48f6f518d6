"""Errors raised by document load and save."""

from __future__ import annotations

from typing import Optional


class DocumentError(RuntimeError):
    """Base class for recoverable document failures."""


class DocumentIOError(DocumentError):
    """Raised when a document cannot be read from or written to disk."""

    def __init__(self, message: str, *, path: Optional[str] = None) -> None:
        super().__init__(message)
        self.path = path


class DocumentNotFoundError(DocumentIOError):
    """Raised when the file to load does not exist."""


class NoFileNameError(DocumentError):
    """Raised when saving a document that has never been given a name."""

    def __init__(self) -> None:
        super().__init__("Document has no file name")


__all__ = [
    "DocumentError",
    "DocumentIOError",
    "DocumentNotFoundError",
    "NoFileNameError",
]
