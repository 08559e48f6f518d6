"""Ordered list of lines with load/save, editing and search."""

from __future__ import annotations

from typing import Iterable, Iterator, List, Optional, Sequence

from hecto_engine.highlighting import (
    PLAIN_TEXT,
    FileType,
    FileTypeRegistry,
    load_default_filetypes,
)
from hecto_engine.runtime.telemetry import span

from .errors import DocumentIOError, DocumentNotFoundError, NoFileNameError
from .line import Line
from .state import Position, SearchDirection
from .validation import row_in_range


def _split_lines(contents: str) -> List[str]:
    if not contents:
        return []
    lines = contents.split("\n")
    if lines[-1] == "":
        lines.pop()
    return lines


class Document:
    """Text storage built on a flat list-of-lines model.

    Row ``len(document)`` is a valid editing target: typing there appends a
    new line. Positions past it are ignored rather than rejected. Without an
    explicit registry each document gets its own, seeded with the built-in
    file types.
    """

    def __init__(
        self,
        rows: Optional[Iterable[Line]] = None,
        *,
        file_name: Optional[str] = None,
        registry: Optional[FileTypeRegistry] = None,
    ) -> None:
        self._rows: List[Line] = list(rows or ())
        self._registry = (
            registry
            if registry is not None
            else load_default_filetypes(FileTypeRegistry())
        )
        self._file_name: Optional[str] = None
        self.file_type: FileType = PLAIN_TEXT
        self.file_name = file_name
        self.dirty = False

    @classmethod
    def from_text(
        cls,
        text: str,
        *,
        file_name: Optional[str] = None,
        registry: Optional[FileTypeRegistry] = None,
    ) -> "Document":
        rows = [Line.from_text(value) for value in _split_lines(text)]
        return cls(rows, file_name=file_name, registry=registry)

    @classmethod
    def load(
        cls, file_name: str, *, registry: Optional[FileTypeRegistry] = None
    ) -> "Document":
        """Read ``file_name`` into a new clean document."""

        with span(
            "document::load",
            component="document",
            metadata={"path": file_name},
        ) as handle:
            try:
                with open(file_name) as stream:
                    contents = stream.read()
            except FileNotFoundError as exc:
                raise DocumentNotFoundError(
                    f"Could not open file: {file_name}", path=file_name
                ) from exc
            except (OSError, UnicodeDecodeError) as exc:
                raise DocumentIOError(
                    f"Could not read file: {file_name}", path=file_name
                ) from exc

            document = cls.from_text(contents, file_name=file_name, registry=registry)
            handle.add_metadata("rows", len(document))
            return document

    @property
    def registry(self) -> FileTypeRegistry:
        return self._registry

    @property
    def file_name(self) -> Optional[str]:
        return self._file_name

    @file_name.setter
    def file_name(self, value: Optional[str]) -> None:
        self._file_name = value or None
        self._retype()

    def save(self) -> None:
        """Write every line plus ``\\n``; clears ``dirty`` only on success."""

        if not self._file_name:
            raise NoFileNameError()
        file_name = self._file_name
        self._retype()

        with span(
            "document::save",
            component="document",
            metadata={"path": file_name, "rows": len(self._rows)},
        ):
            try:
                with open(file_name, "w") as stream:
                    for line in self._rows:
                        stream.write(line.text)
                        stream.write("\n")
            except OSError as exc:
                raise DocumentIOError(
                    f"Could not write file: {file_name}", path=file_name
                ) from exc

        self.dirty = False

    def __len__(self) -> int:
        return len(self._rows)

    def __iter__(self) -> Iterator[Line]:
        return iter(self._rows)

    def is_empty(self) -> bool:
        return not self._rows

    def row(self, index: int) -> Optional[Line]:
        if 0 <= index < len(self._rows):
            return self._rows[index]
        return None

    def lines(self) -> Sequence[str]:
        """Return the row texts without exposing internal mutability."""

        return tuple(line.text for line in self._rows)

    def text(self) -> str:
        return "".join(f"{line.text}\n" for line in self._rows)

    def insert_char(self, position: Position, char: str) -> None:
        row, column = position
        if not row_in_range(self, row, allow_end=True):
            return
        if char == "\n":
            self.insert_newline(position)
            return

        if row == len(self._rows):
            line = Line()
            line.insert(0, char)
            self._rows.append(line)
        else:
            self._rows[row].insert(column, char)

        self.dirty = True
        self.unhighlight_rows(row)

    def insert_newline(self, position: Position) -> None:
        row, column = position
        if not row_in_range(self, row, allow_end=True):
            return

        if row == len(self._rows):
            self._rows.append(Line())
        else:
            tail = self._rows[row].split(column)
            self._rows.insert(row + 1, tail)

        self.dirty = True
        self.unhighlight_rows(row)

    def delete_char(self, position: Position) -> None:
        row, column = position
        if not row_in_range(self, row):
            return

        line = self._rows[row]
        if column == len(line) and row + 1 < len(self._rows):
            line.append(self._rows.pop(row + 1))
        elif 0 <= column < len(line):
            line.delete(column)
        else:
            return

        self.dirty = True
        self.unhighlight_rows(row)

    def find(
        self,
        query: str,
        position: Position,
        direction: SearchDirection = SearchDirection.FORWARD,
    ) -> Optional[Position]:
        """First match of ``query`` scanning rows away from ``position``.

        The starting row is searched from its column forward, or up to its
        column backward; every other row is searched whole.
        """

        start_row, start_column = position
        if not query or not row_in_range(self, start_row):
            return None

        forward = direction is SearchDirection.FORWARD
        rows = (
            range(start_row, len(self._rows)) if forward else range(start_row, -1, -1)
        )
        with span(
            "document::find",
            component="document",
            metadata={"direction": direction.value},
        ):
            for row in rows:
                line = self._rows[row]
                if row == start_row:
                    column = start_column
                else:
                    column = 0 if forward else len(line)
                found = line.find(query, column, direction)
                if found is not None:
                    return Position(row, found)
        return None

    def highlight(self, word: Optional[str] = None, until: Optional[int] = None) -> None:
        """Highlight rows ``0..until`` plus one lookahead row (all when ``None``).

        The block-comment carry produced by each row feeds the next one.
        """

        stop = len(self._rows) if until is None else min(until + 2, len(self._rows))
        options = self.file_type.options
        carry = False
        for line in self._rows[:stop]:
            carry = line.highlight(options, word, carry)

    def unhighlight_rows(self, start: int) -> None:
        for line in self._rows[max(start, 0):]:
            line.unhighlight()

    def _retype(self) -> None:
        file_type = self._registry.detect(self._file_name)
        if file_type != self.file_type:
            self.file_type = file_type
            self.unhighlight_rows(0)


__all__ = ["Document"]
