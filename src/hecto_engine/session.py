"""Editing session: the intent surface the key/render layer talks to."""

from __future__ import annotations

import time
from dataclasses import dataclass
from typing import Callable, List, Optional, Tuple

from hecto_engine.buffer import (
    Document,
    DocumentIOError,
    NoFileNameError,
    Position,
    RenderSegment,
    SearchDirection,
    row_length,
)
from hecto_engine.highlighting import FileTypeRegistry
from hecto_engine.runtime import telemetry
from hecto_engine.runtime.config import EditorSettings
from hecto_engine.view import Direction, Viewport

HELP_MESSAGE = "HELP: Ctrl-Q = quit | Ctrl-S = save | Ctrl-F = find"
NO_NAME = "[No Name]"


@dataclass(slots=True)
class StatusMessage:
    text: str
    time: float


@dataclass(slots=True)
class StatusLine:
    """Values shown in the status bar."""

    file_name: str
    line_count: int
    modified: bool
    file_type: str
    cursor_line: int

    @property
    def left(self) -> str:
        modified = " (modified)" if self.modified else ""
        return f"{self.file_name} - {self.line_count} lines{modified}"

    @property
    def right(self) -> str:
        return f"{self.file_type} | {self.cursor_line}/{self.line_count}"

    def format(self, width: int) -> str:
        padding = max(width - len(self.left) - len(self.right), 0)
        return f"{self.left}{' ' * padding}{self.right}"[:width]


@dataclass(slots=True)
class RenderedRow:
    index: int
    segments: List[RenderSegment]

    @property
    def text(self) -> str:
        return "".join(segment.text for segment in self.segments)


class EditorSession:
    """Owns one document, its viewport and the transient status message."""

    def __init__(
        self,
        document: Optional[Document] = None,
        *,
        size: Tuple[int, int] = (24, 80),
        settings: Optional[EditorSettings] = None,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        self.document = document if document is not None else Document()
        self.viewport = Viewport(rows=size[0], columns=size[1])
        self.settings = settings or EditorSettings.from_env()
        self._clock = clock
        self.status = StatusMessage(HELP_MESSAGE, clock())
        self.quit_times_left = self.settings.quit_times
        self.should_quit = False
        self.highlighted_word: Optional[str] = None
        self._search_origin: Optional[Position] = None

    @classmethod
    def open(
        cls,
        file_name: Optional[str] = None,
        *,
        size: Tuple[int, int] = (24, 80),
        settings: Optional[EditorSettings] = None,
        registry: Optional[FileTypeRegistry] = None,
        clock: Callable[[], float] = time.monotonic,
    ) -> "EditorSession":
        """Load ``file_name``; on failure start empty and report the error."""

        if not file_name:
            return cls(
                Document(registry=registry), size=size, settings=settings, clock=clock
            )
        try:
            document = Document.load(file_name, registry=registry)
        except DocumentIOError as exc:
            telemetry.record_event(
                "session.open_failed",
                level="warning",
                data={"path": file_name, "reason": str(exc)},
            )
            session = cls(
                Document(registry=registry), size=size, settings=settings, clock=clock
            )
            session.set_status(f"ERR: Could not open file: {file_name}")
            return session
        return cls(document, size=size, settings=settings, clock=clock)

    @property
    def cursor(self) -> Position:
        return self.viewport.cursor

    @property
    def dirty(self) -> bool:
        return self.document.dirty

    @property
    def file_name(self) -> Optional[str]:
        return self.document.file_name

    @property
    def file_type_name(self) -> str:
        return self.document.file_type.name

    @property
    def row_count(self) -> int:
        return len(self.document)

    @property
    def needs_file_name(self) -> bool:
        return self.document.file_name is None

    def set_status(self, text: str) -> None:
        self.status = StatusMessage(text, self._clock())

    def message(self) -> str:
        """Current status text, or ``""`` once it has expired."""

        if self._clock() - self.status.time < self.settings.status_timeout:
            return self.status.text
        return ""

    def insert_char(self, char: str) -> None:
        """Type ``char`` at the cursor.

        The cursor only advances when the row gained a grapheme; a combining
        mark folds into the cluster before it and leaves the cursor in place.
        """

        if char == "\n":
            self.insert_newline()
            return
        self._settle()
        row = self.cursor.row
        before = row_length(self.document, row)
        self.document.insert_char(self.cursor, char)
        if row_length(self.document, row) > before:
            self.viewport.move_cursor(Direction.RIGHT, self.document)

    def insert_newline(self) -> None:
        self._settle()
        self.document.insert_newline(self.cursor)
        self.viewport.move_cursor(Direction.RIGHT, self.document)

    def backspace(self) -> None:
        self._settle()
        if self.cursor == (0, 0):
            return
        self.viewport.move_cursor(Direction.LEFT, self.document)
        self.document.delete_char(self.cursor)

    def delete_forward(self) -> None:
        self._settle()
        self.document.delete_char(self.cursor)
        self.viewport.scroll()

    def move(self, direction: Direction) -> Position:
        self._settle()
        return self.viewport.move_cursor(direction, self.document)

    def resize(self, rows: int, columns: int) -> None:
        self.viewport.resize(rows, columns)

    def save(self, file_name: Optional[str] = None) -> bool:
        """Save, optionally under a new name. Failures become status text."""

        self._settle()
        if file_name:
            self.document.file_name = file_name
        try:
            self.document.save()
        except NoFileNameError:
            self.set_status("Save aborted.")
            return False
        except DocumentIOError as exc:
            telemetry.record_event(
                "session.save_failed",
                level="error",
                data={"path": exc.path, "reason": str(exc)},
            )
            self.set_status("Error writing file!")
            return False

        telemetry.record_event(
            "session.saved", data={"path": self.document.file_name}
        )
        self.set_status("File saved successfully.")
        return True

    def abort_save(self) -> None:
        self.set_status("Save aborted.")

    def request_quit(self) -> bool:
        """Quit unless unsaved changes still need confirming."""

        if self.document.dirty and self.quit_times_left > 0:
            self.set_status(
                "WARNING! File has unsaved changes. "
                f"Press Ctrl-Q {self.quit_times_left} more times to quit."
            )
            self.quit_times_left -= 1
            return False
        self.should_quit = True
        return True

    def begin_search(self) -> None:
        self._settle()
        self._search_origin = self.cursor

    def search(
        self,
        query: str,
        direction: SearchDirection = SearchDirection.FORWARD,
        *,
        advance: bool = False,
    ) -> Optional[Position]:
        """Jump to the next match of ``query`` and highlight every occurrence.

        With ``advance`` a forward search first steps past the current
        position so repeated calls walk through successive matches.
        """

        origin = self.cursor
        if advance and direction is SearchDirection.FORWARD:
            self.viewport.move_cursor(Direction.RIGHT, self.document)
        moved = self.cursor != origin

        found = self.document.find(query, self._search_start(), direction)
        if found is not None:
            self.viewport.set_cursor(found, self.document)
        elif moved:
            self.viewport.set_cursor(origin, self.document)

        self.highlighted_word = query or None
        return found

    def _search_start(self) -> Position:
        # The past-the-end caret searches from the end of the last row.
        row, column = self.cursor
        last = len(self.document) - 1
        if row > last >= 0:
            return Position(last, row_length(self.document, last))
        return Position(row, column)

    def find_next(self, query: str) -> Optional[Position]:
        return self.search(query, SearchDirection.FORWARD, advance=True)

    def find_previous(self, query: str) -> Optional[Position]:
        return self.search(query, SearchDirection.BACKWARD)

    def end_search(self, *, accept: bool) -> None:
        if not accept and self._search_origin is not None:
            self.viewport.set_cursor(self._search_origin, self.document)
        self._search_origin = None
        self.highlighted_word = None

    def status_line(self) -> StatusLine:
        name = self.document.file_name
        return StatusLine(
            file_name=name[: self.settings.file_name_width] if name else NO_NAME,
            line_count=len(self.document),
            modified=self.document.dirty,
            file_type=self.file_type_name,
            cursor_line=self.cursor.row + 1,
        )

    def visible_rows(self) -> List[RenderedRow]:
        """Highlight through the window (plus one row) and render it."""

        viewport = self.viewport
        self.document.highlight(
            self.highlighted_word, until=viewport.offset.row + viewport.rows - 1
        )
        start, end = viewport.column_window()
        rows: List[RenderedRow] = []
        for index in viewport.visible_row_range(self.document):
            line = self.document.row(index)
            if line is not None:
                rows.append(RenderedRow(index, line.render(start, end)))
        return rows

    def screen_cursor(self) -> Tuple[int, int]:
        return self.viewport.screen_cursor()

    def _settle(self) -> None:
        if self.quit_times_left < self.settings.quit_times:
            self.quit_times_left = self.settings.quit_times
            self.set_status("")


__all__ = [
    "EditorSession",
    "HELP_MESSAGE",
    "RenderedRow",
    "StatusLine",
    "StatusMessage",
]
