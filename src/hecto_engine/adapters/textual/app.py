"""Executable Textual app that hosts the editing engine."""

from __future__ import annotations

import argparse
from typing import List, Optional, Sequence, Tuple

try:  # pragma: no cover - imported only when the app is run
    from rich.text import Text
    from textual import events
    from textual.app import App, ComposeResult
    from textual.widgets import Static
except ModuleNotFoundError as exc:  # pragma: no cover - friendly error for missing dep
    raise RuntimeError(
        "Install the 'textual' package to use hecto_engine.adapters.textual.app"
    ) from exc

from hecto_engine import __version__
from hecto_engine.graphemes import split_graphemes
from hecto_engine.runtime import telemetry
from hecto_engine.session import EditorSession, RenderedRow

from .controller import TextualEditorAdapter, TextualUIHooks

STATUS_STYLE = "#3f3f3f on #efefef"
CHROME_ROWS = 2


def render_rows(
    rows: Sequence[RenderedRow],
    *,
    height: int,
    width: int,
    cursor: Tuple[int, int],
    show_welcome: bool = False,
) -> Text:
    """Paint the text area: tagged rows, ``~`` filler and a reversed cursor cell."""

    lines: List[Text] = []
    for y in range(height):
        if y < len(rows):
            line = Text(no_wrap=True)
            for segment in rows[y].segments:
                line.append(segment.text, style=segment.tag.color)
        elif show_welcome and y == height // 3:
            line = Text(_welcome_line(width), no_wrap=True)
        else:
            line = Text("~", no_wrap=True)
        lines.append(line)

    x, y = cursor
    if 0 <= y < len(lines):
        line = lines[y]
        cells = split_graphemes(line.plain) if y < len(rows) else []
        if x < len(cells):
            start = sum(len(cell) for cell in cells[:x])
            line.stylize("reverse", start, start + len(cells[x]))
        else:
            if not cells:
                line = lines[y] = Text(no_wrap=True)
            line.append(" " * (x - len(cells)))
            line.append(" ", style="reverse")
    return Text("\n").join(lines)


def _welcome_line(width: int) -> str:
    message = f"Hecto editor -- version {__version__}"
    padding = max(width - len(message), 0) // 2
    return f"~{' ' * max(padding - 1, 0)}{message}"[:width]


class HectoApp(App[None]):
    """Textual UI embedding one editing session."""

    CSS = """
	Screen {
		layout: vertical;
	}

	#text-area {
		height: 1fr;
	}

	#status-line {
		height: 1;
	}

	#message-line {
		height: 1;
	}
	"""

    def __init__(self, file_name: Optional[str] = None) -> None:
        super().__init__()
        self._file_name = file_name
        self.session: EditorSession | None = None
        self.adapter: TextualEditorAdapter | None = None
        self._rows: Sequence[RenderedRow] = ()
        self._text_widget: Static | None = None
        self._status_widget: Static | None = None
        self._message_widget: Static | None = None

    def compose(self) -> ComposeResult:
        self._text_widget = Static("", id="text-area")
        self._status_widget = Static("", id="status-line")
        self._message_widget = Static("", id="message-line")
        yield self._text_widget
        yield self._status_widget
        yield self._message_widget

    def on_mount(self) -> None:
        rows, columns = self._text_area_size()
        self.session = EditorSession.open(self._file_name, size=(rows, columns))
        hooks = TextualUIHooks(
            update_rows=self._update_rows,
            update_status=self._update_status,
            update_message=self._update_message,
            update_cursor=self._update_cursor,
            quit=self.exit,
        )
        self.adapter = TextualEditorAdapter(self.session, hooks)

    def on_resize(self, event: events.Resize) -> None:
        if self.adapter:
            self.adapter.resize(*self._text_area_size())

    def on_key(self, event: events.Key) -> None:
        if not self.adapter:
            return
        if self.adapter.handle_textual_key(event.key, text=event.character):
            event.stop()
            event.prevent_default()

    def _text_area_size(self) -> Tuple[int, int]:
        return (max(self.size.height - CHROME_ROWS, 1), max(self.size.width, 1))

    def _update_rows(self, rows: Sequence[RenderedRow]) -> None:
        self._rows = rows

    def _update_status(self, status: str) -> None:
        if self._status_widget:
            self._status_widget.update(Text(status, style=STATUS_STYLE))

    def _update_message(self, message: str) -> None:
        if self._message_widget:
            self._message_widget.update(Text(message))

    def _update_cursor(self, cursor: Tuple[int, int]) -> None:
        # Rows always arrive before the cursor, so paint here.
        if not self._text_widget or not self.session:
            return
        viewport = self.session.viewport
        self._text_widget.update(
            render_rows(
                self._rows,
                height=viewport.rows,
                width=viewport.columns,
                cursor=cursor,
                show_welcome=self.session.document.is_empty(),
            )
        )


def _parse_args(argv: Optional[Sequence[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Run the hecto terminal editor.")
    parser.add_argument("file", nargs="?", help="File to open")
    parser.add_argument(
        "--log-preset",
        choices=sorted(telemetry.PRESETS),
        help="Telemetry preset (default: environment-driven configuration)",
    )
    return parser.parse_args(argv)


def main(argv: Optional[Sequence[str]] = None) -> None:
    args = _parse_args(argv)
    if args.log_preset:
        telemetry.configure(preset=args.log_preset)
    HectoApp(args.file).run()


if __name__ == "__main__":  # pragma: no cover - manual run
    main()
