from pathlib import Path

import pytest

from hecto_engine.buffer import Document, Position, RenderSegment
from hecto_engine.highlighting import HighlightTag
from hecto_engine.runtime.config import EditorSettings
from hecto_engine.session import HELP_MESSAGE, EditorSession
from hecto_engine.view import Direction


class FakeClock:
    def __init__(self) -> None:
        self.now = 100.0

    def __call__(self) -> float:
        return self.now


def make_session(
    *lines: str,
    file_name: str | None = None,
    size: tuple[int, int] = (24, 80),
    clock: FakeClock | None = None,
    **settings: object,
) -> EditorSession:
    text = "".join(f"{line}\n" for line in lines)
    document = Document.from_text(text, file_name=file_name)
    return EditorSession(
        document,
        size=size,
        settings=EditorSettings(**settings),
        clock=clock or FakeClock(),
    )


def test_typing_into_empty_document() -> None:
    session = make_session()

    session.insert_char("h")
    session.insert_char("i")
    session.insert_newline()

    assert session.document.lines() == ("hi", "")
    assert session.cursor == Position(1, 0)
    assert session.dirty is True


def test_backspace_merges_rows_and_stops_at_origin() -> None:
    session = make_session("ab", "cd")
    session.viewport.set_cursor(Position(1, 0), session.document)

    session.backspace()

    assert session.document.lines() == ("abcd",)
    assert session.cursor == Position(0, 2)

    session.viewport.set_cursor(Position(0, 0), session.document)
    session.backspace()
    assert session.document.lines() == ("abcd",)
    assert session.cursor == Position(0, 0)


def test_delete_forward_keeps_cursor() -> None:
    session = make_session("abc")
    session.move(Direction.RIGHT)

    session.delete_forward()

    assert session.document.lines() == ("ac",)
    assert session.cursor == Position(0, 1)


def test_quit_needs_confirmation_when_dirty() -> None:
    session = make_session("x", quit_times=3)
    session.insert_char("y")

    assert session.request_quit() is False
    assert "Press Ctrl-Q 3 more times" in session.message()
    assert session.request_quit() is False
    assert session.request_quit() is False
    assert session.request_quit() is True
    assert session.should_quit


def test_other_intent_resets_quit_confirmation() -> None:
    session = make_session("x", quit_times=2)
    session.insert_char("y")

    session.request_quit()
    session.move(Direction.RIGHT)

    assert session.quit_times_left == 2
    assert session.message() == ""
    assert session.request_quit() is False


def test_clean_document_quits_immediately() -> None:
    session = make_session("x")

    assert session.request_quit() is True


def test_save_without_name_aborts() -> None:
    session = make_session("x")

    assert session.needs_file_name
    assert session.save() is False
    assert session.message() == "Save aborted."


def test_save_as_writes_file_and_retypes(tmp_path: Path) -> None:
    path = tmp_path / "main.rs"
    session = make_session("fn main() {}")
    session.insert_char("x")

    assert session.save(str(path)) is True

    assert session.message() == "File saved successfully."
    assert session.dirty is False
    assert session.file_type_name == "Rust"
    assert path.read_text() == "xfn main() {}\n"


def test_save_failure_reports_error(tmp_path: Path) -> None:
    session = make_session("x", file_name=str(tmp_path))
    session.insert_char("y")

    assert session.save() is False
    assert session.message() == "Error writing file!"
    assert session.dirty is True


def test_open_missing_file_starts_empty_with_error(tmp_path: Path) -> None:
    missing = str(tmp_path / "nope.txt")

    session = EditorSession.open(
        missing, settings=EditorSettings(), clock=FakeClock()
    )

    assert session.row_count == 0
    assert session.message() == f"ERR: Could not open file: {missing}"


def test_open_existing_file(tmp_path: Path) -> None:
    path = tmp_path / "main.go"
    path.write_text("package main\n")

    session = EditorSession.open(str(path), settings=EditorSettings(), clock=FakeClock())

    assert session.document.lines() == ("package main",)
    assert session.file_type_name == "Go"
    assert session.message() == HELP_MESSAGE


def test_message_expires_after_timeout() -> None:
    clock = FakeClock()
    session = make_session(clock=clock, status_timeout=5.0)

    session.set_status("hello")
    clock.now += 4.9
    assert session.message() == "hello"

    clock.now += 0.2
    assert session.message() == ""


def test_incremental_search_walks_and_cancel_restores() -> None:
    session = make_session("a cat", "cat dog")
    session.begin_search()

    assert session.search("cat") == Position(0, 2)
    assert session.find_next("cat") == Position(1, 0)
    assert session.find_previous("cat") == Position(0, 2)
    assert session.highlighted_word == "cat"

    session.end_search(accept=False)

    assert session.cursor == Position(0, 0)
    assert session.highlighted_word is None


def test_accepted_search_keeps_cursor() -> None:
    session = make_session("a cat", "cat dog")
    session.begin_search()
    session.search("dog")

    session.end_search(accept=True)

    assert session.cursor == Position(1, 4)


def test_find_next_without_further_match_stays_put() -> None:
    session = make_session("a cat")
    session.begin_search()
    session.search("cat")

    assert session.find_next("cat") is None
    assert session.cursor == Position(0, 2)


def test_visible_rows_carry_tags_and_search_overlay() -> None:
    session = make_session("fn main", file_name="main.rs")
    session.begin_search()
    session.search("main")

    rows = session.visible_rows()

    assert [row.index for row in rows] == [0]
    assert rows[0].segments == [
        RenderSegment("fn", HighlightTag.PRIMARY_KEYWORD),
        RenderSegment(" ", HighlightTag.PLAIN),
        RenderSegment("main", HighlightTag.MATCH),
    ]
    assert rows[0].text == "fn main"


def test_visible_rows_follow_scroll() -> None:
    session = make_session(*[f"row {index}" for index in range(10)], size=(3, 80))
    for _ in range(4):
        session.move(Direction.DOWN)

    rows = session.visible_rows()

    assert [row.index for row in rows] == [2, 3, 4]
    assert session.screen_cursor() == (0, 2)
    assert session.document.row(5).highlighted
    assert not session.document.row(6).highlighted


def test_status_line_reports_document_state() -> None:
    session = make_session("a", "b", file_name="notes.rs", file_name_width=5)
    session.move(Direction.DOWN)
    session.insert_char("x")

    status = session.status_line()

    assert status.left == "notes - 2 lines (modified)"
    assert status.right == "Rust | 2/2"
    formatted = status.format(40)
    assert len(formatted) == 40
    assert formatted.startswith(status.left)
    assert formatted.endswith(status.right)


def test_status_line_without_name() -> None:
    session = make_session()

    assert session.status_line().left == "[No Name] - 0 lines"
    assert session.status_line().right == "No filetype | 1/0"


def test_settings_from_env(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("HECTO_ENGINE_QUIT_TIMES", "1")
    monkeypatch.setenv("HECTO_ENGINE_STATUS_TIMEOUT", "not-a-number")
    monkeypatch.setenv("HECTO_ENGINE_FILE_NAME_WIDTH", "0")

    settings = EditorSettings.from_env()

    assert settings.quit_times == 1
    assert settings.status_timeout == 5.0
    assert settings.file_name_width == 1


def test_combining_mark_keeps_cursor_on_same_cluster() -> None:
    session = make_session("ab")
    session.move(Direction.RIGHT)

    session.insert_char("\u0301")

    assert session.document.lines() == ("a\u0301b",)
    assert session.cursor == Position(0, 1)

    session.move(Direction.END)
    session.insert_char("\u0301")
    assert session.document.lines() == ("a\u0301b\u0301",)
    assert session.cursor == Position(0, 2)


def test_insert_char_newline_moves_to_next_row() -> None:
    session = make_session("ab")
    session.move(Direction.RIGHT)

    session.insert_char("\n")

    assert session.document.lines() == ("a", "b")
    assert session.cursor == Position(1, 0)


def test_search_backward_from_past_end_caret() -> None:
    session = make_session("a cat", "dog")
    session.viewport.set_cursor(Position(2, 0), session.document)
    session.begin_search()

    assert session.find_previous("cat") == Position(0, 2)
    assert session.cursor == Position(0, 2)


def test_failed_find_next_from_past_end_caret_stays_put() -> None:
    session = make_session("a cat", "dog")
    session.viewport.set_cursor(Position(2, 0), session.document)
    session.begin_search()

    assert session.find_next("zzz") is None
    assert session.search("cat") is None
    assert session.cursor == Position(2, 0)


def test_failed_find_next_at_row_end_returns_to_origin() -> None:
    session = make_session("a cat", "dog")
    session.viewport.set_cursor(Position(0, 5), session.document)

    assert session.find_next("cat") is None
    assert session.cursor == Position(0, 5)
