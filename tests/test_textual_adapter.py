from __future__ import annotations

from pathlib import Path
from typing import List, Sequence, Tuple

from hecto_engine.adapters.textual import TextualEditorAdapter, TextualUIHooks
from hecto_engine.buffer import Document, Position
from hecto_engine.runtime.config import EditorSettings
from hecto_engine.session import EditorSession, RenderedRow


class Recorder:
    def __init__(self) -> None:
        self.rows: List[List[str]] = []
        self.statuses: List[str] = []
        self.messages: List[str] = []
        self.cursors: List[Tuple[int, int]] = []
        self.logs: List[str] = []
        self.quits = 0

    def hooks(self) -> TextualUIHooks:
        return TextualUIHooks(
            update_rows=self._record_rows,
            update_status=self.statuses.append,
            update_message=self.messages.append,
            update_cursor=self.cursors.append,
            quit=self._quit,
            log=self.logs.append,
        )

    def _record_rows(self, rows: Sequence[RenderedRow]) -> None:
        self.rows.append([row.text for row in rows])

    def _quit(self) -> None:
        self.quits += 1


def make_adapter(*lines: str) -> Tuple[TextualEditorAdapter, Recorder]:
    document = Document.from_text("".join(f"{line}\n" for line in lines))
    session = EditorSession(document, size=(10, 40), settings=EditorSettings())
    recorder = Recorder()
    return TextualEditorAdapter(session, recorder.hooks()), recorder


def type_text(adapter: TextualEditorAdapter, text: str) -> None:
    for char in text:
        adapter.handle_textual_key(char, text=char)


def test_adapter_pushes_initial_frame() -> None:
    _, recorder = make_adapter("hello")

    assert recorder.rows == [["hello"]]
    assert recorder.cursors == [(0, 0)]
    assert recorder.statuses[-1].startswith("[No Name] - 1 lines")


def test_typing_updates_rows_and_cursor() -> None:
    adapter, recorder = make_adapter()

    type_text(adapter, "hi")
    assert adapter.handle_textual_key("enter") is True

    assert recorder.rows[-1] == ["hi", ""]
    assert recorder.cursors[-1] == (0, 1)
    assert "(modified)" in recorder.statuses[-1]


def test_arrow_keys_move_cursor() -> None:
    adapter, recorder = make_adapter("abc", "de")

    adapter.handle_textual_key("end")
    adapter.handle_textual_key("down")

    assert adapter.session.cursor == Position(1, 2)
    assert recorder.cursors[-1] == (2, 1)


def test_save_prompts_for_name_then_writes(tmp_path: Path) -> None:
    adapter, recorder = make_adapter("data")
    target = str(tmp_path / "out.txt")

    adapter.handle_textual_key("ctrl+s")
    assert adapter.prompt is not None and adapter.prompt.kind == "save_as"
    assert recorder.messages[-1] == "Save as: "

    type_text(adapter, target)
    assert recorder.messages[-1] == f"Save as: {target}"
    adapter.handle_textual_key("enter")

    assert adapter.prompt is None
    assert recorder.messages[-1] == "File saved successfully."
    assert Path(target).read_text() == "data\n"


def test_escape_aborts_save_prompt() -> None:
    adapter, recorder = make_adapter("data")

    adapter.handle_textual_key("ctrl+s")
    type_text(adapter, "x")
    adapter.handle_textual_key("escape")

    assert adapter.prompt is None
    assert recorder.messages[-1] == "Save aborted."
    assert adapter.session.file_name is None


def test_prompt_backspace_edits_query() -> None:
    adapter, recorder = make_adapter("data")

    adapter.handle_textual_key("ctrl+s")
    type_text(adapter, "ab")
    adapter.handle_textual_key("backspace")

    assert recorder.messages[-1] == "Save as: a"


def test_search_prompt_navigates_and_cancel_restores() -> None:
    adapter, _ = make_adapter("a cat", "cat dog")

    adapter.handle_textual_key("ctrl+f")
    type_text(adapter, "cat")
    assert adapter.session.cursor == Position(0, 2)

    adapter.handle_textual_key("right")
    assert adapter.session.cursor == Position(1, 0)

    adapter.handle_textual_key("left")
    assert adapter.session.cursor == Position(0, 2)

    adapter.handle_textual_key("escape")
    assert adapter.prompt is None
    assert adapter.session.cursor == Position(0, 0)
    assert adapter.session.highlighted_word is None


def test_search_enter_keeps_match() -> None:
    adapter, _ = make_adapter("a cat", "cat dog")

    adapter.handle_textual_key("ctrl+f")
    type_text(adapter, "dog")
    adapter.handle_textual_key("enter")

    assert adapter.session.cursor == Position(1, 4)
    assert adapter.session.highlighted_word is None


def test_quit_hook_fires_after_confirmations() -> None:
    adapter, recorder = make_adapter("x")
    type_text(adapter, "y")

    for _ in range(3):
        adapter.handle_textual_key("ctrl+q")
    assert recorder.quits == 0
    assert recorder.messages[-1].startswith("WARNING!")

    adapter.handle_textual_key("ctrl+q")
    assert recorder.quits == 1


def test_clean_session_quits_at_once() -> None:
    adapter, recorder = make_adapter("x")

    adapter.handle_textual_key("ctrl+q")

    assert recorder.quits == 1


def test_unknown_key_is_not_consumed() -> None:
    adapter, recorder = make_adapter("x")

    assert adapter.handle_textual_key("f1") is False
    assert adapter.session.dirty is False


def test_log_hook_records_key_and_result() -> None:
    adapter, recorder = make_adapter("x")

    adapter.handle_textual_key("right")

    assert recorder.logs[0].startswith("key ->")
    assert "key='right'" in recorder.logs[0]
    assert recorder.logs[1].startswith("result <-")
    assert "consumed=True" in recorder.logs[1]


def test_resize_refreshes_frame() -> None:
    adapter, recorder = make_adapter(*[str(index) for index in range(20)])
    adapter.handle_textual_key("pagedown")

    adapter.resize(5, 40)

    assert adapter.session.viewport.size == (5, 40)
    assert recorder.rows[-1] == ["6", "7", "8", "9", "10"]


def test_escape_outside_prompt_does_not_quit() -> None:
    adapter, recorder = make_adapter("x")

    assert adapter.handle_textual_key("escape") is False

    assert recorder.quits == 0
    assert adapter.session.should_quit is False
