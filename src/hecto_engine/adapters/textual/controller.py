"""Textual-facing adapter translating key names into session intents."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Dict, Mapping, Optional, Sequence, Tuple

from hecto_engine.graphemes import split_graphemes
from hecto_engine.session import EditorSession, RenderedRow
from hecto_engine.view import Direction


def _noop(*_args, **_kwargs) -> None:  # pragma: no cover - default hook
    return None


@dataclass(slots=True)
class TextualUIHooks:
    """Callbacks invoked by the adapter to update Textual widgets."""

    update_rows: Callable[[Sequence[RenderedRow]], None]
    update_status: Callable[[str], None] = _noop
    update_message: Callable[[str], None] = _noop
    update_cursor: Callable[[Tuple[int, int]], None] = _noop
    quit: Callable[[], None] = _noop
    # Optional realtime log callback a host may use to surface debug lines
    log: Callable[[str], None] = _noop


@dataclass(slots=True)
class PromptState:
    kind: str
    label: str
    text: str = ""


SAVE_AS_PROMPT = "Save as: "
SEARCH_PROMPT = "Search (ESC to cancel, Arrows to navigate): "

MOVE_KEYS: Mapping[str, Direction] = {
    "up": Direction.UP,
    "down": Direction.DOWN,
    "left": Direction.LEFT,
    "right": Direction.RIGHT,
    "pageup": Direction.PAGE_UP,
    "pagedown": Direction.PAGE_DOWN,
    "home": Direction.HOME,
    "end": Direction.END,
}


class TextualEditorAdapter:
    """Bridges an EditorSession to a Textual-friendly surface."""

    def __init__(self, session: EditorSession, hooks: TextualUIHooks) -> None:
        self.session = session
        self.hooks = hooks
        self.prompt: Optional[PromptState] = None
        self.refresh()

    def handle_textual_key(self, key: str, *, text: Optional[str] = None) -> bool:
        """Dispatch one Textual key; returns whether it was consumed."""

        self._log_state("key ->", key=key, text=text)
        if self.prompt is not None:
            consumed = self._handle_prompt_key(key, text)
        else:
            consumed = self._handle_editor_key(key, text)
        self.refresh()
        self._log_state("result <-", consumed=consumed)
        return consumed

    def resize(self, rows: int, columns: int) -> None:
        self.session.resize(rows, columns)
        self.refresh()

    def refresh(self) -> None:
        session = self.session
        self.hooks.update_rows(session.visible_rows())
        self.hooks.update_status(session.status_line().format(session.viewport.columns))
        if self.prompt is not None:
            self.hooks.update_message(f"{self.prompt.label}{self.prompt.text}")
        else:
            self.hooks.update_message(session.message())
        self.hooks.update_cursor(session.screen_cursor())

    def _handle_editor_key(self, key: str, text: Optional[str]) -> bool:
        session = self.session
        if key == "ctrl+q":
            if session.request_quit():
                self.hooks.quit()
        elif key == "ctrl+s":
            if session.needs_file_name:
                self.prompt = PromptState("save_as", SAVE_AS_PROMPT)
            else:
                session.save()
        elif key == "ctrl+f":
            session.begin_search()
            self.prompt = PromptState("search", SEARCH_PROMPT)
        elif key == "enter":
            session.insert_newline()
        elif key == "backspace":
            session.backspace()
        elif key == "delete":
            session.delete_forward()
        elif key in MOVE_KEYS:
            session.move(MOVE_KEYS[key])
        elif key == "tab":
            session.insert_char("\t")
        elif text and text.isprintable():
            session.insert_char(text)
        else:
            return False
        return True

    def _handle_prompt_key(self, key: str, text: Optional[str]) -> bool:
        prompt = self.prompt
        assert prompt is not None
        if key == "escape":
            prompt.text = ""
            self._close_prompt(accept=False)
            return True
        if key == "enter":
            self._close_prompt(accept=True)
            return True

        if key == "backspace":
            prompt.text = "".join(split_graphemes(prompt.text)[:-1])
        elif text and text.isprintable():
            prompt.text += text
        elif prompt.kind != "search" or key not in MOVE_KEYS:
            return False

        if prompt.kind == "search":
            self._search_step(key, prompt.text)
        return True

    def _search_step(self, key: str, query: str) -> None:
        if key in {"right", "down"}:
            self.session.find_next(query)
        elif key in {"left", "up"}:
            self.session.find_previous(query)
        else:
            self.session.search(query)

    def _close_prompt(self, *, accept: bool) -> None:
        prompt = self.prompt
        self.prompt = None
        if prompt is None:
            return
        if prompt.kind == "save_as":
            if accept and prompt.text:
                self.session.save(prompt.text)
            else:
                self.session.abort_save()
        else:
            self.session.end_search(accept=accept and bool(prompt.text))

    def _log_state(self, prefix: str, **fields: object) -> None:
        snapshot = self._state_metadata()
        snapshot.update({k: v for k, v in fields.items() if v is not None})
        parts = [prefix]
        for key, value in snapshot.items():
            parts.append(f"{key}={value!r}")
        self.hooks.log(" ".join(parts))

    def _state_metadata(self) -> Dict[str, object]:
        session = self.session
        return {
            "cursor": tuple(session.cursor),
            "offset": tuple(session.viewport.offset),
            "rows": session.row_count,
            "dirty": session.dirty,
            "prompt": self.prompt.kind if self.prompt else None,
        }


__all__ = ["PromptState", "TextualEditorAdapter", "TextualUIHooks"]
