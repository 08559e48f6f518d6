"""Textual host for the editing engine.

Only the controller is imported eagerly; ``app`` needs Textual installed.
"""

from .controller import PromptState, TextualEditorAdapter, TextualUIHooks

__all__ = ["PromptState", "TextualEditorAdapter", "TextualUIHooks"]
