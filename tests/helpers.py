"""Shared test helpers and stub classes.

Import from here instead of duplicating editor stubs in individual test files.
"""

from __future__ import annotations

from agent_ui.editor.document_model import BufferSnapshot


class StubEditor:
    """Minimal live editor exposing a snapshot and a selection span.

    Example:
        from tests.helpers import StubEditor

        editor = StubEditor("hello\nworld", path="notes.py", selection=(0, 5))
    """

    def __init__(self, text: str = "", *, path: str | None = None, selection: tuple[int, int] = (0, 0)) -> None:
        self.text = text
        self.path = path
        self.selection = selection
        self.snapshot_calls = 0

    def snapshot(self) -> BufferSnapshot:
        self.snapshot_calls += 1
        return BufferSnapshot(text=self.text, path=self.path)

    def selection_span(self) -> tuple[int, int]:
        return self.selection
