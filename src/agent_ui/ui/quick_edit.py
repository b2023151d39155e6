"""Quick edit state: a selection in a live editor, ready to hand to the agent."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Optional

from ..ai.modes import AgentMode, ModePolicy
from ..editor.context import ContextDescriptor, compose_agent_message, extract, selected_text
from ..editor.document_model import SelectionRange
from ..editor.selection_gateway import EditorHandle, EditorRegistry, TextBuffer
from .indicators import SelectionInfo

LOGGER = logging.getLogger(__name__)


@dataclass(slots=True)
class QuickEditState:
    """Tracks the editor, selection and prompt behind one quick edit request.

    The editor is only reached through *handle*; once the editor goes away
    every accessor returns ``None`` instead of failing.
    """

    registry: EditorRegistry
    handle: EditorHandle
    selection: SelectionRange
    prompt: str = ""
    mode: AgentMode = AgentMode.QUICK_EDIT

    @property
    def policy(self) -> ModePolicy:
        return ModePolicy(self.mode)

    def update_selection(self, selection: SelectionRange) -> None:
        self.selection = selection

    def sync_selection(self) -> bool:
        """Pull the current selection from the editor; ``False`` if it is gone."""

        capture = self.registry.capture(self.handle)
        if capture is None:
            return False
        self.selection = capture.selection
        return True

    def _buffer(self) -> Optional[TextBuffer]:
        editor = self.registry.resolve(self.handle)
        if editor is None:
            LOGGER.debug("Quick edit editor handle %s is no longer valid", self.handle)
            return None
        return editor.snapshot()

    def selected_text(self) -> Optional[str]:
        buffer = self._buffer()
        if buffer is None:
            return None
        return selected_text(buffer, self.selection)

    def context_info(self) -> Optional[ContextDescriptor]:
        buffer = self._buffer()
        if buffer is None:
            return None
        return extract(buffer, self.selection)

    def selection_info(self) -> Optional[SelectionInfo]:
        text = self.selected_text()
        if text is None:
            return None
        return SelectionInfo.from_text(text)

    def build_agent_message(self) -> Optional[str]:
        """Return the prompt followed by the fenced context and code blocks."""

        buffer = self._buffer()
        if buffer is None:
            return None
        context = extract(buffer, self.selection)
        return compose_agent_message(self.prompt, context, selected_text(buffer, self.selection))


__all__ = ["QuickEditState"]
