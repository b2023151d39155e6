"""Facade exposing read-only buffer snapshots and revocable editor handles."""

from __future__ import annotations

import logging
import weakref
from dataclasses import dataclass, field
from typing import Optional, Protocol, runtime_checkable

from .document_model import Point, SelectionRange

LOGGER = logging.getLogger(__name__)


@runtime_checkable
class TextBuffer(Protocol):
    """Buffer snapshot capability supplied by the host editor."""

    def __len__(self) -> int:
        ...

    def text_for_range(self, start: int, end: int) -> str:
        ...

    def offset_to_point(self, offset: int) -> Point:
        ...

    def file_path(self) -> Optional[str]:
        ...


class EditorLike(Protocol):
    """Live editor surface; only ever reached through an :class:`EditorHandle`."""

    def snapshot(self) -> TextBuffer:
        ...

    def selection_span(self) -> tuple[int, int]:
        ...


@dataclass(slots=True, frozen=True)
class EditorHandle:
    """Generation-checked token pointing at a registered editor."""

    index: int
    generation: int


@dataclass(slots=True)
class _Slot:
    generation: int = 0
    ref: Optional[weakref.ReferenceType] = None


@dataclass(slots=True, frozen=True)
class SelectionCapture:
    """Snapshot plus the selection that was active when it was taken."""

    buffer: TextBuffer
    selection: SelectionRange


@dataclass(slots=True)
class EditorRegistry:
    """Hands out non-owning handles to live editors.

    A handle stops resolving once it is released or once the editor has been
    garbage collected. Released and collected slots are reused with a bumped
    generation, so stale handles never resolve to a newer editor.
    """

    _slots: list[_Slot] = field(default_factory=list)
    _free: list[int] = field(default_factory=list)

    def register(self, editor: EditorLike) -> EditorHandle:
        if not self._free:
            self._reclaim_collected()
        if self._free:
            index = self._free.pop()
            slot = self._slots[index]
        else:
            index = len(self._slots)
            slot = _Slot()
            self._slots.append(slot)
        slot.ref = weakref.ref(editor)
        LOGGER.debug("Registered editor slot %s (generation %s)", index, slot.generation)
        return EditorHandle(index=index, generation=slot.generation)

    def release(self, handle: EditorHandle) -> bool:
        """Revoke *handle*; return ``False`` when it was already stale."""

        slot = self._slot_for(handle)
        if slot is None:
            return False
        slot.ref = None
        slot.generation += 1
        self._free.append(handle.index)
        LOGGER.debug("Released editor slot %s", handle.index)
        return True

    def resolve(self, handle: EditorHandle) -> Optional[EditorLike]:
        slot = self._slot_for(handle)
        if slot is None or slot.ref is None:
            return None
        editor = slot.ref()
        if editor is None:
            LOGGER.debug("Editor behind slot %s has been collected", handle.index)
        return editor

    def capture(self, handle: EditorHandle) -> Optional[SelectionCapture]:
        """Snapshot the editor's buffer and current selection, if it still exists."""

        editor = self.resolve(handle)
        if editor is None:
            return None
        return SelectionCapture(
            buffer=editor.snapshot(),
            selection=SelectionRange.from_span(editor.selection_span()),
        )

    def live_count(self) -> int:
        return sum(1 for slot in self._slots if slot.ref is not None and slot.ref() is not None)

    def _reclaim_collected(self) -> None:
        for index, slot in enumerate(self._slots):
            if slot.ref is not None and slot.ref() is None:
                slot.ref = None
                slot.generation += 1
                self._free.append(index)

    def _slot_for(self, handle: EditorHandle) -> Optional[_Slot]:
        if not 0 <= handle.index < len(self._slots):
            return None
        slot = self._slots[handle.index]
        if slot.generation != handle.generation:
            return None
        return slot


__all__ = [
    "EditorHandle",
    "EditorLike",
    "EditorRegistry",
    "SelectionCapture",
    "TextBuffer",
]
