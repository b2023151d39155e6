"""Dataclasses representing buffer snapshots and selection ranges."""

from __future__ import annotations

from bisect import bisect_right
from dataclasses import dataclass, field
from pathlib import Path
from typing import Callable, NamedTuple, Optional


class Point(NamedTuple):
    """Zero-based (row, column) position inside a buffer."""

    row: int
    column: int


@dataclass(slots=True, frozen=True)
class SelectionRange:
    """Half-open ``[start, end)`` offset interval into a buffer snapshot."""

    start: int = 0
    end: int = 0

    def fits(self, buffer_length: int) -> bool:
        """Return ``True`` when ``start <= end <= buffer_length``."""

        return 0 <= self.start <= self.end <= buffer_length

    @classmethod
    def from_span(cls, span: tuple[int, int]) -> "SelectionRange":
        start, end = span
        return cls(start=int(start), end=int(end))


def _line_start_offsets(text: str) -> tuple[int, ...]:
    offsets = [0]
    cursor = text.find("\n")
    while cursor != -1:
        offsets.append(cursor + 1)
        cursor = text.find("\n", cursor + 1)
    return tuple(offsets)


@dataclass(slots=True, frozen=True)
class BufferSnapshot:
    """Immutable point-in-time view of an editor buffer.

    Offsets are Python string indices. ``path_resolver`` lets hosts plug in
    their own file association lookup; it may raise, and callers treat that
    as "no path".
    """

    text: str = ""
    path: Optional[Path | str] = None
    path_resolver: Optional[Callable[[], Optional[str]]] = field(default=None, compare=False, repr=False)
    line_start_offsets: tuple[int, ...] = field(default=(), compare=False, repr=False)

    def __post_init__(self) -> None:
        if not self.line_start_offsets:
            object.__setattr__(self, "line_start_offsets", _line_start_offsets(self.text))

    def __len__(self) -> int:
        return len(self.text)

    @property
    def line_count(self) -> int:
        return len(self.line_start_offsets)

    def text_for_range(self, start: int, end: int) -> str:
        return self.text[start:end]

    def offset_to_point(self, offset: int) -> Point:
        """Convert an offset into a zero-based row/column pair."""

        cursor = max(0, min(int(offset), len(self.text)))
        row = max(0, bisect_right(self.line_start_offsets, cursor) - 1)
        return Point(row=row, column=cursor - self.line_start_offsets[row])

    def point_to_offset(self, point: Point) -> int:
        row = max(0, min(point.row, self.line_count - 1))
        line_start = self.line_start_offsets[row]
        line_end = self.line_start_offsets[row + 1] - 1 if row + 1 < self.line_count else len(self.text)
        return min(line_start + max(0, point.column), line_end)

    def file_path(self) -> Optional[str]:
        """Return the associated file path, or ``None`` for unsaved buffers."""

        if self.path_resolver is not None:
            return self.path_resolver()
        if self.path is None:
            return None
        return str(self.path)


__all__ = ["BufferSnapshot", "Point", "SelectionRange"]
