"""Selection context extraction and prompt formatting."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Optional

from ..ai.tools.errors import SelectionOutOfBoundsError
from ..services.telemetry import emit as telemetry_emit
from .document_model import SelectionRange
from .selection_gateway import TextBuffer

LOGGER = logging.getLogger(__name__)

CONTEXT_SEPARATOR = " • "

# Checked in order; first matching suffix wins.
LANGUAGE_BY_SUFFIX: tuple[tuple[str, str], ...] = (
    (".rs", "rust"),
    (".ts", "typescript"),
    (".tsx", "typescript"),
    (".js", "javascript"),
    (".jsx", "javascript"),
    (".py", "python"),
    (".go", "go"),
    (".c", "c"),
    (".h", "c"),
    (".cpp", "cpp"),
    (".cc", "cpp"),
    (".java", "java"),
    (".sql", "sql"),
)


def infer_language(path: Optional[str]) -> str:
    """Return the fence tag for *path* based on its suffix, or ``""``."""

    if not path:
        return ""
    for suffix, language in LANGUAGE_BY_SUFFIX:
        if path.endswith(suffix):
            return language
    return ""


@dataclass(slots=True, frozen=True)
class ContextDescriptor:
    """Where a selection sits in its file. Lines and columns are zero-based."""

    file_path: Optional[str]
    start_line: int
    end_line: int
    start_column: int = 0
    end_column: int = 0

    @property
    def is_single_line(self) -> bool:
        return self.start_line == self.end_line

    @property
    def language(self) -> str:
        return infer_language(self.file_path)

    def line_label(self) -> str:
        if self.is_single_line:
            return f"Line {self.start_line + 1}"
        return f"Lines {self.start_line + 1}-{self.end_line + 1}"

    def format(self) -> str:
        """Format the context as a compact human-readable label."""

        parts: list[str] = []
        if self.file_path:
            parts.append(f"File: {self.file_path}")
        parts.append(self.line_label())
        return CONTEXT_SEPARATOR.join(parts)

    def format_for_agent(self, code: str) -> str:
        """Wrap the label and *code* in fenced blocks ready for a prompt."""

        return f"```\n{self.format()}\n```\n\n```{self.language}\n{code}\n```"


def resolve_file_path(buffer: TextBuffer) -> Optional[str]:
    """Ask the buffer for its file path, degrading to ``None`` on failure."""

    try:
        path = buffer.file_path()
    except Exception:
        LOGGER.debug("File path resolution failed; treating buffer as unsaved", exc_info=True)
        return None
    if path is None:
        return None
    text = str(path)
    return text or None


def validate_range(buffer: TextBuffer, selection: SelectionRange) -> int:
    """Return the buffer length or raise when *selection* does not fit."""

    length = len(buffer)
    if not selection.fits(length):
        raise SelectionOutOfBoundsError.for_range(selection.start, selection.end, length)
    return length


def extract(buffer: TextBuffer, selection: SelectionRange) -> ContextDescriptor:
    """Compute the :class:`ContextDescriptor` for *selection* inside *buffer*.

    Raises:
        SelectionOutOfBoundsError: when ``start > len``, ``end > len`` or
            ``start > end``.
    """

    length = validate_range(buffer, selection)
    start_point = buffer.offset_to_point(selection.start)
    end_point = buffer.offset_to_point(selection.end)
    descriptor = ContextDescriptor(
        file_path=resolve_file_path(buffer),
        start_line=start_point.row,
        end_line=end_point.row,
        start_column=start_point.column,
        end_column=end_point.column,
    )
    telemetry_emit(
        "selection_context_extracted",
        {
            "buffer_length": length,
            "span": {"start": selection.start, "end": selection.end},
            "start_line": descriptor.start_line,
            "end_line": descriptor.end_line,
            "has_path": descriptor.file_path is not None,
        },
    )
    return descriptor


def selected_text(buffer: TextBuffer, selection: SelectionRange) -> str:
    validate_range(buffer, selection)
    return buffer.text_for_range(selection.start, selection.end)


def compose_agent_message(prompt: str, context: ContextDescriptor, code: str) -> str:
    """Return *prompt* (if any) followed by the agent-formatted selection."""

    body = context.format_for_agent(code)
    prompt = prompt.strip()
    if not prompt:
        return body
    return f"{prompt}\n\n{body}"


__all__ = [
    "CONTEXT_SEPARATOR",
    "ContextDescriptor",
    "LANGUAGE_BY_SUFFIX",
    "compose_agent_message",
    "extract",
    "infer_language",
    "resolve_file_path",
    "selected_text",
    "validate_range",
]
