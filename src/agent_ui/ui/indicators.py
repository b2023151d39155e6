"""Token usage and selection summaries shown next to the agent panel."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from ..ai.utils.tokens import estimate_tokens, text_length

DEFAULT_WARNING_PERCENT = 80.0
WARNING_MARKER = "⚠️"


def count_lines(text: str) -> int:
    """Count newline-delimited lines; a trailing newline does not open a new one."""

    if not text:
        return 0
    count = text.count("\n")
    if not text.endswith("\n"):
        count += 1
    return count


@dataclass(slots=True)
class TokenInfo:
    """Token usage for the active agent thread."""

    selection_tokens: int = 0
    total_tokens: int = 0
    context_window: int = 0

    @classmethod
    def for_selection(cls, text: str, *, total_tokens: int = 0, context_window: int = 0) -> "TokenInfo":
        return cls(
            selection_tokens=estimate_tokens(text),
            total_tokens=total_tokens,
            context_window=context_window,
        )

    def percentage_used(self) -> float:
        """Percentage of the context window consumed; ``0.0`` without a window."""

        if self.context_window == 0:
            return 0.0
        return self.total_tokens * 100.0 / self.context_window

    def is_near_limit(self, threshold: float = DEFAULT_WARNING_PERCENT) -> bool:
        return self.percentage_used() > threshold

    def format_display(self, *, warning_threshold: float = DEFAULT_WARNING_PERCENT) -> str:
        percentage = self.percentage_used()
        text = f"{self.total_tokens}/{self.context_window} tokens ({percentage:.0f}%)"
        if percentage > warning_threshold:
            text += f" {WARNING_MARKER}"
        return text

    def as_payload(self) -> dict[str, Any]:
        return {
            "selection_tokens": self.selection_tokens,
            "total_tokens": self.total_tokens,
            "context_window": self.context_window,
            "percentage_used": self.percentage_used(),
        }


@dataclass(slots=True)
class SelectionInfo:
    """Size summary of the selected code."""

    char_count: int
    line_count: int
    token_estimate: int

    @classmethod
    def from_text(cls, text: str) -> "SelectionInfo":
        return cls(
            char_count=text_length(text),
            line_count=count_lines(text),
            token_estimate=estimate_tokens(text),
        )

    def format_display(self) -> str:
        return f"{self.line_count} lines • {self.char_count} chars • ~{self.token_estimate} tokens"


__all__ = [
    "DEFAULT_WARNING_PERCENT",
    "SelectionInfo",
    "TokenInfo",
    "WARNING_MARKER",
    "count_lines",
]
