"""Standardized error types for agent tools and selection handling.

Every error carries a machine-readable code plus a human-readable message so
callers can forward it to the prompt layer or the status bar unchanged.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any


# -----------------------------------------------------------------------------
# Error Code Constants
# -----------------------------------------------------------------------------

class ErrorCode:
    """Constants for error codes used in tool responses."""

    # Range errors
    SELECTION_OUT_OF_BOUNDS = "selection_out_of_bounds"

    # Permission errors
    TOOL_NOT_PERMITTED = "tool_not_permitted"


# -----------------------------------------------------------------------------
# Base Error Class
# -----------------------------------------------------------------------------

@dataclass
class ToolError(Exception):
    """Base exception class for all tool errors.

    Attributes:
        error_code: Machine-readable error identifier.
        message: Human-readable error description.
        details: Additional structured error information.
        suggestion: Actionable guidance for recovery.
    """

    error_code: str
    message: str
    details: dict[str, Any] = field(default_factory=dict)
    suggestion: str = ""

    def __post_init__(self) -> None:
        Exception.__init__(self, self.message)

    def to_dict(self) -> dict[str, Any]:
        """Serialize to a dictionary for JSON tool responses."""
        result: dict[str, Any] = {
            "error": self.error_code,
            "message": self.message,
        }
        if self.details:
            result["details"] = dict(self.details)
        if self.suggestion:
            result["suggestion"] = self.suggestion
        return result

    def __str__(self) -> str:
        return f"[{self.error_code}] {self.message}"


# -----------------------------------------------------------------------------
# Range Errors
# -----------------------------------------------------------------------------

@dataclass
class SelectionOutOfBoundsError(ToolError):
    """Error raised when a selection range does not fit inside its buffer."""

    error_code: str = field(default=ErrorCode.SELECTION_OUT_OF_BOUNDS)
    message: str = field(default="Selection range is outside the buffer")
    details: dict[str, Any] = field(default_factory=dict)
    suggestion: str = field(default="Capture a fresh selection from the editor and retry")

    start: int | None = field(default=None)
    end: int | None = field(default=None)
    buffer_length: int | None = field(default=None)

    @classmethod
    def for_range(cls, start: int, end: int, buffer_length: int) -> "SelectionOutOfBoundsError":
        return cls(
            message=f"Selection {start}..{end} is invalid for a buffer of length {buffer_length}",
            start=start,
            end=end,
            buffer_length=buffer_length,
        )

    def to_dict(self) -> dict[str, Any]:
        result = super().to_dict()
        if self.start is not None:
            result["start"] = self.start
        if self.end is not None:
            result["end"] = self.end
        if self.buffer_length is not None:
            result["buffer_length"] = self.buffer_length
        return result


# -----------------------------------------------------------------------------
# Permission Errors
# -----------------------------------------------------------------------------

@dataclass
class ToolNotPermittedError(ToolError):
    """Error raised when the active agent mode does not allow a tool."""

    error_code: str = field(default=ErrorCode.TOOL_NOT_PERMITTED)
    message: str = field(default="Tool is not available in the current mode")
    details: dict[str, Any] = field(default_factory=dict)
    suggestion: str = field(default="Switch to a mode that enables this tool")

    tool_name: str | None = field(default=None)
    mode: str | None = field(default=None)

    def to_dict(self) -> dict[str, Any]:
        result = super().to_dict()
        if self.tool_name is not None:
            result["tool_name"] = self.tool_name
        if self.mode is not None:
            result["mode"] = self.mode
        return result


__all__ = [
    "ErrorCode",
    "ToolError",
    "SelectionOutOfBoundsError",
    "ToolNotPermittedError",
]
