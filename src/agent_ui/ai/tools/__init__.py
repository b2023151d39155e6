"""Tool-facing error types."""

from .errors import ErrorCode, SelectionOutOfBoundsError, ToolError, ToolNotPermittedError

__all__ = ["ErrorCode", "SelectionOutOfBoundsError", "ToolError", "ToolNotPermittedError"]
