"""UI-facing state and indicators for the agent panel."""

from .indicators import SelectionInfo, TokenInfo
from .quick_edit import QuickEditState

__all__ = ["QuickEditState", "SelectionInfo", "TokenInfo"]
