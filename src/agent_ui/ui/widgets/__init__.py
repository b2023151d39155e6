"""Status bar widgets."""

from .token_usage import TokenUsageWidget

__all__ = ["TokenUsageWidget"]
