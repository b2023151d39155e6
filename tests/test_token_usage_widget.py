"""Tests for the token usage status bar widget (headless)."""

from __future__ import annotations

from agent_ui.ui.indicators import SelectionInfo, TokenInfo
from agent_ui.ui.widgets.token_usage import TokenUsageWidget


def test_widget_renders_usage_and_selection_headless() -> None:
    widget = TokenUsageWidget()
    widget.install(None)

    widget.update_usage(TokenInfo(total_tokens=9000, context_window=10000))
    widget.update_selection(SelectionInfo.from_text("a\nb"))

    assert not widget.installed
    assert widget.usage_text == "9000/10000 tokens (90%) ⚠️"
    assert widget.warning is True
    assert widget.selection_text == "2 lines • 3 chars • ~1 tokens"


def test_widget_threshold_and_clear() -> None:
    widget = TokenUsageWidget(warning_threshold=95.0)

    widget.update_usage(TokenInfo(total_tokens=9000, context_window=10000))
    assert widget.warning is False
    assert widget.usage_text == "9000/10000 tokens (90%)"

    widget.update_selection(None)
    widget.clear()
    assert widget.usage_text == ""
    assert widget.selection_text == ""
