"""Status bar component showing token usage and the current selection size."""

from __future__ import annotations

import logging
from typing import Any

try:  # pragma: no cover - Qt imports are optional during tests
    from PySide6.QtWidgets import QLabel
except Exception:  # pragma: no cover - PySide6 not available
    QLabel = None  # type: ignore[assignment]

from ..indicators import DEFAULT_WARNING_PERCENT, SelectionInfo, TokenInfo

LOGGER = logging.getLogger(__name__)


class TokenUsageWidget:
    """Holds the rendered indicator strings and mirrors them into Qt labels."""

    def __init__(self, *, warning_threshold: float = DEFAULT_WARNING_PERCENT) -> None:
        self.warning_threshold = warning_threshold
        self.usage_text: str = ""
        self.selection_text: str = ""
        self.warning: bool = False
        self._usage_label: Any = None
        self._selection_label: Any = None

    @property
    def installed(self) -> bool:
        return self._usage_label is not None

    def install(self, status_bar: Any | None) -> None:
        if status_bar is None or QLabel is None:
            return
        self._usage_label = QLabel(self.usage_text)
        self._usage_label.setObjectName("agent-status-token-usage")
        self._usage_label.setContentsMargins(8, 0, 8, 0)
        self._selection_label = QLabel(self.selection_text)
        self._selection_label.setObjectName("agent-status-selection")
        self._selection_label.setContentsMargins(0, 0, 8, 0)
        try:
            status_bar.addPermanentWidget(self._usage_label)
            status_bar.addPermanentWidget(self._selection_label)
        except Exception:
            LOGGER.debug("Unable to attach token usage labels", exc_info=True)
            self._usage_label = None
            self._selection_label = None

    def update_usage(self, usage: TokenInfo) -> None:
        self.usage_text = usage.format_display(warning_threshold=self.warning_threshold)
        self.warning = usage.is_near_limit(self.warning_threshold)
        self._refresh_labels()

    def update_selection(self, selection: SelectionInfo | None) -> None:
        self.selection_text = selection.format_display() if selection is not None else ""
        self._refresh_labels()

    def clear(self) -> None:
        self.usage_text = ""
        self.selection_text = ""
        self.warning = False
        self._refresh_labels()

    def _refresh_labels(self) -> None:
        if self._usage_label is not None:
            try:
                self._usage_label.setText(self.usage_text)
                self._usage_label.setProperty("warning", self.warning)
            except Exception:  # pragma: no cover - Qt defensive guard
                LOGGER.debug("Token usage label refresh failed", exc_info=True)
        if self._selection_label is not None:
            try:
                self._selection_label.setText(self.selection_text)
            except Exception:  # pragma: no cover - Qt defensive guard
                LOGGER.debug("Selection label refresh failed", exc_info=True)


__all__ = ["TokenUsageWidget"]
