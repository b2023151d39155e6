"""Shared pytest fixtures."""

from __future__ import annotations

import pytest

from agent_ui.editor.document_model import BufferSnapshot
from agent_ui.services import telemetry


@pytest.fixture(autouse=True)
def _reset_telemetry_listeners():
    telemetry.clear_event_listeners()
    yield
    telemetry.clear_event_listeners()


@pytest.fixture
def sample_buffer() -> BufferSnapshot:
    return BufferSnapshot(
        text="fn main() {\n    println!(\"hi\");\n}\n",
        path="src/main.rs",
    )
