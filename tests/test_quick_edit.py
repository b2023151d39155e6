from __future__ import annotations

import gc

import pytest

from agent_ui.ai.modes import AgentMode
from agent_ui.ai.tools.errors import SelectionOutOfBoundsError
from agent_ui.editor.document_model import SelectionRange
from agent_ui.editor.selection_gateway import EditorHandle, EditorRegistry
from agent_ui.ui.quick_edit import QuickEditState
from tests.helpers import StubEditor


def _state(editor: StubEditor, selection: tuple[int, int], **kwargs) -> tuple[QuickEditState, EditorRegistry]:
    registry = EditorRegistry()
    handle = registry.register(editor)
    state = QuickEditState(registry=registry, handle=handle, selection=SelectionRange(*selection), **kwargs)
    return state, registry


def test_selected_text_and_context_info() -> None:
    editor = StubEditor("def f():\n    return 1\n", path="pkg/mod.py")
    state, _ = _state(editor, (9, 21))

    assert state.selected_text() == "    return 1"
    context = state.context_info()
    assert context is not None
    assert context.format() == "File: pkg/mod.py • Line 2"
    assert context.language == "python"


def test_build_agent_message_prefixes_prompt() -> None:
    editor = StubEditor("let x = 1;\n", path="main.rs")
    state, _ = _state(editor, (0, 10), prompt="  Rename x to count  ")

    message = state.build_agent_message()

    assert message == "Rename x to count\n\n```\nFile: main.rs • Line 1\n```\n\n```rust\nlet x = 1;\n```"


def test_build_agent_message_without_prompt() -> None:
    editor = StubEditor("SELECT 1;", path="q.sql")
    state, _ = _state(editor, (0, 9))

    assert state.build_agent_message().startswith("```\nFile: q.sql")


def test_selection_info_summarizes_selection() -> None:
    editor = StubEditor("a\nb\nc\n")
    state, _ = _state(editor, (0, 6))

    info = state.selection_info()

    assert info is not None
    assert info.format_display() == "3 lines • 6 chars • ~1 tokens"


def test_released_handle_reports_empty_results() -> None:
    editor = StubEditor("hello")
    state, registry = _state(editor, (0, 5))

    assert registry.release(state.handle) is True

    assert state.selected_text() is None
    assert state.context_info() is None
    assert state.selection_info() is None
    assert state.build_agent_message() is None
    assert state.sync_selection() is False


def test_collected_editor_reports_empty_results() -> None:
    state, _ = _state(StubEditor("hello"), (0, 5))
    gc.collect()

    assert state.context_info() is None


def test_out_of_bounds_selection_raises() -> None:
    editor = StubEditor("short")
    state, _ = _state(editor, (0, 50))

    with pytest.raises(SelectionOutOfBoundsError):
        state.context_info()
    with pytest.raises(SelectionOutOfBoundsError):
        state.selected_text()


def test_sync_selection_reads_live_editor() -> None:
    editor = StubEditor("one\ntwo\n", selection=(4, 7))
    state, _ = _state(editor, (0, 0))

    assert state.sync_selection() is True
    assert state.selection == SelectionRange(4, 7)
    state.update_selection(SelectionRange(0, 3))
    assert state.selected_text() == "one"


def test_quick_edit_state_defaults_to_quick_edit_policy() -> None:
    state, _ = _state(StubEditor("x"), (0, 1))

    assert state.mode is AgentMode.QUICK_EDIT
    assert state.policy.allows("edit_file")
    assert not state.policy.allows("run_command")


def test_registry_rejects_stale_generations() -> None:
    registry = EditorRegistry()
    first = StubEditor("first")
    second = StubEditor("second")
    old_handle = registry.register(first)
    registry.release(old_handle)

    new_handle = registry.register(second)

    assert new_handle.index == old_handle.index
    assert new_handle.generation == old_handle.generation + 1
    assert registry.resolve(old_handle) is None
    assert registry.resolve(new_handle) is second
    assert registry.release(old_handle) is False
    assert registry.live_count() == 1


def test_registry_ignores_unknown_handles() -> None:
    registry = EditorRegistry()

    assert registry.resolve(EditorHandle(index=3, generation=0)) is None
    assert registry.capture(EditorHandle(index=0, generation=0)) is None


def test_registry_reuses_slots_of_collected_editors() -> None:
    registry = EditorRegistry()
    collected_handle = registry.register(StubEditor("gone"))
    gc.collect()
    replacement = StubEditor("fresh")

    handle = registry.register(replacement)

    assert handle.index == collected_handle.index
    assert handle.generation == collected_handle.generation + 1
    assert registry.resolve(collected_handle) is None
    assert registry.resolve(handle) is replacement
    assert registry.live_count() == 1
