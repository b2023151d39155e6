"""Tests for the agent mode policy table and authorization gate."""

from __future__ import annotations

from dataclasses import replace

import pytest

from agent_ui.ai import modes as modes_module
from agent_ui.ai.modes import (
    AgentMode,
    CapabilityKind,
    ModePolicy,
    all_profiles,
    capabilities_of,
    is_execution,
    is_mutating,
    metadata_of,
    validate_profiles,
)
from agent_ui.ai.tools.errors import ErrorCode, ToolNotPermittedError
from agent_ui.services import telemetry


def test_mode_display_names() -> None:
    assert AgentMode.WRITE.display_name == "Write"
    assert AgentMode.ASK.display_name == "Ask"
    assert AgentMode.QUICK_EDIT.display_name == "Quick Edit"
    assert AgentMode.MANUAL.display_name == "Manual"


def test_default_mode_is_write() -> None:
    assert AgentMode.default() is AgentMode.WRITE
    assert capabilities_of() == capabilities_of(AgentMode.WRITE)
    assert metadata_of(None).display_name == "Write"


def test_write_mode_enables_mutation_and_execution() -> None:
    tools = capabilities_of(AgentMode.WRITE)
    assert "write_file" in tools
    assert "run_command" in tools
    assert tools == ("read_file", "write_file", "edit_file", "search_files", "run_command", "list_files")


def test_ask_mode_is_read_only() -> None:
    tools = capabilities_of(AgentMode.ASK)
    assert "read_file" in tools
    assert "get_file_outline" in tools
    assert not any(is_mutating(tool) for tool in tools)
    assert not any(is_execution(tool) for tool in tools)


def test_quick_edit_can_edit_but_not_execute() -> None:
    tools = capabilities_of(AgentMode.QUICK_EDIT)
    assert "edit_file" in tools
    assert "run_command" not in tools
    assert not any(is_execution(tool) for tool in tools)


def test_manual_mode_only_suggests() -> None:
    tools = capabilities_of(AgentMode.MANUAL)
    assert "suggest_edit" in tools
    assert not set(tools) & {"write_file", "edit_file", "run_command"}
    assert modes_module.capability_kind("suggest_edit") is CapabilityKind.SUGGEST


def test_every_mode_has_tools_and_description() -> None:
    for profile in all_profiles():
        assert profile.tools
        assert profile.description
        assert profile.use_cases


def test_only_quick_edit_has_shortcut() -> None:
    assert metadata_of(AgentMode.QUICK_EDIT).shortcut == "cmd-k or ctrl-alt-k"
    for mode in (AgentMode.WRITE, AgentMode.ASK, AgentMode.MANUAL):
        assert metadata_of(mode).shortcut is None


def test_profile_table_is_consistent() -> None:
    assert validate_profiles() == []


def test_validate_profiles_flags_mutating_ask_mode() -> None:
    table = dict(modes_module._PROFILES)
    table[AgentMode.ASK] = replace(table[AgentMode.ASK], tools=("read_file", "write_file"))

    problems = validate_profiles(table)

    assert "ask: write_file is not allowed" in problems


def test_validate_profiles_flags_unknown_tool() -> None:
    table = dict(modes_module._PROFILES)
    table[AgentMode.MANUAL] = replace(table[AgentMode.MANUAL], tools=("teleport",))

    assert validate_profiles(table) == ["manual: unknown tool teleport"]


@pytest.mark.parametrize(
    ("raw", "expected"),
    [
        (None, AgentMode.WRITE),
        ("", AgentMode.WRITE),
        ("ask", AgentMode.ASK),
        ("ASK", AgentMode.ASK),
        ("Quick Edit", AgentMode.QUICK_EDIT),
        ("quick-edit", AgentMode.QUICK_EDIT),
        ("QuickEdit", AgentMode.QUICK_EDIT),
        (AgentMode.MANUAL, AgentMode.MANUAL),
    ],
)
def test_parse_accepts_names_values_and_display_names(raw, expected) -> None:
    assert AgentMode.parse(raw) is expected


def test_parse_rejects_unknown_modes() -> None:
    with pytest.raises(ValueError):
        AgentMode.parse("autopilot")


def test_policy_filters_tools_in_order() -> None:
    policy = ModePolicy.for_mode("ask")

    assert policy.allows("read_file")
    assert not policy.allows("edit_file")
    assert policy.filter(["run_command", "list_files", "read_file", "edit_file"]) == ("list_files", "read_file")


def test_policy_require_raises_and_emits_telemetry() -> None:
    captured: list[dict] = []
    telemetry.register_event_listener("tool_permission_denied", captured.append)
    policy = ModePolicy(AgentMode.QUICK_EDIT)

    policy.require("edit_file")
    with pytest.raises(ToolNotPermittedError) as excinfo:
        policy.require("run_command")

    error = excinfo.value
    assert error.to_dict()["error"] == ErrorCode.TOOL_NOT_PERMITTED
    assert error.tool_name == "run_command"
    assert error.mode == "quick_edit"
    assert "Quick Edit" in error.message
    assert captured == [{"event": "tool_permission_denied", "tool_name": "run_command", "mode": "quick_edit"}]


def test_policy_payload_lists_tools() -> None:
    assert ModePolicy(AgentMode.MANUAL).as_payload() == {
        "mode": "manual",
        "tools": ["read_file", "suggest_edit", "search_files"],
    }
