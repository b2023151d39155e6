"""Agent operating modes and the tools each mode may call.

Modes trade autonomy for safety along a single axis:

- ``WRITE``: full tool access, including file mutation and command execution.
- ``QUICK_EDIT``: read plus scoped edits, never command execution.
- ``ASK``: strictly read-only (read, search, list, outline).
- ``MANUAL``: read plus ``suggest_edit``; the agent proposes, the user applies.

The table is fixed. Authorization layers query it through
:func:`capabilities_of` or gate individual calls with :class:`ModePolicy`.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import Enum, auto
from typing import Any, Iterable, Mapping

from ..services.telemetry import emit as telemetry_emit
from .tools.errors import ToolNotPermittedError

LOGGER = logging.getLogger(__name__)


# -----------------------------------------------------------------------------
# Capabilities
# -----------------------------------------------------------------------------


class CapabilityKind(Enum):
    """What a tool is allowed to do to the workspace."""

    READ = auto()
    SUGGEST = auto()  # Proposes a change without applying it
    EDIT = auto()
    EXECUTE = auto()

    @property
    def mutating(self) -> bool:
        return self in (CapabilityKind.EDIT, CapabilityKind.EXECUTE)


READ_FILE = "read_file"
WRITE_FILE = "write_file"
EDIT_FILE = "edit_file"
SEARCH_FILES = "search_files"
RUN_COMMAND = "run_command"
LIST_FILES = "list_files"
GET_FILE_OUTLINE = "get_file_outline"
SUGGEST_EDIT = "suggest_edit"

CAPABILITIES: Mapping[str, CapabilityKind] = {
    READ_FILE: CapabilityKind.READ,
    SEARCH_FILES: CapabilityKind.READ,
    LIST_FILES: CapabilityKind.READ,
    GET_FILE_OUTLINE: CapabilityKind.READ,
    SUGGEST_EDIT: CapabilityKind.SUGGEST,
    WRITE_FILE: CapabilityKind.EDIT,
    EDIT_FILE: CapabilityKind.EDIT,
    RUN_COMMAND: CapabilityKind.EXECUTE,
}


def capability_kind(tool_name: str) -> CapabilityKind | None:
    """Return the kind of *tool_name*, or ``None`` for unknown tools."""

    return CAPABILITIES.get(tool_name)


def is_mutating(tool_name: str) -> bool:
    kind = capability_kind(tool_name)
    return kind is not None and kind.mutating


def is_execution(tool_name: str) -> bool:
    return capability_kind(tool_name) is CapabilityKind.EXECUTE


# -----------------------------------------------------------------------------
# Modes
# -----------------------------------------------------------------------------


class AgentMode(str, Enum):
    """Operating modes offered to the user."""

    WRITE = "write"
    ASK = "ask"
    QUICK_EDIT = "quick_edit"
    MANUAL = "manual"

    @classmethod
    def default(cls) -> "AgentMode":
        return cls.WRITE

    @classmethod
    def parse(cls, value: "AgentMode | str | None") -> "AgentMode":
        """Coerce an enum member, name, value or display name into a mode."""

        if value is None:
            return cls.default()
        if isinstance(value, AgentMode):
            return value
        key = str(value).strip().lower().replace("-", "_").replace(" ", "_")
        if not key:
            return cls.default()
        compact = key.replace("_", "")
        for mode in cls:
            if compact == mode.value.replace("_", ""):
                return mode
        raise ValueError(f"Unknown agent mode: {value!r}")

    @property
    def profile(self) -> "ModeProfile":
        return _PROFILES[self]

    @property
    def display_name(self) -> str:
        return self.profile.display_name

    @property
    def description(self) -> str:
        return self.profile.description

    @property
    def enabled_tools(self) -> tuple[str, ...]:
        return self.profile.tools

    @property
    def use_cases(self) -> tuple[str, ...]:
        return self.profile.use_cases

    @property
    def shortcut_hint(self) -> str | None:
        return self.profile.shortcut


@dataclass(slots=True, frozen=True)
class ModeMetadata:
    """Human-readable description of a mode for menus and pickers."""

    display_name: str
    description: str
    use_cases: tuple[str, ...]
    shortcut: str | None = None


@dataclass(slots=True, frozen=True)
class ModeProfile:
    """Complete, immutable definition of one agent mode."""

    mode: AgentMode
    display_name: str
    description: str
    tools: tuple[str, ...]
    use_cases: tuple[str, ...]
    shortcut: str | None = None

    @property
    def metadata(self) -> ModeMetadata:
        return ModeMetadata(
            display_name=self.display_name,
            description=self.description,
            use_cases=self.use_cases,
            shortcut=self.shortcut,
        )

    def as_payload(self) -> dict[str, Any]:
        payload: dict[str, Any] = {
            "mode": self.mode.value,
            "display_name": self.display_name,
            "description": self.description,
            "tools": list(self.tools),
            "use_cases": list(self.use_cases),
        }
        if self.shortcut:
            payload["shortcut"] = self.shortcut
        return payload


_PROFILES: Mapping[AgentMode, ModeProfile] = {
    AgentMode.WRITE: ModeProfile(
        mode=AgentMode.WRITE,
        display_name="Write",
        description="Full access to tools for comprehensive edits, refactoring, and code generation",
        tools=(READ_FILE, WRITE_FILE, EDIT_FILE, SEARCH_FILES, RUN_COMMAND, LIST_FILES),
        use_cases=(
            "Feature implementation",
            "Large refactoring",
            "Bug fixing with broad changes",
            "Test generation",
        ),
    ),
    AgentMode.ASK: ModeProfile(
        mode=AgentMode.ASK,
        display_name="Ask",
        description="Read-only mode for analyzing code, answering questions, and understanding",
        tools=(READ_FILE, SEARCH_FILES, LIST_FILES, GET_FILE_OUTLINE),
        use_cases=(
            "Code review",
            "Understanding codebase",
            "Performance analysis",
            "Documentation generation",
        ),
    ),
    AgentMode.QUICK_EDIT: ModeProfile(
        mode=AgentMode.QUICK_EDIT,
        display_name="Quick Edit",
        description="Focused mode for making quick, scoped edits to selected code ranges",
        tools=(READ_FILE, EDIT_FILE, SEARCH_FILES),
        use_cases=(
            "Quick bug fixes",
            "Small refactoring",
            "Variable renaming",
            "Comment updates",
        ),
        shortcut="cmd-k or ctrl-alt-k",
    ),
    AgentMode.MANUAL: ModeProfile(
        mode=AgentMode.MANUAL,
        display_name="Manual",
        description="User controls all actions - agent suggests, you decide what to apply",
        tools=(READ_FILE, SUGGEST_EDIT, SEARCH_FILES),
        use_cases=(
            "Precise control needed",
            "Critical code changes",
            "Learning from agent suggestions",
        ),
    ),
}


def profile_of(mode: AgentMode | str | None = None) -> ModeProfile:
    return _PROFILES[AgentMode.parse(mode)]


def capabilities_of(mode: AgentMode | str | None = None) -> tuple[str, ...]:
    """Return the ordered tool names enabled for *mode* (default: ``WRITE``)."""

    return profile_of(mode).tools


def metadata_of(mode: AgentMode | str | None = None) -> ModeMetadata:
    """Return display metadata for *mode* (default: ``WRITE``)."""

    return profile_of(mode).metadata


def all_profiles() -> tuple[ModeProfile, ...]:
    return tuple(_PROFILES[mode] for mode in AgentMode)


def validate_profiles(profiles: Mapping[AgentMode, ModeProfile] | None = None) -> list[str]:
    """Return a list of violations of the autonomy ordering between modes.

    An empty list means the table is consistent: every mode has tools, every
    tool is catalogued, ``ASK`` cannot mutate, ``QUICK_EDIT`` cannot execute,
    ``MANUAL`` cannot apply changes, and read access only widens from ``ASK``
    through ``QUICK_EDIT`` to ``WRITE``.
    """

    table = profiles if profiles is not None else _PROFILES
    problems: list[str] = []
    for mode in AgentMode:
        profile = table.get(mode)
        if profile is None:
            problems.append(f"{mode.value}: missing profile")
            continue
        if not profile.tools:
            problems.append(f"{mode.value}: no tools enabled")
        if len(set(profile.tools)) != len(profile.tools):
            problems.append(f"{mode.value}: duplicate tools")
        for tool in profile.tools:
            if tool not in CAPABILITIES:
                problems.append(f"{mode.value}: unknown tool {tool}")
    if problems:
        return problems

    def _forbidden(mode: AgentMode, predicate) -> None:
        for tool in table[mode].tools:
            if predicate(tool):
                problems.append(f"{mode.value}: {tool} is not allowed")

    _forbidden(AgentMode.ASK, is_mutating)
    _forbidden(AgentMode.QUICK_EDIT, is_execution)
    _forbidden(AgentMode.MANUAL, is_mutating)

    def _reads(mode: AgentMode) -> set[str]:
        return {tool for tool in table[mode].tools if capability_kind(tool) is CapabilityKind.READ}

    write_tools = set(table[AgentMode.WRITE].tools)
    if not any(is_mutating(tool) for tool in write_tools) or not any(is_execution(tool) for tool in write_tools):
        problems.append("write: must enable both mutation and execution")
    if not _reads(AgentMode.QUICK_EDIT) <= write_tools:
        problems.append("quick_edit: reads must be a subset of write")
    if not _reads(AgentMode.QUICK_EDIT) <= _reads(AgentMode.ASK):
        problems.append("quick_edit: reads must be a subset of ask")
    return problems


# -----------------------------------------------------------------------------
# Authorization Gate
# -----------------------------------------------------------------------------


@dataclass(slots=True, frozen=True)
class ModePolicy:
    """Gate that decides which tool invocations a session may issue."""

    mode: AgentMode = AgentMode.WRITE

    @classmethod
    def for_mode(cls, mode: AgentMode | str | None) -> "ModePolicy":
        return cls(mode=AgentMode.parse(mode))

    @property
    def tools(self) -> tuple[str, ...]:
        return capabilities_of(self.mode)

    def allows(self, tool_name: str) -> bool:
        return tool_name in self.tools

    def require(self, tool_name: str) -> None:
        """Raise :class:`ToolNotPermittedError` unless *tool_name* is enabled."""

        if self.allows(tool_name):
            return
        LOGGER.info("Blocked %s in %s mode", tool_name, self.mode.value)
        telemetry_emit(
            "tool_permission_denied",
            {"tool_name": tool_name, "mode": self.mode.value},
        )
        raise ToolNotPermittedError(
            message=f"{tool_name} is not available in {self.mode.display_name} mode",
            tool_name=tool_name,
            mode=self.mode.value,
        )

    def filter(self, tool_names: Iterable[str]) -> tuple[str, ...]:
        """Return *tool_names* in their original order, minus disallowed ones."""

        allowed = set(self.tools)
        return tuple(name for name in tool_names if name in allowed)

    def as_payload(self) -> dict[str, Any]:
        return {"mode": self.mode.value, "tools": list(self.tools)}


__all__ = [
    "AgentMode",
    "CAPABILITIES",
    "CapabilityKind",
    "ModeMetadata",
    "ModePolicy",
    "ModeProfile",
    "all_profiles",
    "capabilities_of",
    "capability_kind",
    "is_execution",
    "is_mutating",
    "metadata_of",
    "profile_of",
    "validate_profiles",
]
