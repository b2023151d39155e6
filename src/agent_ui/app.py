"""Command line entry point for inspecting modes and selection prompts."""

from __future__ import annotations

import argparse
import json
import logging
import sys
from pathlib import Path
from typing import Sequence

from .ai.modes import AgentMode, all_profiles, profile_of
from .ai.tools.errors import ToolError
from .editor.context import compose_agent_message, extract, selected_text
from .editor.document_model import BufferSnapshot, SelectionRange
from .services.settings import Settings, load_settings
from .ui.indicators import SelectionInfo, TokenInfo
from .utils import logging as logging_utils

_LOGGER = logging.getLogger(__name__)


def configure_logging(debug: bool = False, *, log_dir: str | None = None, force: bool = False) -> None:
    """Configure structured logging for the application."""

    level = logging.DEBUG if debug else logging.INFO
    logging_utils.setup_logging(level, log_dir=log_dir, force=force)
    _LOGGER.debug("Logging configured (level=%s)", logging.getLevelName(level))


def main(argv: Sequence[str] | None = None) -> int:
    args = _parse_cli_args(argv)
    settings = load_settings({"debug_logging": True} if args.debug else None)
    if args.debug or settings.debug_logging:
        configure_logging(True, log_dir=settings.log_dir)

    if args.command == "modes":
        return _run_modes(args)
    if args.command == "context":
        return _run_context(args, settings)
    return 1


def _parse_cli_args(argv: Sequence[str] | None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        prog="agent-ui",
        description="Inspect agent modes and build agent prompts from file selections.",
    )
    parser.add_argument("--debug", action="store_true", help="Enable debug logging.")
    commands = parser.add_subparsers(dest="command", required=True)

    modes = commands.add_parser("modes", help="Describe one or all agent modes.")
    modes.add_argument("name", nargs="?", help="Mode to describe (write, ask, quick-edit, manual).")
    modes.add_argument("--json", action="store_true", help="Emit JSON instead of text.")

    context = commands.add_parser("context", help="Format a file selection for the agent.")
    context.add_argument("path", type=Path, help="File to read the selection from.")
    context.add_argument("--start", type=int, default=0, help="Selection start offset.")
    context.add_argument("--end", type=int, help="Selection end offset (defaults to end of file).")
    context.add_argument("--prompt", default="", help="Instruction to place above the selection.")
    context.add_argument("--total-tokens", type=int, default=0, help="Tokens already used in the thread.")
    return parser.parse_args(argv)


def _run_modes(args: argparse.Namespace) -> int:
    if args.name:
        try:
            profiles = (profile_of(args.name),)
        except ValueError as exc:
            print(str(exc), file=sys.stderr)
            return 2
    else:
        profiles = all_profiles()

    if args.json:
        print(json.dumps([profile.as_payload() for profile in profiles], indent=2))
        return 0

    for profile in profiles:
        marker = " (default)" if profile.mode is AgentMode.default() else ""
        print(f"{profile.display_name}{marker}: {profile.description}")
        print(f"  tools: {', '.join(profile.tools)}")
        print(f"  use cases: {', '.join(profile.use_cases)}")
        if profile.shortcut:
            print(f"  shortcut: {profile.shortcut}")
    return 0


def _run_context(args: argparse.Namespace, settings: Settings) -> int:
    try:
        text = args.path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as exc:
        print(f"Unable to read {args.path}: {exc}", file=sys.stderr)
        return 2

    buffer = BufferSnapshot(text=text, path=args.path.as_posix())
    selection = SelectionRange(start=args.start, end=len(text) if args.end is None else args.end)
    try:
        descriptor = extract(buffer, selection)
        code = selected_text(buffer, selection)
    except ToolError as exc:
        print(str(exc), file=sys.stderr)
        return 2

    message = compose_agent_message(args.prompt, descriptor, code)
    usage = TokenInfo.for_selection(
        code,
        total_tokens=args.total_tokens,
        context_window=settings.context_window,
    )
    print(message)
    print()
    print(SelectionInfo.from_text(code).format_display())
    print(usage.format_display(warning_threshold=settings.token_warning_percent))
    return 0


__all__ = ["configure_logging", "main"]
