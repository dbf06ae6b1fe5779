#!/usr/bin/env python3
"""Argument parsing for the bgrun command."""

import argparse
import shlex
import sys
from dataclasses import dataclass, field
from typing import Any

from bgrun.exceptions import ConfigError
from bgrun.models import LaunchRequest, Span
from bgrun.settings_manager import get_bool_setting, load_settings

PROG = "bgrun"

# Options that consume the following token as their value
_VALUE_OPTIONS = {"-a", "--arguments"}


@dataclass
class Args:
    """Typed arguments for the bgrun command."""

    command: str
    arguments: list[str]
    debug: bool
    pid: bool
    capture: bool
    json: bool
    verbose: bool
    invocation: str = ""
    command_span: Span | None = field(default=None)

    def to_request(self) -> LaunchRequest:
        """Build the launch request described by these arguments."""
        return LaunchRequest.from_flags(
            self.command,
            self.arguments,
            debug=self.debug,
            pid=self.pid,
            capture=self.capture,
            command_span=self.command_span,
        )


def build_parser() -> argparse.ArgumentParser:
    """Create the argument parser for bgrun."""
    parser = argparse.ArgumentParser(
        prog=PROG,
        description="Start a process in the background.",
        epilog=(
            "Example: start a command in the background\n"
            f"  {PROG} some_command -a arg1 --arguments=--arg2 -a 3\n"
            f"  {PROG} some_command -- arg1 --arg2 3\n\n"
            "Switch defaults can be set with BGRUN_DEBUG, BGRUN_CAPTURE and BGRUN_JSON "
            "or in ~/.bgrun/settings.json."
        ),
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )

    parser.add_argument(
        "command",
        type=str,
        help="The command to start in the background",
    )

    parser.add_argument(
        "-a",
        "--arguments",
        action="append",
        default=[],
        metavar="ARG",
        help="An argument of the command (repeatable, passed verbatim and in order)",
    )

    parser.add_argument(
        "-d",
        "--debug",
        action="store_true",
        default=None,
        help="Debug mode: print the command and arguments before starting it",
    )

    parser.add_argument(
        "-p",
        "--pid",
        action="store_true",
        help="Return process ID",
    )

    parser.add_argument(
        "-c",
        "--capture",
        action="store_true",
        default=None,
        help="Wait for the process to exit and return its output",
    )

    parser.add_argument(
        "--json",
        action="store_true",
        default=None,
        help="Print the result or error as JSON",
    )

    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Show debug logging",
    )

    return parser


def split_passthrough(argv: list[str]) -> tuple[list[str], list[str]]:
    """Split argv at the first '--' into (options, verbatim arguments)."""
    if "--" in argv:
        idx = argv.index("--")
        return argv[:idx], argv[idx + 1 :]
    return argv, []


def locate_command(tokens: list[str], command: str) -> int | None:
    """Return the index of the positional command token within tokens."""
    skip_next = False
    for idx, token in enumerate(tokens):
        if skip_next:
            skip_next = False
            continue
        if token in _VALUE_OPTIONS:
            skip_next = True
            continue
        if token.startswith("-") and token != "-":
            continue
        if token == command:
            return idx
    return None


def render_invocation(tokens: list[str], highlight: int | None = None) -> tuple[str, Span | None]:
    """Quote tokens into a shell-like line and locate one of them.

    Args:
        tokens: Invocation tokens, program name first
        highlight: Index of the token to locate

    Returns:
        The rendered line and the span of the highlighted token
    """
    parts: list[str] = []
    span: Span | None = None
    offset = 0
    for idx, token in enumerate(tokens):
        quoted = shlex.quote(token)
        if idx == highlight:
            span = Span(offset, offset + len(quoted))
        parts.append(quoted)
        offset += len(quoted) + 1
    return " ".join(parts), span


def parse_args(args: list[str] | None = None) -> Args:
    """Parse command line arguments.

    Switches not given on the command line fall back to environment
    variables, then to the settings file.
    """
    if args is None:
        args = sys.argv[1:]

    option_args, passthrough = split_passthrough(args)
    parser = build_parser()
    known_args = parser.parse_args(option_args)

    settings = None
    resolved: dict[str, bool] = {}
    for key in ("debug", "capture", "json"):
        value = getattr(known_args, key)
        if value is None:
            if settings is None:
                settings = _load_settings_or_defaults()
            value = get_bool_setting(key, settings)
        resolved[key] = value

    command_idx = locate_command(option_args, known_args.command)
    highlight = command_idx + 1 if command_idx is not None else None
    invocation, span = render_invocation([PROG, *args], highlight)

    return Args(
        command=known_args.command,
        arguments=[*known_args.arguments, *passthrough],
        debug=resolved["debug"],
        pid=known_args.pid,
        capture=resolved["capture"],
        json=resolved["json"],
        verbose=known_args.verbose,
        invocation=invocation,
        command_span=span,
    )


def _load_settings_or_defaults() -> dict[str, Any]:
    try:
        return load_settings()
    except ConfigError as e:
        print(f"Warning: {e}; using defaults", file=sys.stderr)
        return {}
