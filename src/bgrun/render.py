"""Rendering of launch results and errors for the terminal."""

import json
import sys
from typing import TextIO

from bgrun.exceptions import LaunchError
from bgrun.models import LaunchResult, ResultKind


# ANSI color codes for terminal output
class Colors:
    """ANSI color codes for terminal output."""

    RED = "\033[91m"
    CYAN = "\033[96m"
    BOLD = "\033[1m"
    RESET = "\033[0m"


def _use_color(stream: TextIO) -> bool:
    isatty = getattr(stream, "isatty", None)
    return bool(isatty and isatty())


def render_result(result: LaunchResult, as_json: bool = False, stream: TextIO | None = None) -> None:
    """Print a successful result.

    Empty results print nothing (unless rendering JSON), pids print as an
    integer and captured text prints as-is.
    """
    out = stream or sys.stdout
    if as_json:
        out.write(json.dumps(result.to_dict()) + "\n")
    elif result.kind is ResultKind.PID:
        out.write(f"{result.value}\n")
    elif result.kind is ResultKind.TEXT:
        text = str(result.value)
        out.write(text if text.endswith("\n") else text + "\n")
    out.flush()


def format_error(error: LaunchError, invocation: str = "", color: bool = False) -> str:
    """Format a labeled diagnostic pointing at the offending token.

    Example:
        Error: Could not start process
          bgrun nosuchcmd -a x
                ^^^^^^^^^ Could not start process 'nosuchcmd' with args ['x']: ...
    """
    red, cyan, bold, reset = (Colors.RED, Colors.CYAN, Colors.BOLD, Colors.RESET) if color else ("", "", "", "")
    lines = [f"{red}{bold}Error:{reset} {bold}{error.label}{reset}"]
    if invocation:
        lines.append(f"  {invocation}")
        if error.span is not None:
            start, end = error.span
            marker = "^" * max(end - start, 1)
            lines.append(f"  {' ' * start}{cyan}{marker}{reset} {error.message}")
            return "\n".join(lines)
    lines.append(f"  {error.message}")
    return "\n".join(lines)


def render_error(error: LaunchError, invocation: str = "", as_json: bool = False, stream: TextIO | None = None) -> None:
    """Print a launch error.

    JSON errors go to stdout so callers parsing output get one document
    either way; plain diagnostics go to stderr.
    """
    if as_json:
        out = stream or sys.stdout
        out.write(json.dumps({"error": error.to_dict()}) + "\n")
    else:
        out = stream or sys.stderr
        out.write(format_error(error, invocation, color=_use_color(out)) + "\n")
    out.flush()
