"""Data models for background process launches.

This module defines the request and result types passed to and returned by
the launcher.
"""

from collections.abc import Sequence
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, NamedTuple


class Span(NamedTuple):
    """Character offsets of a token within the rendered invocation line."""

    start: int
    end: int


class OutputMode(Enum):
    """How the launcher treats a spawned process once it is running."""

    DETACHED = "detached"
    RETURN_PID = "pid"
    CAPTURE_OUTPUT = "capture"


class ResultKind(Enum):
    """Shape of a successful launch result."""

    EMPTY = "empty"
    PID = "pid"
    TEXT = "text"


@dataclass(frozen=True)
class LaunchRequest:
    """A single request to start a process.

    Attributes:
        command: Executable name or path to spawn
        arguments: Argument tokens passed verbatim, in order
        debug: Print a diagnostic line on stderr before spawning
        mode: Output mode selecting the post-spawn behavior
        pid: Return the process id instead of captured text (capture mode only)
        command_span: Location of the command token in the caller's invocation
    """

    command: str
    arguments: tuple[str, ...] = ()
    debug: bool = False
    mode: OutputMode = OutputMode.DETACHED
    pid: bool = False
    command_span: Span | None = field(default=None, compare=False)

    def __post_init__(self) -> None:
        # Accept any sequence from callers but store an immutable copy
        if not isinstance(self.arguments, tuple):
            object.__setattr__(self, "arguments", tuple(self.arguments))

    @classmethod
    def from_flags(
        cls,
        command: str,
        arguments: Sequence[str] | None = None,
        debug: bool = False,
        pid: bool = False,
        capture: bool = False,
        command_span: Span | None = None,
    ) -> "LaunchRequest":
        """Build a request from command-line style switches.

        Capture wins over pid when choosing the mode; the pid switch is kept so
        that a successful capture still reports the process id.
        """
        if capture:
            mode = OutputMode.CAPTURE_OUTPUT
        elif pid:
            mode = OutputMode.RETURN_PID
        else:
            mode = OutputMode.DETACHED
        return cls(
            command=command,
            arguments=tuple(arguments or ()),
            debug=debug,
            mode=mode,
            pid=pid,
            command_span=command_span,
        )

    def describe(self) -> str:
        """Human readable name used in diagnostics and error messages."""
        if self.arguments:
            return f"'{self.command}' with args {list(self.arguments)!r}"
        return f"'{self.command}'"

    def argv(self) -> list[str]:
        """Return the argument vector handed to process creation."""
        return [self.command, *self.arguments]


@dataclass(frozen=True)
class LaunchResult:
    """Outcome of a successful launch: nothing, a pid, or captured text."""

    kind: ResultKind
    value: int | str | None = None

    @classmethod
    def empty(cls) -> "LaunchResult":
        return cls(ResultKind.EMPTY)

    @classmethod
    def of_pid(cls, pid: int) -> "LaunchResult":
        return cls(ResultKind.PID, int(pid))

    @classmethod
    def of_text(cls, text: str) -> "LaunchResult":
        return cls(ResultKind.TEXT, text)

    @property
    def is_empty(self) -> bool:
        return self.kind is ResultKind.EMPTY

    def to_value(self) -> int | str | None:
        """Map the result to its native Python value (None, int or str)."""
        return self.value

    def to_dict(self) -> dict[str, Any]:
        """Convert result to dictionary for JSON serialization."""
        return {"type": self.kind.value, "value": self.value}
