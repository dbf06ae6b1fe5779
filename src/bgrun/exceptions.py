"""
Exception classes for bgrun.

This module defines the exception hierarchy used by the launcher and the
command-line front end.
"""

from enum import Enum
from typing import Any

from bgrun.models import Span


class BgrunError(Exception):
    """Base exception for bgrun errors."""

    pass


class ConfigError(BgrunError):
    """Settings file could not be read or is invalid."""

    pass


class UnsupportedOnPlatformError(BgrunError):
    """A platform capability is not available on this system."""

    pass


class LaunchErrorKind(Enum):
    """Distinguishable launch failure kinds."""

    NO_COMMAND = "no_command"
    SPAWN_FAILED = "spawn_failed"
    STDOUT_CAPTURE_UNAVAILABLE = "stdout_capture_unavailable"
    STDERR_CAPTURE_UNAVAILABLE = "stderr_capture_unavailable"
    CAPTURE_READ_FAILED = "capture_read_failed"
    WAIT_FAILED = "wait_failed"
    NON_ZERO_EXIT = "non_zero_exit"


class LaunchError(BgrunError):
    """A launch failed.

    Attributes:
        kind: Failure kind, stable for matching
        label: Short headline for diagnostics
        message: Detailed human readable message (not a stable contract)
        span: Location of the offending token, if known
        exit_code: Child exit status for NON_ZERO_EXIT
        stderr: Captured stderr text for NON_ZERO_EXIT
    """

    def __init__(
        self,
        kind: LaunchErrorKind,
        label: str,
        message: str,
        span: Span | None = None,
        exit_code: int | None = None,
        stderr: str | None = None,
    ) -> None:
        super().__init__(message)
        self.kind = kind
        self.label = label
        self.message = message
        self.span = span
        self.exit_code = exit_code
        self.stderr = stderr

    def __repr__(self) -> str:
        return f"LaunchError(kind={self.kind.name}, label={self.label!r}, message={self.message!r})"

    def to_dict(self) -> dict[str, Any]:
        """Convert error to dictionary for JSON serialization."""
        data: dict[str, Any] = {
            "kind": self.kind.value,
            "label": self.label,
            "message": self.message,
            "span": list(self.span) if self.span is not None else None,
        }
        if self.exit_code is not None:
            data["exit_code"] = self.exit_code
        return data
