"""Start processes in the background, detached from the caller's process group."""

from bgrun.exceptions import BgrunError, ConfigError, LaunchError, LaunchErrorKind
from bgrun.launcher import launch
from bgrun.models import LaunchRequest, LaunchResult, OutputMode, ResultKind, Span

__version__ = "0.1.0"

__all__ = [
    "BgrunError",
    "ConfigError",
    "LaunchError",
    "LaunchErrorKind",
    "LaunchRequest",
    "LaunchResult",
    "OutputMode",
    "ResultKind",
    "Span",
    "launch",
]
