"""Process management utilities for launching detached processes."""

import os
import signal
import sys
from typing import Any

from bgrun.exceptions import UnsupportedOnPlatformError

# Windows process creation flags (not exposed by subprocess on other platforms)
DETACHED_PROCESS = 0x00000008
CREATE_NEW_PROCESS_GROUP = 0x00000200


def process_group_kwargs(console: bool = False) -> dict[str, Any]:
    """
    Return subprocess.Popen keyword arguments that place the child in its own process group.

    Signals delivered to the caller's process group (Ctrl+C, SIGHUP when the
    terminal closes) then no longer reach the child.

    Cross-platform implementation:
    - Windows: CREATE_NEW_PROCESS_GROUP, plus DETACHED_PROCESS unless the
      child keeps a console for captured output
    - Unix-like: start_new_session=True (setsid creates a new process group)

    Args:
        console: Keep the child attached to a console (used when its output
                 is captured through pipes)

    Returns:
        Keyword arguments to merge into the Popen call

    Raises:
        UnsupportedOnPlatformError: If the platform has no process group concept
    """
    if sys.platform == "win32":
        flags = CREATE_NEW_PROCESS_GROUP
        if not console:
            flags |= DETACHED_PROCESS
        return {"creationflags": flags}
    if os.name == "posix":
        return {"start_new_session": True}
    raise UnsupportedOnPlatformError(f"Process groups are not supported on platform {sys.platform!r}")


def describe_exit_status(returncode: int) -> str:
    """Describe a Popen return code the way a shell would report it.

    Negative return codes mean the child was killed by a signal (POSIX only).
    """
    if returncode < 0:
        signum = -returncode
        try:
            name = signal.Signals(signum).name
        except ValueError:
            return f"signal: {signum}"
        return f"signal: {signum} ({name})"
    return f"exit status: {returncode}"
