"""Process launcher.

Starts a command in its own process group and, depending on the request's
output mode, returns immediately (optionally with the pid) or waits for the
process to exit and returns its captured stdout.
"""

import logging
import subprocess
import sys
from typing import Any

from bgrun.capture import StreamCapture
from bgrun.exceptions import LaunchError, LaunchErrorKind, UnsupportedOnPlatformError
from bgrun.models import LaunchRequest, LaunchResult, OutputMode
from bgrun.util.process import describe_exit_status, process_group_kwargs

logger = logging.getLogger(__name__)


def launch(request: LaunchRequest) -> LaunchResult:
    """Launch the requested process.

    Args:
        request: What to run and how to treat its output

    Returns:
        LaunchResult: empty, the pid, or the captured stdout text

    Raises:
        LaunchError: If the command is empty, cannot be spawned, its output
            cannot be captured, or (capture mode) it exits unsuccessfully
    """
    if not request.command:
        raise LaunchError(
            LaunchErrorKind.NO_COMMAND,
            "No command given",
            "A command is required to start a process",
            span=request.command_span,
        )

    debug_name = request.describe()
    if request.debug:
        print(f"Starting process {debug_name}", file=sys.stderr, flush=True)
    logger.debug(f"Starting process {debug_name} in {request.mode.value} mode")

    capture = request.mode is OutputMode.CAPTURE_OUTPUT
    process = _spawn(request, capture)

    if not capture:
        # Fire-and-forget: the child is intentionally never waited on here
        if request.mode is OutputMode.RETURN_PID:
            return LaunchResult.of_pid(process.pid)
        return LaunchResult.empty()

    return _wait_and_capture(request, process)


def _popen_kwargs(capture: bool) -> dict[str, Any]:
    """Stream and process group settings for the given mode."""
    kwargs: dict[str, Any] = {"stdin": subprocess.DEVNULL}
    if capture:
        kwargs["stdout"] = subprocess.PIPE
        kwargs["stderr"] = subprocess.PIPE
    else:
        kwargs["stdout"] = subprocess.DEVNULL
        kwargs["stderr"] = subprocess.DEVNULL

    try:
        kwargs.update(process_group_kwargs(console=capture))
    except UnsupportedOnPlatformError as e:
        logger.debug(f"Spawning without process group detachment: {e}")
    return kwargs


def _spawn(request: LaunchRequest, capture: bool) -> "subprocess.Popen[bytes]":
    debug_name = request.describe()
    try:
        process = subprocess.Popen(request.argv(), **_popen_kwargs(capture))
    except (OSError, ValueError) as err:
        # ValueError: embedded null byte in the command or an argument
        raise LaunchError(
            LaunchErrorKind.SPAWN_FAILED,
            "Could not start process",
            f"Could not start process {debug_name}: {err}",
            span=request.command_span,
        ) from err

    logger.debug(f"Started process {debug_name} with pid {process.pid}")
    return process


def _abandon(process: "subprocess.Popen[bytes]") -> None:
    """Kill and reap a capture-mode child that cannot be read."""
    process.kill()
    process.wait()


def _wait_and_capture(request: LaunchRequest, process: "subprocess.Popen[bytes]") -> LaunchResult:
    debug_name = request.describe()

    if process.stdout is None:
        _abandon(process)
        raise LaunchError(
            LaunchErrorKind.STDOUT_CAPTURE_UNAVAILABLE,
            "Could not capture stdout of process",
            f"Could not capture stdout of process {debug_name}",
            span=request.command_span,
        )
    if process.stderr is None:
        _abandon(process)
        raise LaunchError(
            LaunchErrorKind.STDERR_CAPTURE_UNAVAILABLE,
            "Could not capture stderr of process",
            f"Could not capture stderr of process {debug_name}",
            span=request.command_span,
        )

    try:
        output = StreamCapture(process).collect()
    except OSError as err:
        _abandon(process)
        raise LaunchError(
            LaunchErrorKind.CAPTURE_READ_FAILED,
            "Could not read output of process",
            f"Could not read output of process {debug_name}. Error: {err}",
            span=request.command_span,
        ) from err

    try:
        returncode = process.wait()
    except OSError as err:
        raise LaunchError(
            LaunchErrorKind.WAIT_FAILED,
            "Could not wait for process",
            f"Could not wait for process {debug_name}. Error: {err}",
            span=request.command_span,
        ) from err

    status = describe_exit_status(returncode)
    logger.debug(f"Process {debug_name} finished with {status}")

    if returncode == 0:
        if request.pid:
            return LaunchResult.of_pid(process.pid)
        if not output.stdout:
            return LaunchResult.empty()
        return LaunchResult.of_text(output.stdout.decode("utf-8", errors="replace"))

    stderr_text = output.stderr.decode("utf-8", errors="replace")
    message = f"Process {debug_name} did not exit successfully. Exit code: {status}"
    if output.stderr:
        message = f"{message}. Error: {stderr_text}"
    raise LaunchError(
        LaunchErrorKind.NON_ZERO_EXIT,
        "Process did not exit successfully",
        message,
        span=request.command_span,
        exit_code=returncode,
        stderr=stderr_text or None,
    )
