"""StreamCapture class for collecting a subprocess's complete output."""

import logging
import subprocess
import threading
from dataclasses import dataclass
from typing import IO

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class CapturedOutput:
    """Raw bytes read from a child's stdout and stderr."""

    stdout: bytes
    stderr: bytes


class _StreamReader:
    """Reads one pipe to end-of-stream on a background thread."""

    def __init__(self, name: str, stream: IO[bytes]) -> None:
        self.name = name
        self.stream = stream
        self.data = b""
        self.error: OSError | None = None
        self.thread = threading.Thread(target=self._read, name=f"bgrun-{name}-reader", daemon=True)

    def _read(self) -> None:
        try:
            self.data = self.stream.read()
        except (OSError, ValueError) as e:
            # ValueError: pipe closed underneath us
            self.error = e if isinstance(e, OSError) else OSError(str(e))
        finally:
            self.stream.close()

    def start(self) -> None:
        self.thread.start()

    def join(self) -> bytes:
        self.thread.join()
        return self.data


class StreamCapture:
    """Drains a process's stdout and stderr concurrently.

    One reader thread per stream keeps both pipes empty, so a child that
    fills one pipe while the other is still being read cannot deadlock the
    launcher.
    """

    def __init__(self, process: "subprocess.Popen[bytes]") -> None:
        """Initialize the capture.

        Args:
            process: A started process whose stdout and stderr are pipes
        """
        if process.stdout is None or process.stderr is None:
            raise ValueError("Process was not started with piped stdout and stderr")
        self.process = process
        self.stdout_reader = _StreamReader("stdout", process.stdout)
        self.stderr_reader = _StreamReader("stderr", process.stderr)
        self._started = False

    def start(self) -> None:
        """Start both reader threads."""
        self.stdout_reader.start()
        self.stderr_reader.start()
        self._started = True

    def collect(self) -> CapturedOutput:
        """Block until both streams reach end-of-stream and return their contents.

        There is no timeout: a child that never closes its output blocks here.

        Raises:
            OSError: If reading either stream failed
        """
        if not self._started:
            self.start()

        stdout = self.stdout_reader.join()
        stderr = self.stderr_reader.join()
        logger.debug(f"Captured {len(stdout)} bytes of stdout and {len(stderr)} bytes of stderr from pid {self.process.pid}")

        for reader in (self.stdout_reader, self.stderr_reader):
            if reader.error is not None:
                raise OSError(f"Could not read {reader.name}: {reader.error}") from reader.error

        return CapturedOutput(stdout=stdout, stderr=stderr)
