"""Minimal CLI entry point for bgrun - parses arguments and runs the launcher."""

import logging
import os
import sys

from .cli_args import parse_args
from .exceptions import LaunchError
from .launcher import launch
from .models import OutputMode
from .render import render_error, render_result

logger = logging.getLogger(__name__)

EXIT_LAUNCH_ERROR = 1
EXIT_INTERRUPTED = 130


def configure_logging(verbose: bool) -> None:
    """Configure root logging for the command-line tool."""
    level_name = "DEBUG" if verbose else os.environ.get("BGRUN_LOG_LEVEL", "WARNING").upper()
    level = logging.getLevelName(level_name)
    if not isinstance(level, int):
        level = logging.WARNING
    logging.basicConfig(
        level=level,
        format="[%(asctime)s] [%(levelname)s] [bgrun] %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
        stream=sys.stderr,
    )


def main(args: list[str] | None = None) -> int:
    """Main entry point - launch the command and print its result."""
    parsed = parse_args(args)
    configure_logging(parsed.verbose)

    request = parsed.to_request()
    try:
        result = launch(request)
    except LaunchError as e:
        logger.debug(f"Launch failed: {e.kind.name}")
        render_error(e, parsed.invocation, as_json=parsed.json)
        return EXIT_LAUNCH_ERROR
    except KeyboardInterrupt:
        # The child lives in its own process group and did not receive the interrupt
        if request.mode is OutputMode.CAPTURE_OUTPUT:
            logger.warning(f"Interrupted while waiting for {request.describe()}; the process may still be running")
        return EXIT_INTERRUPTED

    render_result(result, as_json=parsed.json)
    return 0


if __name__ == "__main__":
    sys.exit(main())
