"""Entry point: capture, spawn, wait, then flush the audit log.

Usage: installed in place of the wrapped binary; every argument is passed
through untouched.

Environment:
    WRAPPER_OUTPUT: log file path (default /var/lib/storageos/logs/mountwrapper.log)
    WRAPPER_BINARY: real binary path (default /usr/bin/mount.real)
"""

from __future__ import annotations

import logging
import os
import sys
from typing import Mapping, Optional, Sequence

from .capture import capture_invocation, format_execute_line
from .config import resolve_config
from .errors import WrapperError
from .formatting import nano_timestring
from .models import EXIT_FAILURE
from .sink import LogBuffer
from .spawn import SpawnController, format_completed_line

logger = logging.getLogger(__name__)

DEFAULT_PROGNAME = "mountwrapper"


def configure_logging(progname: str) -> None:
    """Send the wrapper's own diagnostics to stderr, warnings and up only."""
    prefix = progname.replace("%", "%%")
    logging.basicConfig(
        level=logging.WARNING,
        format=f"{prefix} (wrapper): %(message)s",
        stream=sys.stderr,
    )


def main(
    argv: Optional[Sequence[str]] = None,
    environ: Optional[Mapping[str, str]] = None,
    controller: Optional[SpawnController] = None,
) -> int:
    if argv is None:
        argv = sys.argv
    # An explicit mapping is both logged and handed to the child via execve.
    child_env = None if environ is None else dict(environ)
    if environ is None:
        environ = os.environ

    progname = os.path.basename(argv[0]) if argv else DEFAULT_PROGNAME
    configure_logging(progname)

    config = resolve_config(environ)
    if controller is None:
        controller = SpawnController(exec_failure_code=config.exec_failure_code)

    buffer = LogBuffer()
    runtimestamp = nano_timestring()
    snapshot = capture_invocation(argv, environ)
    buffer.log(format_execute_line(snapshot, config, runtimestamp))

    try:
        outcome = controller.spawn(config.binary, argv, env=child_env)
        buffer.log(format_completed_line(runtimestamp, config.binary, snapshot.argv, outcome))
        # All raceable work is done; the log file may be touched now.
        buffer.flush(config.log_path)
    except WrapperError as exc:
        logger.error("%s", exc.describe())
        return EXIT_FAILURE

    return outcome.wrapper_exit_code


def run() -> None:
    sys.exit(main())


if __name__ == "__main__":
    run()
