"""Deferred audit log: lines are held in memory and written in one pass.

Nothing here touches the filesystem until ``flush`` is called, and the
entry point only calls it once the child has exited.
"""

from __future__ import annotations

import logging
import os
from typing import Iterable

from .errors import WrapperError
from .formatting import log_timestamp

logger = logging.getLogger(__name__)

LOG_FILE_FLAGS = os.O_CREAT | os.O_WRONLY | os.O_APPEND
LOG_FILE_MODE = 0o644


class LogBuffer:
    """Append-only, in-memory sequence of timestamped log lines."""

    def __init__(self) -> None:
        self._lines: list[str] = []

    def log(self, message: str) -> str:
        line = f"{log_timestamp()} {message}"
        self._lines.append(line)
        return line

    @property
    def lines(self) -> tuple[str, ...]:
        return tuple(self._lines)

    def __len__(self) -> int:
        return len(self._lines)

    def flush(self, path: str) -> None:
        flush(path, self._lines)


def flush(path: str, lines: Iterable[str]) -> None:
    """Append ``lines`` to ``path``, one write per line, then close.

    Any failure raises WrapperError; there is no retry and no partial
    success handling.
    """
    try:
        fd = os.open(path, LOG_FILE_FLAGS, LOG_FILE_MODE)
    except OSError as exc:
        raise WrapperError("Failed to open log file", exc) from exc

    try:
        count = _write_lines(fd, lines)
    except WrapperError:
        # The write error is the one reported; a close failure here is secondary.
        try:
            os.close(fd)
        except OSError as exc:
            logger.debug("Closing log file after write failure: %s", exc)
        raise

    try:
        os.close(fd)
    except OSError as exc:
        raise WrapperError("Failed to close log file", exc) from exc

    logger.debug("Appended %d line(s) to %s", count, path)


def _write_lines(fd: int, lines: Iterable[str]) -> int:
    count = 0
    for line in lines:
        data = os.fsencode(line) + b"\n"
        try:
            written = os.write(fd, data)
        except OSError as exc:
            raise WrapperError("Failed to write to log file", exc) from exc
        if written != len(data):
            raise WrapperError(f"Failed to write to log file (short write, {written}/{len(data)} bytes)")
        count += 1
    return count
