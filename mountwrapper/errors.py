"""Wrapper-internal failures (fork, wait, log I/O)."""

from __future__ import annotations

import os


class WrapperError(Exception):
    """Fatal infrastructure failure inside the wrapper itself.

    Never raised for the wrapped program's own failures; those are recorded
    as an ExitOutcome instead.
    """

    def __init__(self, message: str, cause: "OSError | None" = None) -> None:
        super().__init__(message)
        self.message = message
        self.cause = cause

    def describe(self) -> str:
        if self.cause is None:
            return self.message
        errno = self.cause.errno
        reason = os.strerror(errno) if errno else str(self.cause)
        return f"{self.message}: {reason}"
