"""fork/exec/wait of the wrapped binary and classification of its exit.

The child runs ``execv(binary, argv)`` with the wrapper's own argv, so the
wrapped program sees argv[0] as the wrapper's path and inherits the
environment untouched. If execv() fails the child exits with the reserved
exec-failure code, which the parent reports as an exec failure rather than
as an ordinary exit code.
"""

from __future__ import annotations

import logging
import os
from typing import Callable, Mapping, Optional, Sequence

from .errors import WrapperError
from .formatting import format_argv
from .models import EXEC_FAILURE_EXIT_CODE, ExitOutcome, OutcomeKind

logger = logging.getLogger(__name__)


def classify_status(status: int, exec_failure_code: int = EXEC_FAILURE_EXIT_CODE) -> ExitOutcome:
    """Turn a raw waitpid() status into an ExitOutcome."""
    if os.WIFEXITED(status):
        return ExitOutcome(
            kind=OutcomeKind.EXITED,
            raw_status=status,
            code=os.WEXITSTATUS(status),
            exec_failure_code=exec_failure_code,
        )
    if os.WIFSIGNALED(status):
        return ExitOutcome(
            kind=OutcomeKind.SIGNALED,
            raw_status=status,
            signal=os.WTERMSIG(status),
            exec_failure_code=exec_failure_code,
        )
    return ExitOutcome(kind=OutcomeKind.UNKNOWN, raw_status=status, exec_failure_code=exec_failure_code)


class SpawnController:
    """Runs the target binary in a child process and waits for it.

    fork, execv, execve and waitpid are injected so tests can stand in for
    the OS. execve is only used when an explicit environment is passed.
    """

    def __init__(
        self,
        fork: Callable[[], int] = os.fork,
        execv: Callable[[str, Sequence[str]], None] = os.execv,
        execve: Callable[[str, Sequence[str], Mapping[str, str]], None] = os.execve,
        waitpid: Callable[[int, int], "tuple[int, int]"] = os.waitpid,
        exec_failure_code: int = EXEC_FAILURE_EXIT_CODE,
    ) -> None:
        self._fork = fork
        self._execv = execv
        self._execve = execve
        self._waitpid = waitpid
        self.exec_failure_code = exec_failure_code

    def spawn(self, binary: str, argv: Sequence[str], env: Optional[Mapping[str, str]] = None) -> ExitOutcome:
        """Fork, exec ``binary`` in the child, and block until it terminates.

        The child inherits the process environment unless ``env`` is given.

        Raises WrapperError if fork() or waitpid() fails. Never returns in
        the child.
        """
        try:
            pid = self._fork()
        except OSError as exc:
            raise WrapperError("fork() failed", exc) from exc

        if pid == 0:
            self._exec_child(binary, argv, env)

        try:
            _, status = self._waitpid(pid, 0)
        except OSError as exc:
            raise WrapperError("waitpid() failed", exc) from exc

        outcome = classify_status(status, self.exec_failure_code)
        logger.debug("Child %d finished: %s", pid, outcome.describe())
        return outcome

    def _exec_child(self, binary: str, argv: Sequence[str], env: Optional[Mapping[str, str]]) -> None:
        try:
            if env is None:
                self._execv(binary, list(argv))
            else:
                self._execve(binary, list(argv), env)
        except OSError as exc:
            logger.error("execv() failed: %s", exc.strerror or exc)
        except ValueError as exc:
            logger.error("execv() failed: %s", exc)
        finally:
            # The child must never return into the wrapper's own code.
            os._exit(self.exec_failure_code)


def format_completed_line(runtimestamp: str, binary: str, argv: Sequence[str], outcome: ExitOutcome) -> str:
    return f"runtimestamp {runtimestamp} completed '{binary}' args:[{format_argv(argv)}] {outcome.describe()}"
