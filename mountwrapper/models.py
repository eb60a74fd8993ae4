"""Data models for the wrapper: invocation snapshot, config, exit outcome."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Optional

from pydantic import BaseModel, ConfigDict

EXIT_SUCCESS = 0
EXIT_FAILURE = 1

# Reserved by the child to tell the parent that execv() never happened.
# mount(8) does not use it; change it here if the wrapped binary does.
EXEC_FAILURE_EXIT_CODE = 128


@dataclass(frozen=True, slots=True)
class InvocationSnapshot:
    """argv and canonicalised environment, captured once before fork."""

    argv: tuple[str, ...]
    environment: dict[str, str] = field(default_factory=dict)


@dataclass(frozen=True, slots=True)
class SpawnConfig:
    log_path: str
    binary: str
    exec_failure_code: int = EXEC_FAILURE_EXIT_CODE


class OutcomeKind(str, Enum):
    EXITED = "exited"
    SIGNALED = "signaled"
    UNKNOWN = "unknown"


class ExitOutcome(BaseModel):
    """How the child terminated, derived once from the waitpid() status."""

    model_config = ConfigDict(frozen=True)

    kind: OutcomeKind
    raw_status: int
    code: Optional[int] = None
    signal: Optional[int] = None
    exec_failure_code: int = EXEC_FAILURE_EXIT_CODE

    @property
    def exec_failed(self) -> bool:
        return self.kind == OutcomeKind.EXITED and self.code == self.exec_failure_code

    def describe(self) -> str:
        """Log message fragment for this outcome."""
        if self.exec_failed:
            return f"failed to execv(2) (ec=={self.code})"
        if self.kind == OutcomeKind.EXITED:
            return f"exit with code {self.code}"
        if self.kind == OutcomeKind.SIGNALED:
            return f"exit with signal {self.signal}"
        return f"stopped with unknown status {self.raw_status}"

    @property
    def wrapper_exit_code(self) -> int:
        """The wrapper's own exit status: the child's code when it ran normally."""
        if self.kind == OutcomeKind.EXITED and not self.exec_failed:
            return self.code
        return EXIT_FAILURE
