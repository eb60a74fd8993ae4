"""Snapshot of the invocation (argv + environment), taken before fork."""

from __future__ import annotations

from typing import Mapping, Sequence

from .formatting import canonicalise, format_argv, format_environment
from .models import InvocationSnapshot, SpawnConfig


def capture_invocation(argv: Sequence[str], environ: Mapping[str, str]) -> InvocationSnapshot:
    """Copy argv verbatim and canonicalise every environment value.

    Environment order is whatever ``environ`` iterates in; it is not sorted.
    """
    environment = {key: canonicalise(value) for key, value in environ.items()}
    return InvocationSnapshot(argv=tuple(argv), environment=environment)


def format_execute_line(snapshot: InvocationSnapshot, config: SpawnConfig, runtimestamp: str) -> str:
    return (
        f"runtimestamp {runtimestamp} execute '{config.binary}' "
        f"argv:[{format_argv(snapshot.argv)}] "
        f"environment:[{format_environment(snapshot.environment)}]"
    )
