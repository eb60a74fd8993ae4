"""Timestamp and string helpers for audit log lines."""

from __future__ import annotations

import os
import time
from typing import Mapping, Sequence

# Longest environment value kept in the log; longer ones are elided.
MAX_VALUE_LENGTH = 40
ELLIPSIS = b"..."
PLACEHOLDER = ord(".")

_NS_PER_SEC = 1_000_000_000


def canonicalise(value: "str | bytes") -> str:
    """Bound a value's length and replace non-printable bytes with ``.``.

    Works on the OS-level bytes, so an undecodable or multi-byte character
    becomes one placeholder per byte. The result is pure printable ASCII of
    at most MAX_VALUE_LENGTH bytes, which makes the function idempotent.
    """
    raw = value if isinstance(value, bytes) else os.fsencode(value)
    if len(raw) > MAX_VALUE_LENGTH:
        raw = raw[: MAX_VALUE_LENGTH - len(ELLIPSIS)] + ELLIPSIS
    cleaned = bytes(b if 32 <= b < 127 else PLACEHOLDER for b in raw)
    return cleaned.decode("ascii")


def format_argv(argv: Sequence[str]) -> str:
    # Audit record, not a parseable format: embedded quotes pass through.
    return ",".join(f'"{arg}"' for arg in argv)


def format_environment(environment: Mapping[str, str]) -> str:
    return ",".join(f"{key}={value}" for key, value in environment.items())


def nano_timestring(ns: "int | None" = None) -> str:
    """Wall-clock ``seconds.nanoseconds`` identifying this run."""
    if ns is None:
        ns = time.time_ns()
    seconds, nanos = divmod(ns, _NS_PER_SEC)
    return f"{seconds}.{nanos:09d}"


def log_timestamp(ns: "int | None" = None) -> str:
    """UTC ``YYYY-MM-DDTHH:MM:SS.ffffff`` prefix for a log line."""
    if ns is None:
        ns = time.time_ns()
    seconds, nanos = divmod(ns, _NS_PER_SEC)
    return time.strftime("%Y-%m-%dT%H:%M:%S", time.gmtime(seconds)) + f".{nanos // 1000:06d}"
