"""Environment-based configuration for the wrapper.

The command line belongs to the wrapped binary, so the only knobs are two
environment variables:

    WRAPPER_OUTPUT: log file to append to
    WRAPPER_BINARY: the real binary to execute
"""

from __future__ import annotations

import os
from typing import Mapping, Optional

from .models import SpawnConfig

LOG_FILE_ENV_VAR = "WRAPPER_OUTPUT"
DEFAULT_LOG_FILE = "/var/lib/storageos/logs/mountwrapper.log"

BINARY_ENV_VAR = "WRAPPER_BINARY"
DEFAULT_BINARY = "/usr/bin/mount.real"


def resolve_string(name: str, default: str, environ: Optional[Mapping[str, str]] = None) -> str:
    """Return the variable's value, or ``default`` if it is unset or empty.

    The value is not validated; a bad path shows up later as an open or
    exec failure.
    """
    env = os.environ if environ is None else environ
    value = env.get(name)
    if not value:
        return default
    return value


def resolve_config(environ: Optional[Mapping[str, str]] = None) -> SpawnConfig:
    return SpawnConfig(
        log_path=resolve_string(LOG_FILE_ENV_VAR, DEFAULT_LOG_FILE, environ),
        binary=resolve_string(BINARY_ENV_VAR, DEFAULT_BINARY, environ),
    )
