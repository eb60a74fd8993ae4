"""Transparent process wrapper with a deferred audit trail.

Stands in for a system binary (e.g. mount(8)), forwards the invocation
unchanged, and appends what it saw to a log file only after the wrapped
program has exited, so the logging never perturbs the fork/exec/wait timing.
"""

__version__ = "0.1.0"
