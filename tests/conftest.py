"""Shared fixtures: throwaway executables for the real fork/exec tests."""

from __future__ import annotations

import os

import pytest


@pytest.fixture
def make_script(tmp_path):
    """Write an executable /bin/sh script and return its path."""

    def _make(body: str, name: str = "target.sh") -> str:
        path = tmp_path / name
        path.write_text(f"#!/bin/sh\n{body}\n")
        os.chmod(path, 0o755)
        return str(path)

    return _make


@pytest.fixture
def log_path(tmp_path):
    return str(tmp_path / "mountwrapper.log")
