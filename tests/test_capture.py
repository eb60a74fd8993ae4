"""Tests for the invocation snapshot and the pre-exec log line."""

from __future__ import annotations

import dataclasses

import pytest

from mountwrapper.capture import capture_invocation, format_execute_line
from mountwrapper.models import SpawnConfig


class TestCaptureInvocation:
    def test_argv_preserved(self):
        argv = ["/sbin/mount", "-t", "ext4", "/dev/sda1", "/mnt"]
        snapshot = capture_invocation(argv, {})
        assert snapshot.argv == tuple(argv)

    def test_environment_canonicalised(self):
        env = {"SHORT": "ok", "LONG": "z" * 60, "CTRL": "a\x00b"}
        snapshot = capture_invocation(["w"], env)
        assert snapshot.environment == {"SHORT": "ok", "LONG": "z" * 37 + "...", "CTRL": "a.b"}

    def test_environment_order_follows_source(self):
        env = {"B": "2", "A": "1", "C": "3"}
        snapshot = capture_invocation(["w"], env)
        assert list(snapshot.environment) == ["B", "A", "C"]

    def test_snapshot_is_immutable(self):
        snapshot = capture_invocation(["w"], {})
        with pytest.raises(dataclasses.FrozenInstanceError):
            snapshot.argv = ("other",)

    def test_later_argv_changes_do_not_leak(self):
        argv = ["w", "x"]
        snapshot = capture_invocation(argv, {})
        argv.append("y")
        assert snapshot.argv == ("w", "x")


class TestFormatExecuteLine:
    def test_layout(self):
        snapshot = capture_invocation(["wrapper", "-a"], {"HOME": "/root", "TERM": "xterm"})
        config = SpawnConfig(log_path="/tmp/x.log", binary="/usr/bin/mount.real")
        line = format_execute_line(snapshot, config, "1621296000.000000001")
        assert line == (
            "runtimestamp 1621296000.000000001 execute '/usr/bin/mount.real' "
            'argv:["wrapper","-a"] environment:[HOME=/root,TERM=xterm]'
        )
