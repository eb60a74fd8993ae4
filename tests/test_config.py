"""Tests for environment-based configuration."""

from __future__ import annotations

from mountwrapper.config import (
    BINARY_ENV_VAR,
    DEFAULT_BINARY,
    DEFAULT_LOG_FILE,
    LOG_FILE_ENV_VAR,
    resolve_config,
    resolve_string,
)
from mountwrapper.models import EXEC_FAILURE_EXIT_CODE


class TestResolveString:
    def test_unset_uses_default(self):
        assert resolve_string("MISSING", "fallback", {}) == "fallback"

    def test_empty_uses_default(self):
        assert resolve_string("EMPTY", "fallback", {"EMPTY": ""}) == "fallback"

    def test_value_returned_verbatim(self):
        env = {"SOME_PATH": "  not/validated  "}
        assert resolve_string("SOME_PATH", "fallback", env) == "  not/validated  "

    def test_reads_process_environment_by_default(self, monkeypatch):
        monkeypatch.setenv("MOUNTWRAPPER_TEST_VAR", "from-env")
        assert resolve_string("MOUNTWRAPPER_TEST_VAR", "fallback") == "from-env"


class TestResolveConfig:
    def test_defaults(self):
        config = resolve_config({})
        assert config.log_path == DEFAULT_LOG_FILE
        assert config.binary == DEFAULT_BINARY
        assert config.exec_failure_code == EXEC_FAILURE_EXIT_CODE

    def test_overrides(self):
        config = resolve_config({LOG_FILE_ENV_VAR: "/tmp/w.log", BINARY_ENV_VAR: "/bin/true"})
        assert config.log_path == "/tmp/w.log"
        assert config.binary == "/bin/true"

    def test_only_two_variables_consulted(self):
        class RecordingEnv(dict):
            def __init__(self):
                super().__init__()
                self.seen = []

            def get(self, key, default=None):
                self.seen.append(key)
                return super().get(key, default)

        env = RecordingEnv()
        resolve_config(env)
        assert env.seen == [LOG_FILE_ENV_VAR, BINARY_ENV_VAR]
