"""Tests for the subprocess command executor."""

from __future__ import annotations

import os
from pathlib import Path

import pytest

from wpprov.errors import CommandError
from wpprov.services.executor import CommandExecutor


class TestRun:
    def test_stdout_and_exit_code(self):
        result = CommandExecutor().run(["sh", "-c", "echo hello; exit 3"])
        assert result.stdout == "hello\n"
        assert result.exit_code == 3
        assert not result.ok

    def test_cwd(self, tmp_path: Path):
        result = CommandExecutor().run(["pwd"], cwd=tmp_path)
        assert Path(result.stdout.strip()).resolve() == tmp_path.resolve()

    def test_stdin(self):
        result = CommandExecutor().run(["cat"], stdin="define( 'WP_DEBUG', true );\n")
        assert result.stdout == "define( 'WP_DEBUG', true );\n"

    def test_missing_executable(self):
        result = CommandExecutor().run(["wpprov-no-such-binary"])
        assert result.exit_code == 127

    def test_sandbox_prefix(self):
        executor = CommandExecutor(["env", "WPPROV_SANDBOXED=1"])
        assert executor.run(["sh", "-c", "echo $WPPROV_SANDBOXED"]).stdout == "1\n"
        assert executor.run(["sh", "-c", "echo ${WPPROV_SANDBOXED:-0}"], sandboxed=False).stdout == "0\n"

    @pytest.mark.skipif(not Path("/proc/self/stat").exists(), reason="needs procfs")
    def test_child_runs_in_own_session(self):
        # a terminal SIGINT must not reach the running tool
        result = CommandExecutor().run(["sh", "-c", 'cut -d" " -f6 /proc/$$/stat'])
        assert result.ok
        assert result.stdout.strip() != str(os.getsid(0))


class TestCheck:
    def test_success(self):
        assert CommandExecutor().check(["true"]).ok

    def test_failure_carries_exit_code(self):
        with pytest.raises(CommandError) as exc_info:
            CommandExecutor().check(["sh", "-c", "echo oops >&2; exit 5"])
        assert exc_info.value.exit_code == 5
        assert exc_info.value.argv == ["sh", "-c", "echo oops >&2; exit 5"]
        assert "oops" in exc_info.value.stderr
