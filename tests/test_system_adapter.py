"""Tests for SubprocessSystemAdapter and the ISystemAdapter contract."""

from __future__ import annotations

import subprocess

import pytest

from speakout.platform.subprocess_impl import DEFAULT_SYSTEM, SubprocessSystemAdapter
from speakout.platform.system_adapter import CommandResult, ISystemAdapter


# ---------------------------------------------------------------------------
# SubprocessSystemAdapter tests
# ---------------------------------------------------------------------------

class TestSubprocessSystemAdapter:
    def test_run_command_success(self):
        """echo hello should return 'hello\\n' with returncode 0."""
        adapter = SubprocessSystemAdapter()
        result = adapter.run_command(["echo", "hello"])
        assert isinstance(result, CommandResult)
        assert result.returncode == 0
        assert result.stdout.strip() == "hello"

    def test_run_command_pipes_stdin(self):
        adapter = SubprocessSystemAdapter()
        result = adapter.run_command(["cat"], input="héllo; $(id)")
        assert result.stdout == "héllo; $(id)"

    def test_run_command_failure(self):
        adapter = SubprocessSystemAdapter()
        result = adapter.run_command(["false"])
        assert result.returncode != 0

    def test_arguments_are_not_shell_expanded(self):
        adapter = SubprocessSystemAdapter()
        result = adapter.run_command(["echo", "$HOME; echo injected"])
        assert result.stdout.strip() == "$HOME; echo injected"

    def test_run_command_unencodable_input_raises(self):
        adapter = SubprocessSystemAdapter()
        with pytest.raises(UnicodeEncodeError):
            adapter.run_command(["cat"], input="caf\ud800e")

    def test_run_command_timeout_raises(self):
        adapter = SubprocessSystemAdapter()
        with pytest.raises(subprocess.TimeoutExpired):
            adapter.run_command(["sleep", "10"], timeout=0.05)

    def test_run_command_invalid_binary_raises(self):
        adapter = SubprocessSystemAdapter()
        with pytest.raises(OSError):
            adapter.run_command(["__nonexistent_binary_12345__"])

    def test_which(self):
        adapter = SubprocessSystemAdapter()
        assert adapter.which("sh") is not None
        assert adapter.which("__nonexistent_binary_12345__") is None

    def test_implements_interface(self):
        assert isinstance(DEFAULT_SYSTEM, ISystemAdapter)


class TestCommandResult:
    def test_output_combines_streams(self):
        result = CommandResult(stdout="out\n", stderr="err\n", returncode=1)
        assert result.output == "out\nerr"


# ---------------------------------------------------------------------------
# FakeSystemAdapter (conftest) honours the same contract
# ---------------------------------------------------------------------------

class TestFakeSystemAdapter:
    def test_implements_interface(self, fake_system):
        assert isinstance(fake_system, ISystemAdapter)

    def test_records_calls(self, fake_system):
        fake_system.run_command(["xsel", "--clipboard"], input="x", timeout=1.0)
        assert fake_system.calls == [(["xsel", "--clipboard"], "x", 1.0)]
