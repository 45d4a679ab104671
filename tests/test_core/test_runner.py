"""Unit tests for gopackage.core.runner.

subprocess.run is patched throughout; no process is started.
"""

from __future__ import annotations

import os
import subprocess
from unittest.mock import MagicMock, patch

import pytest

from gopackage.core.runner import CommandResult, ProcessRunner
from gopackage.exceptions import ToolchainError


def _completed(returncode: int = 0, stdout=None, stderr=None) -> MagicMock:
    completed = MagicMock(spec=subprocess.CompletedProcess)
    completed.returncode = returncode
    completed.stdout = stdout
    completed.stderr = stderr
    return completed


@pytest.mark.unit
class TestCommandResult:
    """Tests for CommandResult."""

    def test_ok(self) -> None:
        assert CommandResult(["go"], 0).ok is True
        assert CommandResult(["go"], 2).ok is False

    def test_command_line(self) -> None:
        assert CommandResult(["go", "get", "-d", "x"], 0).command_line == "go get -d x"


@pytest.mark.unit
class TestProcessRunnerEnvironment:
    """Tests for environment handling."""

    def test_base_env_defaults_to_process_environment(
        self, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        monkeypatch.setenv("GOPACKAGE_TEST_VAR", "1")

        assert ProcessRunner().base_env["GOPACKAGE_TEST_VAR"] == "1"

    def test_base_env_is_a_snapshot(self, monkeypatch: pytest.MonkeyPatch) -> None:
        runner = ProcessRunner()
        monkeypatch.setenv("GOPACKAGE_LATE_VAR", "1")

        assert "GOPACKAGE_LATE_VAR" not in runner.base_env

    def test_build_env_applies_overrides(self) -> None:
        runner = ProcessRunner({"GOPATH": "/go", "HOME": "/home/dev"})

        env = runner.build_env({"GOPATH": "/build", "GOBIN": "/build/bin/"})

        assert env == {"GOPATH": "/build", "HOME": "/home/dev", "GOBIN": "/build/bin/"}
        assert runner.base_env == {"GOPATH": "/go", "HOME": "/home/dev"}


@pytest.mark.unit
class TestProcessRunnerRun:
    """Tests for ProcessRunner.run."""

    def test_streams_by_default(self) -> None:
        runner = ProcessRunner({"PATH": "/usr/bin"})

        with patch("gopackage.core.runner.subprocess.run", return_value=_completed()) as run:
            result = runner.run(["go", "install", "app"], cwd="/work", env={"GOBIN": "/b/"})

        run.assert_called_once_with(
            ["go", "install", "app"],
            cwd="/work",
            env={"PATH": "/usr/bin", "GOBIN": "/b/"},
            stdout=None,
            stderr=None,
            text=True,
            check=False,
        )
        assert result == CommandResult(["go", "install", "app"], 0, "", "")

    def test_capture(self) -> None:
        runner = ProcessRunner({})
        completed = _completed(0, stdout="go1.21.3\n", stderr="")

        with patch("gopackage.core.runner.subprocess.run", return_value=completed) as run:
            result = runner.run(["go", "env", "GOVERSION"], capture=True)

        kwargs = run.call_args.kwargs
        assert kwargs["stdout"] is subprocess.PIPE
        assert kwargs["stderr"] is subprocess.PIPE
        assert kwargs["cwd"] is None
        assert result.stdout == "go1.21.3\n"

    def test_nonzero_exit_is_returned(self) -> None:
        completed = _completed(1, stdout="", stderr="boom")

        with patch("gopackage.core.runner.subprocess.run", return_value=completed):
            result = ProcessRunner({}).run(["go", "get", "-d", "x"], capture=True)

        assert result.ok is False
        assert result.returncode == 1
        assert result.stderr == "boom"

    def test_does_not_touch_os_environ(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.delenv("GOBIN", raising=False)

        with patch("gopackage.core.runner.subprocess.run", return_value=_completed()):
            ProcessRunner().run(["go", "install", "x"], env={"GOBIN": "/b/"})

        assert "GOBIN" not in os.environ

    def test_missing_executable(self) -> None:
        with patch(
            "gopackage.core.runner.subprocess.run",
            side_effect=FileNotFoundError("no such file"),
        ):
            with pytest.raises(ToolchainError, match="Executable not found: go1"):
                ProcessRunner({}).run(["go1", "version"])

    def test_os_error(self) -> None:
        with patch(
            "gopackage.core.runner.subprocess.run",
            side_effect=PermissionError("denied"),
        ):
            with pytest.raises(ToolchainError, match="Failed to start go"):
                ProcessRunner({}).run(["go", "version"])

    def test_empty_command(self) -> None:
        with pytest.raises(ToolchainError, match="Empty command"):
            ProcessRunner({}).run([])

    def test_path_arguments_are_stringified(self, tmp_path) -> None:
        with patch("gopackage.core.runner.subprocess.run", return_value=_completed()) as run:
            result = ProcessRunner({}).run(["go", "install", tmp_path], cwd=tmp_path)

        assert run.call_args.args[0] == ["go", "install", str(tmp_path)]
        assert run.call_args.kwargs["cwd"] == str(tmp_path)
        assert result.args[-1] == str(tmp_path)
