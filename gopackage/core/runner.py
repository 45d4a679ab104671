"""Subprocess invocation for gopackage.

All Go toolchain calls go through :class:`ProcessRunner`. Configuration is
passed to child processes explicitly: the argument vector, the working
directory and a map of environment overrides. The environment of the
current process is never modified, so repeated or interleaved invocations
stay independent of each other.

Typical usage::

    runner = ProcessRunner()
    result = runner.run(
        ["go", "install", "example.com/app/cmd/tool"],
        env={"GOPATH": "/work/gopackage", "GOBIN": "/work/gopackage/tool/"},
    )
    if not result.ok:
        ...
"""

from __future__ import annotations

import os
import subprocess
from dataclasses import dataclass
from pathlib import Path
from typing import Dict, List, Mapping, Optional, Sequence, Union

from gopackage.exceptions import ToolchainError
from gopackage.utils.logger import get_logger

logger = get_logger("runner")

__all__ = ["CommandResult", "ProcessRunner"]


@dataclass(frozen=True)
class CommandResult:
    """Outcome of one finished process.

    Attributes:
        args: Argument vector that was executed.
        returncode: Exit status of the process.
        stdout: Captured standard output (empty when streams are inherited).
        stderr: Captured standard error (empty when streams are inherited).
    """

    args: List[str]
    returncode: int
    stdout: str = ""
    stderr: str = ""

    @property
    def ok(self) -> bool:
        """True when the process exited with status 0."""
        return self.returncode == 0

    @property
    def command_line(self) -> str:
        return " ".join(self.args)


class ProcessRunner:
    """Run external commands with an explicit environment.

    Args:
        base_env: Environment every child starts from. Defaults to a
            snapshot of ``os.environ`` taken at construction time.
    """

    def __init__(self, base_env: Optional[Mapping[str, str]] = None) -> None:
        self._base_env: Dict[str, str] = dict(
            os.environ if base_env is None else base_env
        )

    @property
    def base_env(self) -> Dict[str, str]:
        """Copy of the environment children start from."""
        return dict(self._base_env)

    def build_env(self, overrides: Optional[Mapping[str, str]] = None) -> Dict[str, str]:
        """Return the base environment with ``overrides`` applied."""
        env = dict(self._base_env)
        if overrides:
            env.update(overrides)
        return env

    def run(
        self,
        args: Sequence[str],
        *,
        cwd: Optional[Union[str, Path]] = None,
        env: Optional[Mapping[str, str]] = None,
        capture: bool = False,
    ) -> CommandResult:
        """Run ``args`` and wait for it to finish.

        With ``capture=False`` the child inherits this process's stdout
        and stderr. A non-zero exit status is reported in the result,
        never raised.

        Args:
            args: Program and arguments.
            cwd: Working directory for the child.
            env: Environment overrides merged onto the base environment.
            capture: Capture stdout/stderr as text instead of inheriting.

        Returns:
            The :class:`CommandResult` of the finished process.

        Raises:
            ToolchainError: The program could not be started.
        """
        argv = [str(a) for a in args]
        if not argv:
            raise ToolchainError("Empty command")

        logger.debug("Running: %s (cwd=%s)", " ".join(argv), cwd or ".")
        if env:
            logger.debug("Environment overrides: %s", dict(env))

        pipe = subprocess.PIPE if capture else None
        try:
            completed = subprocess.run(
                argv,
                cwd=str(cwd) if cwd is not None else None,
                env=self.build_env(env),
                stdout=pipe,
                stderr=pipe,
                text=True,
                check=False,
            )
        except FileNotFoundError as exc:
            raise ToolchainError(
                f"Executable not found: {argv[0]}",
                command=argv,
            ) from exc
        except OSError as exc:
            raise ToolchainError(
                f"Failed to start {argv[0]}: {exc}",
                command=argv,
            ) from exc

        return CommandResult(
            args=argv,
            returncode=completed.returncode,
            stdout=completed.stdout or "",
            stderr=completed.stderr or "",
        )
