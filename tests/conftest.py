"""Shared fixtures for the gopackage test suite.

The Go toolchain is never executed: :class:`FakeGoRunner` answers the
``go list``, ``go env`` and ``go version`` queries from an in-memory
package table and records every invocation.
"""

from __future__ import annotations

import json
import logging
from typing import Any, Dict, Generator, List, Mapping, Optional, Sequence, Set

import pytest

from gopackage.core.runner import CommandResult, ProcessRunner

STANDARD_LIBRARY = {"fmt", "os", "io", "errors", "sort", "strings", "sync", "unicode"}


class FakeGoRunner(ProcessRunner):
    """In-memory stand-in for the ``go`` command.

    Args:
        packages: Import path -> transitive imports for loadable packages.
        version: Value reported by ``go env GOVERSION``.
        broken: Import paths whose ``go list`` fails.
        exit_codes: Target -> exit status for ``go get`` / ``go install``.
    """

    def __init__(
        self,
        packages: Optional[Mapping[str, Sequence[str]]] = None,
        *,
        version: str = "go1.21.3",
        broken: Optional[Set[str]] = None,
        exit_codes: Optional[Mapping[str, int]] = None,
        base_env: Optional[Mapping[str, str]] = None,
    ) -> None:
        super().__init__(base_env if base_env is not None else {"GOPATH": "/home/dev/go"})
        self.packages: Dict[str, List[str]] = {
            k: list(v) for k, v in (packages or {}).items()
        }
        self.version = version
        self.broken: Set[str] = set(broken or ())
        self.exit_codes: Dict[str, int] = dict(exit_codes or {})
        self.calls: List[Dict[str, Any]] = []

    def run(self, args, *, cwd=None, env=None, capture=False) -> CommandResult:
        argv = [str(a) for a in args]
        self.calls.append(
            {"args": argv, "cwd": cwd, "env": dict(env or {}), "capture": capture}
        )
        sub = argv[1:]

        if sub[:2] == ["list", "-json"]:
            return self._list(argv, sub[2])
        if sub == ["env", "GOVERSION"]:
            return CommandResult(argv, 0, self.version + "\n", "")
        if sub == ["version"]:
            return CommandResult(argv, 0, f"go version {self.version} linux/amd64\n", "")

        return CommandResult(argv, self.exit_codes.get(argv[-1], 0))

    def _list(self, argv: List[str], path: str) -> CommandResult:
        if path in self.broken:
            return CommandResult(argv, 1, "", f"can't load package: package {path}: not found\n")

        info: Dict[str, Any] = {"ImportPath": path}
        if path in STANDARD_LIBRARY:
            info.update({"Standard": True, "Goroot": True})
        info["Deps"] = self.packages.get(path, [])
        return CommandResult(argv, 0, json.dumps(info, indent="\t") + "\n", "")

    def calls_for(self, subcommand: str) -> List[Dict[str, Any]]:
        return [c for c in self.calls if c["args"][1] == subcommand]


@pytest.fixture
def fake_runner() -> FakeGoRunner:
    """FakeGoRunner with the two-command example application."""
    return FakeGoRunner(
        {
            "app/cmd1": ["fmt", "github.com/x/a"],
            "app/cmd2": ["github.com/x/b", "os"],
        }
    )


@pytest.fixture(autouse=True)
def clean_logger_state() -> Generator[None, None, None]:
    """Reset the gopackage logger before and after a test."""
    root_logger = logging.getLogger("gopackage")
    root_logger.handlers.clear()
    root_logger.setLevel(logging.NOTSET)
    root_logger.propagate = True

    yield

    root_logger.handlers.clear()
    root_logger.setLevel(logging.NOTSET)
    root_logger.propagate = True


@pytest.fixture(autouse=True)
def clean_console_state() -> Generator[None, None, None]:
    """Re-allow colored console output after a test switched it off."""
    from gopackage.utils.console import reconfigure_console

    yield

    reconfigure_console(color=True)
