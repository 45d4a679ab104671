"""Load, vendorize and rebuild operations for gopackage.

A :class:`Workspace` ties the pieces together for one working directory:

- :meth:`Workspace.load` collects the dependency set of the targets,
  stamps it with the installed Go version and persists the record.
- :meth:`Workspace.get` downloads every recorded dependency into the
  build GOPATH (``go get -d``).
- :meth:`Workspace.install` checks the Go version gate, then builds each
  target with ``go install`` into its own ``<build GOPATH>/<binary>/``
  directory, resolving imports from the build GOPATH first and the user's
  GOPATH second.

GOPATH and GOBIN are handed to each ``go`` process as explicit
environment overrides. A failed ``go get`` or ``go install`` is logged and
reported in the returned results; it does not stop the remaining runs.
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path
from typing import List, Mapping, Optional, Sequence, Union

from gopackage.constants import (
    DEFAULT_BUILD_DIR,
    DEFAULT_STRICT_COLLECTION,
    GO_GET_ARGS,
    GO_INSTALL_ARGS,
    GOBIN_ENV,
    GOPATH_ENV,
)
from gopackage.core.collector import DependencyCollector, SkippedEntry
from gopackage.core.runner import CommandResult
from gopackage.core.store import RecordStore
from gopackage.core.toolchain import GoToolchain
from gopackage.exceptions import EnvironmentConfigError, VersionMismatchError
from gopackage.models import DepsRecord
from gopackage.utils.filesystem import ensure_directory
from gopackage.utils.logger import get_logger
from gopackage.utils.version_utils import satisfies

logger = get_logger("workspace")

__all__ = ["GoPaths", "Workspace"]


@dataclass(frozen=True)
class GoPaths:
    """GOPATH locations used by a workspace.

    Attributes:
        build_gopath: Isolated GOPATH dependencies are vendorized into.
        current_gopath: The user's own GOPATH.
    """

    build_gopath: Path
    current_gopath: str

    @classmethod
    def from_environment(
        cls,
        environ: Optional[Mapping[str, str]] = None,
        *,
        cwd: Optional[Union[str, Path]] = None,
        build_dir: str = DEFAULT_BUILD_DIR,
    ) -> "GoPaths":
        """Derive the paths from ``GOPATH`` and the working directory.

        Raises:
            EnvironmentConfigError: ``GOPATH`` is unset or empty.
        """
        env = os.environ if environ is None else environ
        gopath = env.get(GOPATH_ENV, "")
        if not gopath:
            raise EnvironmentConfigError(
                f"{GOPATH_ENV} is not set", variable=GOPATH_ENV
            )

        base = Path(cwd) if cwd is not None else Path.cwd()
        return cls(build_gopath=(base / build_dir).absolute(), current_gopath=gopath)

    @property
    def install_gopath(self) -> str:
        """GOPATH for ``go install``: build GOPATH first, then the user's."""
        build = str(self.build_gopath)
        if build == self.current_gopath:
            return build
        return f"{build}{os.pathsep}{self.current_gopath}"

    def bin_dir(self, package: str) -> Path:
        """Directory ``go install`` places the binary of ``package`` in."""
        return self.build_gopath / DepsRecord.binary_name(package)


class Workspace:
    """Record and replay the dependencies of Go build targets.

    Args:
        toolchain: Toolchain used for queries and subcommands.
        store: Where the record is persisted.
        paths: GOPATH layout of this workspace.
        cwd: Working directory for ``go`` subcommands.
    """

    def __init__(
        self,
        toolchain: GoToolchain,
        store: RecordStore,
        paths: GoPaths,
        *,
        cwd: Optional[Union[str, Path]] = None,
    ) -> None:
        self.toolchain = toolchain
        self.store = store
        self.paths = paths
        self.cwd = cwd
        self.skipped: List[SkippedEntry] = []

    # ------------------------------------------------------------------
    # Load
    # ------------------------------------------------------------------

    def load(
        self,
        packages: Sequence[str],
        *,
        strict: bool = DEFAULT_STRICT_COLLECTION,
    ) -> DepsRecord:
        """Collect the dependencies of ``packages`` and persist the record.

        Raises:
            CollectionError: In strict mode, when a query fails.
            ToolchainError: The Go version cannot be determined.
            FileOperationError: The record cannot be written.
        """
        collector = DependencyCollector(self.toolchain, strict=strict)
        dependencies = collector.collect(packages)
        self.skipped = list(collector.skipped)

        record = DepsRecord(
            packages=list(packages),
            go_version=self.toolchain.version(),
            dependencies=dependencies,
        )
        self.store.write(record)
        return record

    def read(self) -> DepsRecord:
        """Return the persisted record without recomputing it."""
        return self.store.read()

    # ------------------------------------------------------------------
    # Version gate
    # ------------------------------------------------------------------

    def check_version(self, record: DepsRecord) -> str:
        """Ensure the installed toolchain satisfies ``record.go_version``.

        Returns:
            The installed Go version.

        Raises:
            VersionMismatchError: The installed version is older than, or
                not comparable with, the recorded one.
        """
        actual = self.toolchain.version()
        if not satisfies(record.go_version, actual):
            raise VersionMismatchError(
                "Go version is not satisfied",
                required=record.go_version,
                actual=actual,
            )
        return actual

    # ------------------------------------------------------------------
    # Replay
    # ------------------------------------------------------------------

    def install(
        self,
        record: DepsRecord,
        *,
        check_version: bool = True,
    ) -> List[CommandResult]:
        """Build every target of ``record`` into its own bin directory.

        Raises:
            VersionMismatchError: The version gate failed.
            FileOperationError: A bin directory cannot be created.
        """
        if check_version:
            self.check_version(record)

        results: List[CommandResult] = []
        for package in record.packages:
            bin_dir = ensure_directory(self.paths.bin_dir(package))
            env = {
                GOPATH_ENV: self.paths.install_gopath,
                GOBIN_ENV: f"{bin_dir}{os.sep}",
            }
            results.append(self._go(GO_INSTALL_ARGS, package, env))

        return results

    def get(self, record: DepsRecord) -> List[CommandResult]:
        """Download every recorded dependency into the build GOPATH.

        Raises:
            FileOperationError: The build GOPATH cannot be created.
        """
        ensure_directory(self.paths.build_gopath)
        env = {GOPATH_ENV: str(self.paths.build_gopath)}

        return [self._go(GO_GET_ARGS, dep, env) for dep in record.dependencies]

    def _go(
        self,
        subcommand: Sequence[str],
        target: str,
        env: Mapping[str, str],
    ) -> CommandResult:
        """Run one streaming ``go`` subcommand, logging a failed exit."""
        argv = [self.toolchain.go_binary, *subcommand, target]
        logger.info("%s", " ".join(argv))

        result = self.toolchain.runner.run(argv, cwd=self.cwd, env=env)
        if not result.ok:
            logger.error(
                "'%s' exited with status %d", result.command_line, result.returncode
            )
        return result
