"""
Shared context object for gopackage CLI commands.

This module defines the global Click context used to share configuration
and runtime options across CLI subcommands.
"""

from __future__ import annotations

from pathlib import Path
from typing import Mapping, Optional

import click

from gopackage.config import GoPackageConfig
from gopackage.core import GoPaths, GoToolchain, ProcessRunner, RecordStore, Workspace


class GoPackageContext:
    """Global context object for gopackage CLI commands.

    An instance of this class is created once per CLI invocation and
    passed to commands using Click's context mechanism.

    Attributes:
        config_path: Path to the gopackage configuration file, if provided.
        verbose: Verbosity level (0=WARNING, 1=INFO, 2+=DEBUG).
        color: Whether colored terminal output is enabled.
        config: Loaded configuration (defaults until the group callback runs).
    """

    __slots__ = ("config_path", "verbose", "color", "config")

    def __init__(self) -> None:
        self.config_path: Optional[Path] = None
        self.verbose: int = 0
        self.color: bool = True
        self.config: GoPackageConfig = GoPackageConfig()

    def workspace(
        self,
        *,
        cwd: Optional[Path] = None,
        environ: Optional[Mapping[str, str]] = None,
    ) -> Workspace:
        """Build a :class:`Workspace` for ``cwd`` from the loaded configuration.

        Raises:
            EnvironmentConfigError: ``GOPATH`` is not set.
        """
        base = cwd or Path.cwd()
        runner = ProcessRunner(environ)
        paths = GoPaths.from_environment(
            runner.base_env, cwd=base, build_dir=self.config.build_dir
        )
        toolchain = GoToolchain(runner, go_binary=self.config.go_binary, cwd=base)
        store = RecordStore(self.config.record_file, base_dir=base)
        return Workspace(toolchain, store, paths, cwd=base)


#: Click decorator for injecting :class:`GoPackageContext` into commands.
pass_context = click.make_pass_decorator(GoPackageContext, ensure=True)
