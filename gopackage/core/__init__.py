"""
Core functionality exports for gopackage.

Importing from here keeps user-facing imports clean and stable:

    from gopackage.core import DependencyCollector, GoToolchain
"""

from __future__ import annotations

from gopackage.core.runner import CommandResult, ProcessRunner
from gopackage.core.toolchain import GoToolchain
from gopackage.core.collector import DependencyCollector, SkippedEntry
from gopackage.core.store import RecordStore
from gopackage.core.workspace import GoPaths, Workspace

__all__ = [
    "CommandResult",
    "ProcessRunner",
    "GoToolchain",
    "DependencyCollector",
    "SkippedEntry",
    "RecordStore",
    "GoPaths",
    "Workspace",
]
