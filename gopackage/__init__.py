"""
gopackage: record and replay the third-party dependencies of Go binaries.

gopackage inspects a set of Go build targets, records their third-party
dependency set together with the Go version they were loaded with, and
later replays that record to vendorize the dependencies into an isolated
GOPATH or to rebuild the binaries against it.

Features include:
    • Transitive import collection with standard library filtering
    • Minimum Go version gate for rebuilds
    • Snapshot file (``gopackage.json``) for reproducible rebuilds
    • Isolated build GOPATH per project
"""

from __future__ import annotations

from gopackage.__version__ import __version__

# ---------------------------------------------------------------------------
# Package Metadata
# ---------------------------------------------------------------------------

__author__ = "gopackage Contributors"
__license__ = "Apache-2.0"
__description__ = "Record, vendorize and rebuild Go binary dependencies."

# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------

from gopackage.models import DepsRecord
from gopackage.core import DependencyCollector, GoToolchain, RecordStore, Workspace
from gopackage.utils.version_utils import satisfies

__all__ = [
    "__version__",
    "DepsRecord",
    "DependencyCollector",
    "GoToolchain",
    "RecordStore",
    "Workspace",
    "satisfies",
]
