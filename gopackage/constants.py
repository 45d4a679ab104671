"""
Centralized constants for gopackage.

This module defines immutable configuration values used across gopackage,
including well-known file names, Go toolchain commands, and logging
formats. All values are intended to be treated as read-only.
"""

from typing import Final, Sequence

# ---------------------------------------------------------------------------
# Workspace layout
# ---------------------------------------------------------------------------

#: Directory (relative to the working directory) used as the build GOPATH.
DEFAULT_BUILD_DIR: Final[str] = "gopackage"

#: Snapshot file (relative to the working directory) holding the DepsRecord.
DEFAULT_RECORD_FILE: Final[str] = "gopackage.json"

#: Permissions for directories created inside the build GOPATH.
BUILD_DIR_MODE: Final[int] = 0o755

# ---------------------------------------------------------------------------
# Go toolchain
# ---------------------------------------------------------------------------

#: Go executable used when no other binary is configured.
DEFAULT_GO_BINARY: Final[str] = "go"

#: Environment variable holding the user's GOPATH.
GOPATH_ENV: Final[str] = "GOPATH"

#: Environment variable controlling where ``go install`` places binaries.
GOBIN_ENV: Final[str] = "GOBIN"

#: Arguments used to fetch a dependency without building it.
GO_GET_ARGS: Final[Sequence[str]] = ("get", "-d")

#: Arguments used to build and install a target package.
GO_INSTALL_ARGS: Final[Sequence[str]] = ("install",)

# ---------------------------------------------------------------------------
# Collection policy
# ---------------------------------------------------------------------------

#: Whether a single failed toolchain query aborts dependency collection.
DEFAULT_STRICT_COLLECTION: Final[bool] = False

# ---------------------------------------------------------------------------
# Security constraints
# ---------------------------------------------------------------------------

#: Maximum allowed size (in bytes) when reading the record file.
MAX_FILE_SIZE: Final[int] = 10 * 1024 * 1024  # 10 MB

# ---------------------------------------------------------------------------
# Logging configuration
# ---------------------------------------------------------------------------

#: Timestamp format for verbose logging.
LOG_DATE_FORMAT: Final[str] = "%Y-%m-%d %H:%M:%S"

#: Default log format (non-verbose).
LOG_DEFAULT_FORMAT: Final[str] = "%(levelname)s: %(message)s"

#: Verbose log format including timestamp and logger name.
LOG_VERBOSE_FORMAT: Final[str] = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
