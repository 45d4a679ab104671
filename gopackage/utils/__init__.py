"""
Utility helpers for gopackage.

This package provides reusable utilities used across gopackage, including:

- Console output helpers (Rich-based)
- Logging configuration and retrieval
- Filesystem safety helpers
- Go version comparison

Only symbols listed in ``__all__`` are considered part of the public API.
"""

from __future__ import annotations

# ---------------------------------------------------------------------------
# Filesystem utilities
# ---------------------------------------------------------------------------

from gopackage.utils.filesystem import (
    ensure_directory,
    safe_read_file,
    safe_write_file,
)

# ---------------------------------------------------------------------------
# Logging utilities
# ---------------------------------------------------------------------------

from gopackage.utils.logger import (
    get_logger,
    setup_logging,
)

# ---------------------------------------------------------------------------
# Console utilities
# ---------------------------------------------------------------------------

from gopackage.utils.console import (
    confirm,
    get_raw_console,
    print_error,
    print_info,
    print_success,
    print_table,
    print_warning,
    reconfigure_console,
)

# ---------------------------------------------------------------------------
# Version utilities
# ---------------------------------------------------------------------------

from gopackage.utils.version_utils import (
    is_development_version,
    parse_go_version,
    satisfies,
)

# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------

__all__ = [
    # Console
    "confirm",
    "print_info",
    "print_error",
    "print_table",
    "print_success",
    "print_warning",
    "get_raw_console",
    "reconfigure_console",
    # Logging
    "get_logger",
    "setup_logging",
    # Filesystem
    "safe_read_file",
    "safe_write_file",
    "ensure_directory",
    # Version utilities
    "satisfies",
    "parse_go_version",
    "is_development_version",
]
