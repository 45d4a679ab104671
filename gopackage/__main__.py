"""
Executable module for gopackage.

Running:
    python -m gopackage

is equivalent to:
    gopackage

This module simply forwards execution to the CLI entrypoint defined in
`gopackage.cli`.
"""

from __future__ import annotations

import sys


def main() -> int:
    """
    Main entrypoint when executing `python -m gopackage`.

    Returns:
        Exit code returned by the CLI.
    """
    try:
        # Import lazily so dependencies are only loaded during CLI use
        from gopackage.cli import main as cli_main
    except ImportError as exc:
        _print_startup_error(exc)
        return 1

    return cli_main()


def _print_startup_error(exc: ImportError) -> None:
    """Report a broken installation on stderr."""
    sys.stderr.write("gopackage CLI could not be started.\n")
    sys.stderr.write(f"Python version : {sys.version}\n")
    try:
        from gopackage.__version__ import __version__

        sys.stderr.write(f"gopackage version: {__version__}\n")
    except ImportError:
        sys.stderr.write("gopackage version: <unknown>\n")
    sys.stderr.write("\n")
    sys.stderr.write(f"ImportError: {exc}\n")


if __name__ == "__main__":
    sys.exit(main())
