"""
Command-line interface for gopackage.

This module provides the main CLI entry point and handles global options,
configuration loading, and command registration.
"""

from __future__ import annotations

import sys
import logging
from pathlib import Path
from typing import Optional

import click

from gopackage.config import load_config
from gopackage.__version__ import __version__
from gopackage.context import GoPackageContext
from gopackage.exceptions import ConfigError, GoPackageError
from gopackage.utils.logger import get_logger, setup_logging
from gopackage.utils.console import print_error, print_warning, reconfigure_console

logger = get_logger("cli")


@click.group(context_settings={"help_option_names": ["-h", "--help"]})
@click.option(
    "--config",
    "-c",
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
    help="Path to configuration file.",
    envvar="GOPACKAGE_CONFIG",
)
@click.option(
    "--verbose",
    "-v",
    count=True,
    help="Increase verbosity (can be repeated: -v, -vv).",
)
@click.option(
    "--color/--no-color",
    default=True,
    help="Enable or disable colored output.",
    envvar="GOPACKAGE_COLOR",
)
@click.version_option(
    version=__version__,
    prog_name="gopackage",
    message="%(prog)s %(version)s",
)
@click.pass_context
def cli(
    ctx: click.Context,
    config: Optional[Path],
    verbose: int,
    color: bool,
) -> None:
    """gopackage: record, vendorize and rebuild Go binary dependencies.

    \b
    Available commands:
      gopackage load PKG...   Record the third-party dependencies of PKG
      gopackage show          Show the stored record
      gopackage get           Download recorded dependencies into ./gopackage
      gopackage install       Build the recorded packages against ./gopackage

    \b
    Examples:
      gopackage load github.com/acme/app/cmd/server
      gopackage get
      gopackage -v install

    Use ``gopackage COMMAND --help`` for command-specific options.
    """
    _configure_logging(verbose, color)

    try:
        loaded_config = load_config(config)
    except ConfigError as exc:
        print_error(str(exc))
        raise SystemExit(1) from exc

    gopackage_ctx = GoPackageContext()
    gopackage_ctx.config_path = config or loaded_config.source_path
    gopackage_ctx.color = color
    gopackage_ctx.verbose = verbose
    gopackage_ctx.config = loaded_config
    ctx.obj = gopackage_ctx

    reconfigure_console(color=color)

    logger.debug("gopackage v%s", __version__)
    logger.debug("Config path: %s", gopackage_ctx.config_path)
    logger.debug("Configuration: %s", loaded_config.to_log_dict())
    logger.debug("Verbosity: %s | Color: %s", verbose, color)


def _configure_logging(verbose: int, color: bool = True) -> None:
    """Configure logging level based on verbosity flags."""
    if verbose <= 0:
        level = logging.WARNING
    elif verbose == 1:
        level = logging.INFO
    else:
        level = logging.DEBUG

    setup_logging(level=level, verbose=verbose > 1, color=color)
    logger.debug("Logging initialized at %s level", logging.getLevelName(level))


# Register CLI subcommands
from gopackage.commands.get import get  # noqa: E402
from gopackage.commands.install import install  # noqa: E402
from gopackage.commands.load import load  # noqa: E402
from gopackage.commands.show import show  # noqa: E402

cli.add_command(load)
cli.add_command(show)
cli.add_command(get)
cli.add_command(install)


def main() -> int:
    """Main entry point for the gopackage CLI.

    Returns:
        Exit code:
            0   Success
            1   Unhandled or application error
            2   Usage error (Click)
            130 Interrupted by user (Ctrl+C)
    """
    try:
        cli(standalone_mode=False)
        return 0

    except click.ClickException as exc:
        exc.show()
        return exc.exit_code

    except click.exceptions.Exit as exc:
        return exc.exit_code

    except SystemExit as exc:
        return exc.code if isinstance(exc.code, int) else 1

    except GoPackageError as exc:
        print_error(str(exc))
        logger.debug(
            "GoPackageError details: %s",
            exc.details or "<none>",
            exc_info=True,
        )
        return 1

    except (KeyboardInterrupt, click.exceptions.Abort):
        print_warning("\nOperation cancelled by user")
        return 130

    except Exception as exc:
        print_error(f"Unexpected error: {exc}")
        logger.exception("Unhandled exception in CLI")
        return 1


if __name__ == "__main__":
    sys.exit(main())
