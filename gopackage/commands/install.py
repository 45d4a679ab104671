"""Install command implementation for gopackage.

Builds every package stored in the record with ``go install``. Imports
are resolved from the build GOPATH first and the user's GOPATH second;
each binary is placed in ``<build GOPATH>/<binary name>/``.

The installed Go version must be equal to or newer than the version the
record was loaded with. On a mismatch the user is asked whether to build
anyway, unless ``--force`` is given.
"""

from __future__ import annotations

import click

from gopackage.context import GoPackageContext, pass_context
from gopackage.exceptions import VersionMismatchError
from gopackage.utils import (
    confirm,
    get_logger,
    print_info,
    print_success,
    print_warning,
)

logger = get_logger("commands.install")


@click.command()
@click.option(
    "--force",
    is_flag=True,
    help="Build even if the installed Go version is older than the recorded one.",
)
@pass_context
def install(ctx: GoPackageContext, force: bool) -> None:
    """Build the recorded packages against the build GOPATH."""
    workspace = ctx.workspace()
    record = workspace.read()

    if not force:
        try:
            actual = workspace.check_version(record)
            logger.info("Go version %s satisfies %s", actual, record.go_version)
        except VersionMismatchError as exc:
            print_warning(
                f"Installed Go {exc.actual} does not satisfy the recorded "
                f"minimum {exc.required}"
            )
            if not confirm("Build anyway?"):
                raise

    results = workspace.install(record, check_version=False)

    for package, result in zip(record.packages, results):
        if result.ok:
            print_info(f"{package} -> {workspace.paths.bin_dir(package)}")

    failed = [package for package, result in zip(record.packages, results) if not result.ok]
    if failed:
        print_warning(f"Failed to build {len(failed)} package(s): {', '.join(failed)}")
    else:
        print_success(f"Built {len(results)} package(s)")
